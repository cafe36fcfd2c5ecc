"""Constraint generators for parameterized types.

A constraint generator receives the parameters of a parameterized type and
returns the predicate of the new type. Predicates are frozen dataclasses
bound to their parameter at generation time, so two generations over the
same parameter compare equal and carry no mutable state.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Tuple

from ..errors import ParameterizationError
from ..values import ValueKind, classify

if TYPE_CHECKING:
    from .types import TypeDefinition


@dataclass(frozen=True)
class ElementwiseConstraint:
    """Container of a given kind whose every element satisfies a type.

    The element type's own predicate decides each element. Elements are
    checked in container order and checking stops at the first failure.
    An empty container satisfies the constraint.

    Attributes:
        kind: Container representation the value must have
        element: Type every element must satisfy
    """
    kind: ValueKind
    element: "TypeDefinition"

    def __call__(self, value: Any) -> bool:
        if classify(value) is not self.kind:
            return False
        check = self.element.validate
        return all(check(item) for item in value)


@dataclass(frozen=True)
class ValuewiseConstraint:
    """Mapping whose every value satisfies a type (keys are unchecked)."""
    element: "TypeDefinition"

    def __call__(self, value: Any) -> bool:
        if classify(value) is not ValueKind.MAPPING:
            return False
        check = self.element.validate
        return all(check(item) for item in value.values())


@dataclass(frozen=True)
class InstanceConstraint:
    """Value is an instance of a Python class."""
    cls: type

    def __call__(self, value: Any) -> bool:
        return isinstance(value, self.cls)


def _single_type_parameter(family: str, params: Tuple[Any, ...]) -> "TypeDefinition":
    """Unpack exactly one TypeDefinition parameter."""
    if len(params) != 1:
        raise ParameterizationError(f"{family} takes exactly one type parameter, got {len(params)}")
    element = params[0]
    if not hasattr(element, "validate"):
        raise ParameterizationError(
            f"{family} parameter must be a type definition, got {type(element).__name__}"
        )
    return element


def elementwise(kind: ValueKind, family: str) -> Callable[..., ElementwiseConstraint]:
    """Generator for "container of kind where every element is T"."""
    def generate(*params: Any) -> ElementwiseConstraint:
        return ElementwiseConstraint(kind, _single_type_parameter(family, params))
    return generate


def valuewise(family: str) -> Callable[..., ValuewiseConstraint]:
    """Generator for "mapping whose values are T"."""
    def generate(*params: Any) -> ValuewiseConstraint:
        return ValuewiseConstraint(_single_type_parameter(family, params))
    return generate


def instance_of(*params: Any) -> InstanceConstraint:
    """Generator for InstanceOf[cls]."""
    if len(params) != 1 or not isinstance(params[0], type):
        raise ParameterizationError(f"InstanceOf takes exactly one class parameter, got {params!r}")
    return InstanceConstraint(params[0])


def inherit_base_coercion(base: "TypeDefinition", params: Tuple[Any, ...]):
    """Coercion generator giving every parameterization the base's rules."""
    return base.coercion
