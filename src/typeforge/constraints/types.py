"""Core type definitions.

This module implements the two kinds of type definition:
- TypeDefinition: Named, immutable validity predicate plus coercion rules
- ParameterizedType: A type family instantiated with parameters

Definitions are frozen: the predicate and coercion chain of a definition
never change after construction. Adding coercions produces a new definition.
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional, Tuple, Union

from ..errors import ConstraintViolation, ParameterizationError
from .coercion import CoercionChain, CoercionRule, Predicate

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class TypeDefinition:
    """A named type: predicate, optional parent, and ordered coercions.

    Validation checks the parent first and then the type's own predicate.
    A definition without a predicate accepts whatever its parent accepts
    (or anything, at the root).

    Attributes:
        name: Identifier, unique within a registry
        parent: Type this one specializes
        predicate: Pure function deciding conformance
        coercion: Ordered coercion rules targeting this type
        constraint_generator: Makes the predicate for a parameterization;
            None means the type cannot be parameterized
        coercion_generator: Makes the coercion chain for a parameterization
            from (base, params); None means parameterizations have no coercion
        doc: Human-readable description
    """
    name: str
    parent: Optional["TypeDefinition"] = None
    predicate: Optional[Predicate] = None
    coercion: CoercionChain = field(default_factory=CoercionChain)
    constraint_generator: Optional[Callable[..., Predicate]] = None
    coercion_generator: Optional[Callable[["TypeDefinition", Tuple[Any, ...]], CoercionChain]] = None
    doc: str = ""

    def __post_init__(self):
        """Validate definition and normalize coercions."""
        if not self.name:
            raise ValueError("Type name cannot be empty")
        if self.predicate is not None and not callable(self.predicate):
            raise TypeError(f"Type {self.name}: predicate must be callable")
        if self.parent is not None and not isinstance(self.parent, TypeDefinition):
            raise TypeError(f"Type {self.name}: parent must be a TypeDefinition, got {type(self.parent).__name__}")
        if not isinstance(self.coercion, CoercionChain):
            object.__setattr__(self, "coercion", CoercionChain.of(*self.coercion))

    @property
    def display_name(self) -> str:
        """Name used in messages; includes parameters for parameterized types."""
        return self.name

    @property
    def is_parameterizable(self) -> bool:
        return self.constraint_generator is not None

    @property
    def is_parameterized(self) -> bool:
        return False

    @property
    def has_coercion(self) -> bool:
        return bool(self.coercion)

    def validate(self, value: Any) -> bool:
        """Check whether value satisfies this type.

        Never raises and never coerces.
        """
        if self.parent is not None and not self.parent.validate(value):
            return False
        if self.predicate is None:
            return True
        try:
            return bool(self.predicate(value))
        except Exception as e:
            logger.debug(f"Predicate of {self.display_name} raised {type(e).__name__}: {e}")
            return False

    check = validate

    def get_message(self, value: Any) -> str:
        """Explain why value fails this type (or that it passes)."""
        if self.validate(value):
            return f"Value {value!r} passes type constraint '{self.display_name}'"
        for ancestor in self.parents():
            if not ancestor.validate(value):
                return (
                    f"Value {value!r} did not pass type constraint '{self.display_name}' "
                    f"(failed parent '{ancestor.display_name}')"
                )
        return f"Value {value!r} did not pass type constraint '{self.display_name}'"

    def assert_valid(self, value: Any) -> Any:
        """Return value if it satisfies this type.

        Raises:
            ConstraintViolation: If value fails validation
        """
        if not self.validate(value):
            raise ConstraintViolation(self.display_name, value, self.get_message(value))
        return value

    def coerce(self, value: Any) -> Any:
        """Convert value to this type's canonical form where a rule allows.

        Values that already conform, and values no rule accepts, come back
        unchanged.
        """
        return self.coercion.coerce(self, value)

    def assert_coerce(self, value: Any) -> Any:
        """Coerce value, then require the result to conform.

        Raises:
            ConstraintViolation: If the coerced value still fails validation
        """
        return self.assert_valid(self.coerce(value))

    def parents(self) -> Iterator["TypeDefinition"]:
        """Iterate over the parent chain, nearest first."""
        current = self.parent
        while current is not None:
            yield current
            current = current.parent

    def is_a_type_of(self, other: Union["TypeDefinition", str]) -> bool:
        """Check whether this type is other or specializes it."""
        for candidate in (self, *self.parents()):
            if isinstance(other, str):
                if candidate.display_name == other or candidate.name == other:
                    return True
            elif candidate is other or candidate == other:
                return True
        return False

    def parameterize(self, *params: Any) -> "TypeDefinition":
        """Instantiate this type family with params.

        With no params the unparameterized definition itself is returned.

        Raises:
            ParameterizationError: If this type cannot be parameterized or
                the generator rejects params
        """
        if not params:
            return self
        if self.constraint_generator is None:
            raise ParameterizationError(f"Type {self.display_name} cannot be parameterized")

        predicate = self.constraint_generator(*params)
        if self.coercion_generator is not None:
            coercion = self.coercion_generator(self, params)
        else:
            coercion = CoercionChain()

        logger.debug(f"Parameterized {self.name} with {_parameter_names(params)}")
        return ParameterizedType(
            name=f"{self.name}[{_parameter_names(params)}]",
            parent=self,
            predicate=predicate,
            coercion=coercion,
            doc=self.doc,
            base=self,
            parameters=tuple(params),
        )

    def __getitem__(self, params: Any) -> "TypeDefinition":
        """Sugar for parameterize: ``Collection[Int]``."""
        if not isinstance(params, tuple):
            params = (params,)
        return self.parameterize(*params)

    def plus_coercions(self, *pairs: Union[CoercionRule, Tuple[Any, Any]]) -> "TypeDefinition":
        """Return a copy of this definition with extra coercion rules appended."""
        return dataclasses.replace(self, coercion=self.coercion.extend(*pairs))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.display_name}>"


@dataclass(frozen=True, eq=False)
class ParameterizedType(TypeDefinition):
    """A type family instantiated with parameters.

    The parent is always the unparameterized base, so a value must be a
    genuine instance of the base before the generated predicate runs.
    Two parameterizations of the same base with the same parameters
    compare equal.

    Attributes:
        base: The unparameterized family
        parameters: The parameters (usually TypeDefinitions)
    """
    base: Optional[TypeDefinition] = None
    parameters: Tuple[Any, ...] = ()

    def __post_init__(self):
        """Validate base and freeze parameters."""
        super().__post_init__()
        if self.base is None:
            raise ValueError(f"Parameterized type {self.name} requires a base")
        object.__setattr__(self, "parameters", tuple(self.parameters))

    @property
    def is_parameterized(self) -> bool:
        return True

    @property
    def is_parameterizable(self) -> bool:
        return False

    @property
    def element_type(self) -> Any:
        """First parameter, for single-parameter containers."""
        return self.parameters[0] if self.parameters else None

    def __eq__(self, other) -> bool:
        if not isinstance(other, ParameterizedType):
            return NotImplemented
        return (
            self.base is other.base
            and self.parameters == other.parameters
            and self.coercion == other.coercion
        )

    def __hash__(self) -> int:
        return hash((id(self.base), self.parameters))


def _parameter_names(params: Tuple[Any, ...]) -> str:
    """Render parameters for display names."""
    names = []
    for param in params:
        if isinstance(param, TypeDefinition):
            names.append(param.display_name)
        elif isinstance(param, type):
            names.append(param.__name__)
        else:
            names.append(repr(param))
    return ", ".join(names)
