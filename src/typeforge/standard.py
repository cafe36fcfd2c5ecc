"""Foundational type library.

Primitive types every other library extends rather than redefines:

- Any, Undef (None), Defined
- Bool, Str, Num, Int (bool is not a number here)
- Object, InstanceOf[cls]
- ArrayRef[T] (plain list or tuple), HashRef[T] (plain dict)

None of these carry coercions. The STANDARD registry is frozen at import.
"""

import numbers

from .constraints import (
    TypeDefinition,
    TypeRegistry,
    elementwise,
    instance_of,
    valuewise,
)
from .values import ValueKind, classify

_BUILTIN_SCALARS = (type(None), bool, int, float, complex, str, bytes, list, tuple, dict, set, frozenset)


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


Any = TypeDefinition("Any", doc="Any value at all.")

Undef = TypeDefinition("Undef", parent=Any, predicate=lambda v: v is None, doc="None.")

Defined = TypeDefinition("Defined", parent=Any, predicate=lambda v: v is not None, doc="Anything but None.")

Bool = TypeDefinition("Bool", parent=Defined, predicate=lambda v: isinstance(v, bool), doc="True or False.")

Str = TypeDefinition("Str", parent=Defined, predicate=lambda v: isinstance(v, str), doc="A text string.")

Num = TypeDefinition("Num", parent=Defined, predicate=_is_number, doc="A real number (not bool).")

Int = TypeDefinition(
    "Int",
    parent=Num,
    predicate=lambda v: isinstance(v, numbers.Integral),
    doc="An integer (not bool).",
)

Object = TypeDefinition(
    "Object",
    parent=Defined,
    predicate=lambda v: not isinstance(v, _BUILTIN_SCALARS),
    doc="An instance of a non-builtin class.",
)

InstanceOf = TypeDefinition(
    "InstanceOf",
    parent=Object,
    constraint_generator=instance_of,
    doc="InstanceOf[cls]: an object of class cls.",
)

ArrayRef = TypeDefinition(
    "ArrayRef",
    parent=Defined,
    predicate=lambda v: classify(v) is ValueKind.SEQUENCE,
    constraint_generator=elementwise(ValueKind.SEQUENCE, "ArrayRef"),
    doc="A plain list or tuple; ArrayRef[T] checks every element against T.",
)

HashRef = TypeDefinition(
    "HashRef",
    parent=Defined,
    predicate=lambda v: classify(v) is ValueKind.MAPPING,
    constraint_generator=valuewise("HashRef"),
    doc="A plain dict; HashRef[T] checks every value against T.",
)


def build_standard() -> TypeRegistry:
    """Create a registry holding the foundational types."""
    registry = TypeRegistry("standard")
    for definition in (Any, Undef, Defined, Bool, Str, Num, Int, Object, InstanceOf, ArrayRef, HashRef):
        registry.register(definition)
    return registry


STANDARD = build_standard().freeze()
