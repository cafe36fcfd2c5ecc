"""Constraint and coercion machinery.

This module provides the generic building blocks: type definitions,
parameterized types, ordered coercion chains, and the type registry.
"""

from .coercion import (
    CoercionRule,
    CoercionChain,
    coerce_all,
)
from .types import (
    TypeDefinition,
    ParameterizedType,
)
from .generators import (
    ElementwiseConstraint,
    ValuewiseConstraint,
    InstanceConstraint,
    elementwise,
    valuewise,
    instance_of,
    inherit_base_coercion,
)
from .registry import TypeRegistry

__all__ = [
    # Coercion
    "CoercionRule",
    "CoercionChain",
    "coerce_all",
    # Types
    "TypeDefinition",
    "ParameterizedType",
    # Generators
    "ElementwiseConstraint",
    "ValuewiseConstraint",
    "InstanceConstraint",
    "elementwise",
    "valuewise",
    "instance_of",
    "inherit_base_coercion",
    # Registry
    "TypeRegistry",
]
