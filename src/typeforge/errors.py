"""Exception types raised by typeforge.

Each error also derives from the closest builtin exception so callers that
already catch ``KeyError``/``ValueError``/``TypeError`` keep working.

Coercion transforms are never wrapped: whatever a transform raises reaches
the caller of ``coerce`` unchanged.
"""

from typing import Any, Iterable


class TypeforgeError(Exception):
    """Base class for all typeforge errors."""


class DuplicateNameError(TypeforgeError, ValueError):
    """A type name is already registered in this registry scope."""

    def __init__(self, name: str, registry: str):
        self.name = name
        self.registry = registry
        super().__init__(f"Type '{name}' is already registered in registry '{registry}'")


class UnknownTypeError(TypeforgeError, KeyError):
    """A type name could not be resolved."""

    def __init__(self, name: str, available: Iterable[str] = ()):
        self.name = name
        self.available = sorted(available)
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown type: {self.name}. Available: {self.available}"


class ParameterizationError(TypeforgeError, TypeError):
    """A type was parameterized with unsupported or malformed parameters."""


class ConstraintViolation(TypeforgeError, TypeError):
    """A value does not satisfy a type constraint."""

    def __init__(self, type_name: str, value: Any, message: str = ""):
        self.type_name = type_name
        self.value = value
        super().__init__(message or f"Value {value!r} did not pass type constraint '{type_name}'")


class RegistryFrozenError(TypeforgeError, RuntimeError):
    """A frozen registry was asked to register or extend."""
