"""Public API for typeforge.

This module provides the complete public API: the constraint machinery,
the foundational and catalog type libraries, value representations, and
the host attribute adapter.
"""

# Constraint machinery
from .constraints import (
    TypeDefinition,
    ParameterizedType,
    CoercionRule,
    CoercionChain,
    TypeRegistry,
    coerce_all,
)

# Errors
from .errors import (
    TypeforgeError,
    DuplicateNameError,
    UnknownTypeError,
    ParameterizationError,
    ConstraintViolation,
    RegistryFrozenError,
)

# Values
from .values import Collection, ValueKind, classify

# Type libraries
from .standard import STANDARD
from .catalog import (
    LIBRARY,
    CollectionType,
    FileHandleType,
    FileHandleListType,
    build_registry,
    resolve,
)

# Host integration
from .attribute import Attribute

# Import utilities
from .utils.imports import load_symbol

# Version
try:
    from importlib.metadata import version
    __version__ = version("typeforge")
except Exception:
    __version__ = "0.1.0"

# Public API Export List
__all__ = [
    # Constraint machinery
    "TypeDefinition",
    "ParameterizedType",
    "CoercionRule",
    "CoercionChain",
    "TypeRegistry",
    "coerce_all",
    # Errors
    "TypeforgeError",
    "DuplicateNameError",
    "UnknownTypeError",
    "ParameterizationError",
    "ConstraintViolation",
    "RegistryFrozenError",
    # Values
    "Collection",
    "ValueKind",
    "classify",
    # Type libraries
    "STANDARD",
    "LIBRARY",
    "CollectionType",
    "FileHandleType",
    "FileHandleListType",
    "build_registry",
    "resolve",
    # Host integration
    "Attribute",
    # Utilities
    "load_symbol",
    # Version
    "__version__",
]
