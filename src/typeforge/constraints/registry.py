"""Registry of named type definitions.

A TypeRegistry maps names to TypeDefinitions. Registries can extend other
registries so that a library of types resolves the foundational types
without qualification. Extension shares definitions; nothing is copied.

Registration is expected at startup. ``register``/``extend`` hold a lock
so late registration from several threads stays consistent; ``resolve``
only reads.
"""

import logging
import re
import threading
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from ..errors import DuplicateNameError, RegistryFrozenError, UnknownTypeError
from .types import TypeDefinition

logger = logging.getLogger(__name__)

_TOKEN = re.compile(r"\s*(?:([A-Za-z_][A-Za-z0-9_]*)|(.))")


class TypeRegistry:
    """Catalog of type definitions with parameterization lookup.

    Example:
        >>> registry = TypeRegistry("mylib")
        >>> registry.extend(STANDARD)
        >>> registry.register(TypeDefinition("Port", parent=registry.resolve("Int")))
        >>> registry.resolve("ArrayRef", "Port").validate([80, 443])
        True
    """

    def __init__(self, name: str = "main"):
        self.name = name
        self._definitions: Dict[str, TypeDefinition] = {}
        self._extended: List["TypeRegistry"] = []
        self._parameterized: Dict[Tuple[Any, ...], TypeDefinition] = {}
        self._lock = threading.RLock()
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "TypeRegistry":
        """Make the registry read-only. Returns self for chaining."""
        with self._lock:
            self._frozen = True
        logger.debug(f"Registry '{self.name}' frozen with {len(self)} types")
        return self

    def _check_mutable(self, operation: str) -> None:
        if self._frozen:
            raise RegistryFrozenError(f"Cannot {operation} frozen registry '{self.name}'")

    def register(self, definition: TypeDefinition) -> TypeDefinition:
        """Add definition under its name.

        Raises:
            DuplicateNameError: If the name exists here or in an extended registry
            RegistryFrozenError: If the registry is frozen
        """
        if not isinstance(definition, TypeDefinition):
            raise TypeError(f"Expected TypeDefinition, got {type(definition).__name__}")
        with self._lock:
            self._check_mutable("register into")
            if self._lookup(definition.name) is not None:
                raise DuplicateNameError(definition.name, self.name)
            self._definitions[definition.name] = definition
        logger.debug(f"Registered type {definition.name} in '{self.name}'")
        return definition

    def declare(self, name: str, **kwargs: Any) -> TypeDefinition:
        """Create a TypeDefinition from keyword arguments and register it."""
        return self.register(TypeDefinition(name, **kwargs))

    def extend(self, other: "TypeRegistry") -> "TypeRegistry":
        """Make every definition of other resolvable from this registry.

        Extending the same registry twice is a no-op. Names both registries
        already share (e.g. both extend STANDARD) are not conflicts.

        Raises:
            DuplicateNameError: If other defines a name already present here
            RegistryFrozenError: If the registry is frozen
        """
        if other is self:
            raise ValueError(f"Registry '{self.name}' cannot extend itself")
        with self._lock:
            self._check_mutable("extend")
            if any(other is existing for existing in self._extended):
                return self
            for name in other.names():
                existing = self._lookup(name)
                if existing is not None and existing is not other._lookup(name):
                    raise DuplicateNameError(name, self.name)
            self._extended.append(other)
        logger.debug(f"Registry '{self.name}' extends '{other.name}'")
        return self

    def _lookup(self, name: str) -> Optional[TypeDefinition]:
        """Find name here, then in extended registries in order."""
        definition = self._definitions.get(name)
        if definition is not None:
            return definition
        for other in self._extended:
            definition = other._lookup(name)
            if definition is not None:
                return definition
        return None

    def resolve(self, name: str, *params: Any) -> TypeDefinition:
        """Look up a (possibly parameterized) type.

        Args:
            name: Type name, or a type expression such as "Collection[FileHandle]"
            *params: Parameters for the type; names are resolved in this registry

        Returns:
            The type definition

        Raises:
            UnknownTypeError: If a name is not registered
            ParameterizationError: If the type rejects the parameters
        """
        if "[" in name:
            if params:
                raise ValueError(f"Type expression '{name}' cannot take extra parameters")
            return self._resolve_expression(_parse_expression(name))

        definition = self._lookup(name)
        if definition is None:
            raise UnknownTypeError(name, self.names())
        if not params:
            return definition
        return self.parameterize(definition, *params)

    def parameterize(self, definition: TypeDefinition, *params: Any) -> TypeDefinition:
        """Parameterize definition, caching the result per (base, params)."""
        resolved = tuple(self.resolve(p) if isinstance(p, str) else p for p in params)
        if not resolved:
            return definition
        key = (definition, resolved)
        cached = self._parameterized.get(key)
        if cached is not None:
            return cached
        with self._lock:
            cached = self._parameterized.get(key)
            if cached is None:
                cached = definition.parameterize(*resolved)
                self._parameterized[key] = cached
        return cached

    def _resolve_expression(self, expression: Tuple[str, Tuple[Any, ...]]) -> TypeDefinition:
        name, params = expression
        resolved = tuple(self._resolve_expression(p) for p in params)
        return self.resolve(name, *resolved)

    def get(self, name: str, default: Optional[TypeDefinition] = None) -> Optional[TypeDefinition]:
        """Return the named definition, or default if absent."""
        try:
            return self.resolve(name)
        except UnknownTypeError:
            return default

    def own_names(self) -> List[str]:
        """Names registered directly in this registry, sorted."""
        return sorted(self._definitions)

    def names(self) -> List[str]:
        """All resolvable names (own and extended), sorted."""
        names = set(self._definitions)
        for other in self._extended:
            names.update(other.names())
        return sorted(names)

    @property
    def extended(self) -> Sequence["TypeRegistry"]:
        return tuple(self._extended)

    def __contains__(self, name: str) -> bool:
        return self._lookup(name) is not None

    def __len__(self) -> int:
        return len(self.names())

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __repr__(self) -> str:
        return f"TypeRegistry({self.name!r}, types={len(self)})"


def _parse_expression(text: str) -> Tuple[str, Tuple[Any, ...]]:
    """Parse "Name[Param, Other[Inner]]" into (name, params).

    Raises:
        ValueError: If the expression is malformed
    """
    tokens = []
    for match in _TOKEN.finditer(text.strip()):
        ident, symbol = match.groups()
        tokens.append(ident if ident is not None else symbol)
    position = 0

    def parse() -> Tuple[str, Tuple[Any, ...]]:
        nonlocal position
        if position >= len(tokens) or not _is_identifier(tokens[position]):
            raise ValueError(f"Malformed type expression: {text!r}")
        name = tokens[position]
        position += 1
        params = []
        if position < len(tokens) and tokens[position] == "[":
            position += 1
            while True:
                params.append(parse())
                if position >= len(tokens):
                    raise ValueError(f"Unclosed '[' in type expression: {text!r}")
                if tokens[position] == ",":
                    position += 1
                    continue
                if tokens[position] == "]":
                    position += 1
                    break
                raise ValueError(f"Unexpected {tokens[position]!r} in type expression: {text!r}")
        return name, tuple(params)

    result = parse()
    if position != len(tokens):
        raise ValueError(f"Trailing input in type expression: {text!r}")
    return result


def _is_identifier(token: str) -> bool:
    return token[:1].isalpha() or token[:1] == "_"
