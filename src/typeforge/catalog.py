"""Concrete type catalog: collections and file handles.

Three types built on the foundational library:

- Collection[T]: A typeforge.values.Collection, optionally with every
  element satisfying T. Coerces from a plain list/tuple (wrapped verbatim).
- FileHandle: A pathlib.Path. Coerces from a string path.
- FileHandleList: Collection[FileHandle]. Coerces, in order, from a
  Collection of strings, a plain sequence of strings, and a plain sequence
  of FileHandles.

Usage:
    >>> files = FileHandleListType.coerce(["a.txt", "b.txt"])
    >>> files
    Collection(PosixPath('a.txt'), PosixPath('b.txt'))
    >>> FileHandleListType.validate(files)
    True
"""

from pathlib import Path

from .constants import COLLECTION, FILE_HANDLE, FILE_HANDLE_LIST
from .constraints import (
    CoercionChain,
    TypeDefinition,
    TypeRegistry,
    elementwise,
    inherit_base_coercion,
)
from .standard import STANDARD
from .values import Collection, ValueKind, classify


def build_registry(base: TypeRegistry = STANDARD, name: str = "typeforge") -> TypeRegistry:
    """Create a registry with the catalog types, extending base.

    Args:
        base: Foundational registry providing Str, ArrayRef, InstanceOf
        name: Name of the new registry

    Returns:
        An unfrozen registry; callers may add types before freezing
    """
    registry = TypeRegistry(name)
    registry.extend(base)

    str_type = registry.resolve("Str")
    array_ref = registry.resolve("ArrayRef")

    collection = registry.register(TypeDefinition(
        COLLECTION,
        parent=registry.resolve("InstanceOf", Collection),
        predicate=lambda v: classify(v) is ValueKind.COLLECTION,
        coercion=CoercionChain.of(
            (array_ref, Collection.from_iterable),
        ),
        constraint_generator=elementwise(ValueKind.COLLECTION, COLLECTION),
        coercion_generator=inherit_base_coercion,
        doc="An ordered Collection; Collection[T] checks every element against T.",
    ))

    file_handle = registry.register(TypeDefinition(
        FILE_HANDLE,
        parent=registry.resolve("InstanceOf", Path),
        predicate=lambda v: classify(v) is ValueKind.FILE,
        coercion=CoercionChain.of(
            (str_type, Path),
        ),
        doc="A pathlib.Path file handle.",
    ))

    def strings_to_files(strings):
        return Collection.from_iterable(file_handle.coerce(s) for s in strings)

    registry.register(TypeDefinition(
        FILE_HANDLE_LIST,
        parent=registry.parameterize(collection, file_handle),
        coercion=CoercionChain.of(
            (registry.parameterize(collection, str_type), lambda c: c.map(file_handle.coerce)),
            (registry.parameterize(array_ref, str_type), strings_to_files),
            (registry.parameterize(array_ref, file_handle), Collection.from_iterable),
        ),
        doc="A Collection of FileHandles.",
    ))

    return registry


LIBRARY = build_registry().freeze()

CollectionType = LIBRARY.resolve(COLLECTION)
FileHandleType = LIBRARY.resolve(FILE_HANDLE)
FileHandleListType = LIBRARY.resolve(FILE_HANDLE_LIST)


def resolve(name: str, *params) -> TypeDefinition:
    """Resolve a type in the process-wide default LIBRARY."""
    return LIBRARY.resolve(name, *params)
