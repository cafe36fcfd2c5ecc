"""Typed attributes for host classes.

Attribute is a data descriptor that checks (and optionally coerces) values
when they are assigned, so plain classes can declare constrained fields:

    class Job:
        files = Attribute("FileHandleList", coerce=True)
        retries = Attribute("Int", default=3)

    job = Job()
    job.files = ["in.csv", "out.csv"]   # stored as Collection of Paths
    job.retries = "3"                   # raises ConstraintViolation
"""

from typing import Any, Callable, Optional, Union

from .constraints import TypeDefinition, TypeRegistry

_MISSING = object()


class Attribute:
    """Descriptor enforcing a type constraint on assignment.

    Args:
        isa: TypeDefinition, or a type expression resolved in registry
        coerce: Run the type's coercion before validating
        required: Reading before assignment is an error; no default allowed
        default: Value used when the attribute is read before assignment
        default_factory: Callable producing the default value
        registry: Registry used to resolve a string isa (default: catalog LIBRARY)
        doc: Human-readable description
    """

    def __init__(
        self,
        isa: Union[TypeDefinition, str],
        *,
        coerce: bool = False,
        required: bool = False,
        default: Any = _MISSING,
        default_factory: Optional[Callable[[], Any]] = None,
        registry: Optional[TypeRegistry] = None,
        doc: str = "",
    ):
        if default is not _MISSING and default_factory is not None:
            raise ValueError("Cannot specify both default and default_factory")
        if required and (default is not _MISSING or default_factory is not None):
            raise ValueError("A required attribute cannot have a default")
        self._isa = isa
        self.coerce = coerce
        self.required = required
        self.default = default
        self.default_factory = default_factory
        self.registry = registry
        self.doc = doc
        self.name: Optional[str] = None

    @property
    def isa(self) -> TypeDefinition:
        """The resolved type definition."""
        if isinstance(self._isa, str):
            registry = self.registry
            if registry is None:
                from .catalog import LIBRARY
                registry = LIBRARY
            self._isa = registry.resolve(self._isa)
        return self._isa

    def __set_name__(self, owner, name: str) -> None:
        self.name = name

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        try:
            return obj.__dict__[self.name]
        except KeyError:
            pass
        if self.default_factory is not None:
            value = self.default_factory()
        elif self.default is not _MISSING:
            value = self.default
        elif self.required:
            raise AttributeError(f"'{type(obj).__name__}' attribute '{self.name}' is required")
        else:
            raise AttributeError(f"'{type(obj).__name__}' attribute '{self.name}' is not set")
        self.__set__(obj, value)
        return obj.__dict__[self.name]

    def __set__(self, obj, value: Any) -> None:
        obj.__dict__[self.name] = self.process(value)

    def process(self, value: Any) -> Any:
        """Coerce (if enabled) and validate value, returning what gets stored.

        Raises:
            ConstraintViolation: If the value does not conform
        """
        if self.coerce:
            return self.isa.assert_coerce(value)
        return self.isa.assert_valid(value)

    def __repr__(self) -> str:
        isa = self._isa if isinstance(self._isa, str) else self._isa.display_name
        return f"Attribute({self.name!r}, isa={isa!r}, coerce={self.coerce})"
