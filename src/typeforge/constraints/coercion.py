"""Ordered, first-match coercion rules.

A CoercionChain belongs to a target TypeDefinition and turns loosely typed
input into the target's canonical form:

1. A value that already satisfies the target is returned unchanged.
2. Otherwise the rules are scanned in declaration order and the transform of
   the first rule whose source accepts the value is applied.
3. If no rule accepts the value it is returned unchanged; re-validating the
   result is the caller's job.

Transform failures propagate unmodified.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional, Tuple, Union

if TYPE_CHECKING:
    from .types import TypeDefinition

logger = logging.getLogger(__name__)

Predicate = Callable[[Any], bool]
Transform = Callable[[Any], Any]


@dataclass(frozen=True)
class CoercionRule:
    """A (source, transform) pair.

    Attributes:
        source: TypeDefinition or plain predicate deciding which raw
            inputs this rule handles
        transform: Function producing a value of the owning type
    """
    source: Union["TypeDefinition", Predicate]
    transform: Transform

    def __post_init__(self):
        """Validate rule components."""
        if not callable(self.transform):
            raise TypeError(f"Coercion transform must be callable, got {type(self.transform).__name__}")
        if not (hasattr(self.source, "validate") or callable(self.source)):
            raise TypeError(
                f"Coercion source must be a type definition or predicate, "
                f"got {type(self.source).__name__}"
            )

    @property
    def source_name(self) -> str:
        """Display name of the source, for messages and introspection."""
        name = getattr(self.source, "display_name", None)
        if name is not None:
            return name
        return getattr(self.source, "__name__", repr(self.source))

    def accepts(self, value: Any) -> bool:
        """Check whether this rule handles value."""
        check = getattr(self.source, "validate", None)
        if check is None:
            check = self.source
        return bool(check(value))

    def apply(self, value: Any) -> Any:
        """Run the transform on value."""
        return self.transform(value)


@dataclass(frozen=True)
class CoercionChain:
    """Immutable ordered sequence of coercion rules.

    Rule order is declaration order and precedence order: the first rule
    that accepts a value wins even when a later rule would also apply.
    """
    rules: Tuple[CoercionRule, ...] = ()

    def __post_init__(self):
        """Freeze the rules sequence."""
        object.__setattr__(self, "rules", tuple(self.rules))

    @classmethod
    def of(cls, *pairs: Tuple[Any, Transform]) -> "CoercionChain":
        """Build a chain from (source, transform) pairs.

        Example:
            >>> chain = CoercionChain.of((Str, Path), (ArrayRef, Collection.from_iterable))
        """
        return cls(tuple(_as_rule(pair) for pair in pairs))

    def __len__(self) -> int:
        return len(self.rules)

    def __bool__(self) -> bool:
        return bool(self.rules)

    def __iter__(self):
        return iter(self.rules)

    def extend(self, *pairs: Union[CoercionRule, Tuple[Any, Transform]]) -> "CoercionChain":
        """Return a new chain with extra rules appended after the existing ones."""
        return CoercionChain(self.rules + tuple(_as_rule(pair) for pair in pairs))

    def sources(self) -> Tuple[str, ...]:
        """Source names in precedence order."""
        return tuple(rule.source_name for rule in self.rules)

    def find_rule(self, value: Any) -> Optional[CoercionRule]:
        """Return the first rule accepting value, or None."""
        for rule in self.rules:
            if rule.accepts(value):
                return rule
        return None

    def coerce(self, target: "TypeDefinition", value: Any) -> Any:
        """Convert value into target's canonical form.

        Args:
            target: Type the result should satisfy
            value: Raw input value

        Returns:
            The value unchanged if it already satisfies target or no rule
            accepts it, otherwise the output of the first matching transform
        """
        if target.validate(value):
            return value

        rule = self.find_rule(value)
        if rule is None:
            logger.debug(f"No coercion to {target.display_name} accepts {type(value).__name__}")
            return value

        logger.debug(f"Coercing {type(value).__name__} to {target.display_name} via {rule.source_name}")
        return rule.apply(value)


def _as_rule(pair: Union[CoercionRule, Tuple[Any, Transform]]) -> CoercionRule:
    """Accept either a ready rule or a (source, transform) pair."""
    if isinstance(pair, CoercionRule):
        return pair
    try:
        source, transform = pair
    except (TypeError, ValueError) as e:
        raise TypeError(f"Expected (source, transform) pair, got {pair!r}") from e
    return CoercionRule(source, transform)


def coerce_all(target: "TypeDefinition", values: Iterable[Any]) -> Tuple[Any, ...]:
    """Coerce every element through target, preserving order and count.

    No element is skipped: each one goes through ``target.coerce`` even if
    later elements already conform.
    """
    return tuple(target.coerce(value) for value in values)
