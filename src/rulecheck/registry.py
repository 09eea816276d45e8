"""Rule registry and name resolution.

A registry holds three tables: primitive validators, aliases and composite
rules. Names resolve in that fixed order, with one extra hop from an alias
into the composite table.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Sequence

from .errors import UnknownRuleError
from .options import DEFAULT_RULE_DELIMITER

logger = logging.getLogger(__name__)

Predicate = Callable[..., bool]


@dataclass(frozen=True)
class Primitive:
    """A leaf predicate called as ``fn(value, options, failure_description)``."""
    name: str
    fn: Predicate


@dataclass(frozen=True)
class Composite:
    """A named conjunction of rule tokens."""
    name: str
    rules: tuple[str, ...]


Resolution = Primitive | Composite


class RuleRegistry:
    """Mutable lookup tables for validators, aliases and composite rules."""

    def __init__(
        self,
        validators: dict[str, Predicate] | None = None,
        aliases: dict[str, str] | None = None,
        composites: dict[str, str | Sequence[str]] | None = None,
    ):
        self.validators: dict[str, Predicate] = dict(validators or {})
        self.aliases: dict[str, str] = dict(aliases or {})
        self.composites: dict[str, str | Sequence[str]] = dict(composites or {})

    def register_validator(self, name: str, fn: Predicate | None = None):
        """Add a primitive validator; usable as a decorator when ``fn`` is omitted."""
        if fn is None:
            def decorator(func: Predicate) -> Predicate:
                self.validators[name] = func
                return func
            return decorator

        self.validators[name] = fn
        return fn

    def register_alias(self, name: str, target: str) -> None:
        self.aliases[name] = target

    def register_composite(self, name: str, rules: str | Sequence[str]) -> None:
        self.composites[name] = rules if isinstance(rules, str) else list(rules)

    def resolve(self, name: str, rule_delimiter: str = DEFAULT_RULE_DELIMITER) -> Resolution:
        """Resolve a rule name to a primitive or a composite.

        Args:
            name: Rule name without negation marker
            rule_delimiter: Delimiter in use, reported on failure

        Returns:
            Primitive or Composite

        Raises:
            UnknownRuleError: If the name is in none of the tables
        """
        fn = self.validators.get(name)
        if callable(fn):
            return Primitive(name, fn)

        target = self.aliases.get(name)
        if target is not None:
            fn = self.validators.get(target)
            if callable(fn):
                logger.debug(f"Alias {name} -> validator {target}")
                return Primitive(target, fn)

        rules = self.composites.get(name)
        if rules is None and target is not None:
            rules = self.composites.get(target)
            if rules is not None:
                logger.debug(f"Alias {name} -> composite {target}")
                name = target

        if rules is not None:
            if isinstance(rules, str):
                rules = [rules]
            return Composite(name, tuple(rules))

        raise UnknownRuleError(name, rule_delimiter)

    def names(self) -> list[str]:
        """All resolvable names, sorted."""
        return sorted(set(self.validators) | set(self.aliases) | set(self.composites))

    def copy(self) -> "RuleRegistry":
        """Independent registry with the same entries."""
        return RuleRegistry(
            validators=self.validators,
            aliases=self.aliases,
            composites={
                name: rules if isinstance(rules, str) else list(rules)
                for name, rules in self.composites.items()
            },
        )

    def __contains__(self, name: Any) -> bool:
        return name in self.validators or name in self.aliases or name in self.composites

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __repr__(self) -> str:
        return (
            f"RuleRegistry(validators={len(self.validators)}, "
            f"aliases={len(self.aliases)}, composites={len(self.composites)})"
        )
