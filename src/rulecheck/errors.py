"""Exception taxonomy for rulecheck.

Resolver and usage errors are raised in every mode; ``ValidationFailure`` is
raised only when the caller supplied a failure description.
"""

import json
from typing import Any


def serialize(value: Any) -> str:
    """Render a value for failure messages, falling back to repr for non-JSON types."""
    try:
        return json.dumps(value, default=repr)
    except ValueError:
        # circular structures
        return repr(value)


class RulecheckError(Exception):
    """Base class for all rulecheck errors."""
    pass


class UnknownRuleError(RulecheckError, LookupError):
    """Raised when a rule token does not resolve against the registry."""

    def __init__(self, rule: str, delimiter: str = ","):
        self.rule = rule
        self.delimiter = delimiter
        super().__init__(
            f"Rule: {rule} is not an available validator.\n"
            f"Make sure rules are separated by: '{delimiter}'"
        )


class MissingOptionError(RulecheckError, ValueError):
    """Raised when a validator is invoked without an option it requires."""

    def __init__(self, validator: str, option: str):
        self.validator = validator
        self.option = option
        super().__init__(f"{validator} validation requires the '{option}' option")


class TypeMismatchError(RulecheckError, TypeError):
    """Raised when a collection validator receives neither a sequence nor a mapping."""

    def __init__(self, validator: str, value: Any):
        self.validator = validator
        self.value = value
        super().__init__(
            f"Cannot perform {validator} validation on non-array or non-object value "
            f"of type {type(value).__name__}"
        )


class ValidationFailure(RulecheckError, TypeError):
    """Raised in strict mode when a rule fails.

    Carries the failing rule (negation-prefixed when negated), the caller's
    description of the value, the value itself and the options in effect.
    """

    def __init__(self, rule: str, description: str, value: Any, options: Any = None):
        self.rule = rule
        self.description = description
        self.value = value
        self.options = options
        super().__init__(
            f'Validation failed on rule "{rule}".\n'
            f"{description} was: {serialize(value)}\n"
            f"options were: {serialize(self._options_dict())}"
        )

    def _options_dict(self) -> Any:
        if hasattr(self.options, "to_dict"):
            return self.options.to_dict()
        return self.options

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "rule": self.rule,
            "description": self.description,
            "value": serialize(self.value),
            "options": serialize(self._options_dict()),
        }
