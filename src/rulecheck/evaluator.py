"""Rule expression evaluation.

``validate(value, rules, failure_description, options)`` splits a rule
expression into tokens, resolves every token against a registry and applies
the resulting predicates conjunctively.

Soft mode (no failure description) evaluates every token and returns a bool.
Strict mode raises ``ValidationFailure`` on the first failing rule.
"""

import logging
from collections.abc import Mapping
from typing import Any, Sequence

from .errors import ValidationFailure
from .options import ValidationOptions
from .registry import Composite, RuleRegistry

logger = logging.getLogger(__name__)

OPTIONAL_TOKEN = "optional"

RuleExpression = str | Sequence[str]


def split_rules(rules: RuleExpression, rule_delimiter: str) -> list[str]:
    """Normalize a rule expression to a fresh list of tokens."""
    if isinstance(rules, str):
        return rules.split(rule_delimiter)
    if isinstance(rules, (list, tuple)):
        return list(rules)
    raise TypeError(
        f"rules must be a string or a sequence of strings, got {type(rules).__name__}"
    )


class Evaluator:
    """Evaluates rule expressions against one registry."""

    def __init__(self, registry: RuleRegistry | None = None):
        if registry is None:
            from .defaults import create_default_registry
            registry = create_default_registry()
        self.registry = registry

    def validate(
        self,
        value: Any,
        rules: RuleExpression,
        failure_description: str | ValidationOptions | dict | None = None,
        options: ValidationOptions | dict | None = None,
    ) -> bool:
        """Validate a value against a rule expression.

        Args:
            value: Value to inspect
            rules: Delimited string or sequence of rule tokens. A leading
                ``optional`` token lets allowed optional values pass outright.
            failure_description: Description of the value; when non-empty,
                a failing rule raises instead of returning False. Options
                may be passed here instead, as the last argument.
            options: Delimiter, negation marker, optional values, rule
                arguments and child rules for collection validators

        Returns:
            True if every rule passed

        Raises:
            UnknownRuleError: If a token does not resolve
            ValidationFailure: In strict mode, on the first failing rule
            TypeError: If the description is neither a string nor options
        """
        failure_description, options = self._split_arguments(failure_description, options)
        options = self._own_options(options)
        if not failure_description:
            failure_description = None

        tokens = split_rules(rules, options.rule_delimiter)

        if tokens and tokens[0].strip() == OPTIONAL_TOKEN:
            if options.is_optional_value(value):
                logger.debug(f"Optional value {value!r} accepted without further rules")
                return True
            tokens = tokens[1:]

        self._append_rules_requiring_args(tokens, options)

        is_valid = True
        for token in tokens:
            rule, negate = self._parse_token(token, options.negate_character)
            passed = self._apply(rule, negate, value, failure_description, options)
            is_valid = is_valid and passed

            if not is_valid and failure_description:
                label = f"{options.negate_character}{rule}" if negate else rule
                raise ValidationFailure(label, failure_description, value, options)

        return is_valid

    @staticmethod
    def _split_arguments(failure_description, options):
        # validate(value, rules, {"max": 12}) passes options in third position
        if isinstance(failure_description, (Mapping, ValidationOptions)):
            if options is not None:
                raise TypeError("options given both as failure_description and options")
            return None, failure_description
        if failure_description is not None and not isinstance(failure_description, str):
            raise TypeError(
                f"failure_description must be a string or options, "
                f"got {type(failure_description).__name__}"
            )
        return failure_description, options

    def _own_options(self, options) -> ValidationOptions:
        options = ValidationOptions.coerce(options)
        if options.is_bound_to(self):
            # nested call within the same top-level validation
            return options
        return options.bind(self)

    @staticmethod
    def _parse_token(token: str, negate_character: str) -> tuple[str, bool]:
        rule = token.strip()
        if rule.startswith(negate_character):
            return rule[len(negate_character):].strip(), True
        return rule, False

    @staticmethod
    def _append_rules_requiring_args(tokens: list[str], options: ValidationOptions) -> None:
        present = {token.strip() for token in tokens}
        for name in options.rule_arguments():
            if name not in present:
                logger.debug(f"Appending rule {name} implied by its option")
                tokens.append(name)
                present.add(name)

    def _apply(
        self,
        rule: str,
        negate: bool,
        value: Any,
        failure_description: str | None,
        options: ValidationOptions,
    ) -> bool:
        resolved = self.registry.resolve(rule, options.rule_delimiter)

        # A negated rule may fail internally and still pass once negated
        inner_description = None if negate else failure_description

        if isinstance(resolved, Composite):
            logger.debug(f"Expanding composite {resolved.name}: {list(resolved.rules)}")
            result = self.validate(value, list(resolved.rules), inner_description, options)
        else:
            result = bool(resolved.fn(value, options, inner_description))

        return result != negate


_default_evaluator: Evaluator | None = None


def get_default_evaluator() -> Evaluator:
    """Evaluator over the process-wide default registry."""
    global _default_evaluator
    from .defaults import default_registry

    if _default_evaluator is None or _default_evaluator.registry is not default_registry:
        _default_evaluator = Evaluator(default_registry)
    return _default_evaluator


def validate(
    value: Any,
    rules: RuleExpression,
    failure_description: str | ValidationOptions | dict | None = None,
    options: ValidationOptions | dict | None = None,
    *,
    registry: RuleRegistry | None = None,
) -> bool:
    """Validate ``value`` against ``rules`` using ``registry`` or the default registry.

    Options may take the place of ``failure_description``:
    ``validate(5, "number", {"max": 3})``.
    """
    evaluator = get_default_evaluator() if registry is None else Evaluator(registry)
    return evaluator.validate(value, rules, failure_description, options)
