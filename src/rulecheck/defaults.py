"""Built-in alias and composite tables and the default registry."""

from .predicates import BASE_VALIDATORS
from .registry import RuleRegistry

COMPOSITE_VALIDATORS = {
    # Negation
    "notNull": "!isNull",
    "isDefined": "!isUndefined",
    "notZero": "!isZero",
    "notBoolean": "!typeIsBoolean",
    "notArray": "!isArray",
    "hasNoProperties": "!hasAProperty",

    # Numerics
    "validNumeric": ["!null", "!boolean", "!array", "isFinite"],
    "validNumber": ["validNumeric", "number"],  # same as above but cannot be a string
    "validIntegerish": ["validNumeric", "integer"],
    "validInteger": ["validNumber", "integer"],  # same as above but cannot be a string

    # Object-ish
    "strictObject": ["object", "!null", "!array"],
    "isNonEmptyString": ["string", "positiveLength", "hasNonWhitespace"],
    "isNonEmptyArray": ["array", "positiveLength"],
    "isNonEmptyObject": ["strictObject", "hasAProperty"],
}

ALIASES = {
    # builtin types
    "number": "typeIsNumber",
    "object": "typeIsObject",
    "function": "typeIsFunction",
    "string": "typeIsString",
    "boolean": "typeIsBoolean",
    "array": "isArray",
    "undefined": "isUndefined",
    "null": "isNull",

    "finite": "isFinite",
    "integer": "isInteger",

    # composite
    "validString": "isNonEmptyString",
    "validArray": "isNonEmptyArray",
    "validObject": "isNonEmptyObject",
}


def create_default_registry() -> RuleRegistry:
    """Fresh registry populated with the built-in validators, aliases and composites."""
    return RuleRegistry(
        validators=BASE_VALIDATORS,
        aliases=ALIASES,
        composites={
            name: rules if isinstance(rules, str) else list(rules)
            for name, rules in COMPOSITE_VALIDATORS.items()
        },
    )


# Process-wide registry used by the module-level validate(); extend it in place
default_registry = create_default_registry()
