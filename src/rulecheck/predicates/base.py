"""Primitive predicates.

Every predicate is called as ``fn(value, options, failure_description)`` and
returns a bool. Predicates that need no options accept and ignore them.
Type checks follow a loose ``typeof`` taxonomy (see ``type_of``) and numeric
checks use ``to_number`` so that rules written against loosely typed data
behave consistently.
"""

import math
from collections.abc import Mapping, Set
from numbers import Number
from typing import Any

from ..options import UNDEFINED

_NUMBER_PREFIXES = ("0x", "0o", "0b")


def type_of(value: Any) -> str:
    """Classify a value as undefined, boolean, number, string, function or object."""
    if value is UNDEFINED:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, Number):
        return "number"
    if isinstance(value, str):
        return "string"
    if callable(value):
        return "function"
    return "object"


def to_number(value: Any) -> float:
    """Numeric reading of a value; NaN when it has none.

    Bools read as 0/1, None as 0, blank strings as 0, and a list through its
    only element.
    """
    if value is UNDEFINED:
        return math.nan
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, Number):
        try:
            return float(value)
        except (TypeError, ValueError, OverflowError):
            return math.nan
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            if text[:2].lower() in _NUMBER_PREFIXES:
                return float(int(text, 0))
            return float(text)
        except (ValueError, OverflowError):
            return math.nan
    if isinstance(value, (list, tuple)):
        if not value:
            return 0.0
        if len(value) == 1 and not isinstance(value[0], (list, tuple, Mapping)):
            return to_number("" if value[0] is None else str(value[0]))
    return math.nan


def size_of(value: Any) -> int | None:
    """Element, key or character count; attribute count for plain objects."""
    if isinstance(value, (str, bytes, list, tuple, Mapping, Set)):
        return len(value)
    if value is None or value is UNDEFINED or type_of(value) != "object":
        return None
    if hasattr(value, "__len__"):
        return len(value)
    if hasattr(value, "__dict__"):
        return len(vars(value))
    return None


def _compare(left: Any, right: Any) -> tuple[Any, Any]:
    # strings compare lexically, everything else numerically
    if isinstance(left, str) and isinstance(right, str):
        return left, right
    return to_number(left), to_number(right)


# Numeric

def is_nan(x, options=None, failure_description=None) -> bool:
    return math.isnan(to_number(x))


def is_finite(x, options=None, failure_description=None) -> bool:
    return math.isfinite(to_number(x))


def is_integer(x, options=None, failure_description=None) -> bool:
    if type_of(x) != "number":
        return False
    try:
        return float(x).is_integer()
    except (TypeError, ValueError, OverflowError):
        return False


def is_zero(x, options=None, failure_description=None) -> bool:
    return type_of(x) == "number" and x == 0


# Types

def type_is_number(x, options=None, failure_description=None) -> bool:
    return type_of(x) == "number"


def type_is_string(x, options=None, failure_description=None) -> bool:
    return type_of(x) == "string"


def type_is_object(x, options=None, failure_description=None) -> bool:
    return type_of(x) == "object"


def type_is_function(x, options=None, failure_description=None) -> bool:
    return type_of(x) == "function"


def type_is_boolean(x, options=None, failure_description=None) -> bool:
    return type_of(x) == "boolean"


def is_null(x, options=None, failure_description=None) -> bool:
    return x is None


def is_array(x, options=None, failure_description=None) -> bool:
    return isinstance(x, (list, tuple))


def is_undefined(x, options=None, failure_description=None) -> bool:
    return x is UNDEFINED


# Properties of the value

def positive_length(x, options=None, failure_description=None) -> bool:
    size = size_of(x)
    return size is not None and size > 0


def has_non_whitespace(x, options=None, failure_description=None) -> bool:
    """Non-blank string; re-enters the evaluator for ``positiveLength``."""
    if not isinstance(x, str):
        return False
    evaluator = options.evaluator if options is not None else None
    if evaluator is None:
        return positive_length(x.strip())
    return evaluator.validate(x.strip(), "positiveLength")


def has_no_template_strings(x, options=None, failure_description=None) -> bool:
    return isinstance(x, str) and "{{" not in x and "}}" not in x


def has_a_property(x, options=None, failure_description=None) -> bool:
    size = size_of(x)
    return size is not None and size > 0


# Bounds: the bound is the option named after the rule

def min_value(x, options, failure_description=None) -> bool:
    value, bound = _compare(x, options.argument("min"))
    return value >= bound


def strict_min(x, options, failure_description=None) -> bool:
    value, bound = _compare(x, options.argument("strictMin"))
    return value > bound


def max_value(x, options, failure_description=None) -> bool:
    value, bound = _compare(x, options.argument("max"))
    return value <= bound


def strict_max(x, options, failure_description=None) -> bool:
    value, bound = _compare(x, options.argument("strictMax"))
    return value < bound


def _sized(x, options, name: str) -> tuple[float, float]:
    size = size_of(x)
    return (math.nan if size is None else size), to_number(options.argument(name))


def length(x, options, failure_description=None) -> bool:
    size, bound = _sized(x, options, "length")
    return size == bound


def min_length(x, options, failure_description=None) -> bool:
    size, bound = _sized(x, options, "minLength")
    return size >= bound


def strict_min_length(x, options, failure_description=None) -> bool:
    size, bound = _sized(x, options, "strictMinLength")
    return size > bound


def max_length(x, options, failure_description=None) -> bool:
    size, bound = _sized(x, options, "maxLength")
    return size <= bound


def strict_max_length(x, options, failure_description=None) -> bool:
    size, bound = _sized(x, options, "strictMaxLength")
    return size < bound
