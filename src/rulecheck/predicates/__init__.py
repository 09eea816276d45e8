"""Built-in primitive predicates keyed by rule name."""

from .base import (
    has_a_property,
    has_no_template_strings,
    has_non_whitespace,
    is_array,
    is_finite,
    is_integer,
    is_nan,
    is_null,
    is_undefined,
    is_zero,
    length,
    max_length,
    max_value,
    min_length,
    min_value,
    positive_length,
    size_of,
    strict_max,
    strict_max_length,
    strict_min,
    strict_min_length,
    to_number,
    type_is_boolean,
    type_is_function,
    type_is_number,
    type_is_object,
    type_is_string,
    type_of,
)
from .collections import each_element, each_element_property

BASE_VALIDATORS = {
    # Numeric
    "isNaN": is_nan,
    "isFinite": is_finite,
    "isInteger": is_integer,
    "isZero": is_zero,

    # Types
    "typeIsNumber": type_is_number,
    "typeIsString": type_is_string,
    "typeIsObject": type_is_object,
    "typeIsFunction": type_is_function,
    "typeIsBoolean": type_is_boolean,
    "isNull": is_null,
    "isArray": is_array,
    "isUndefined": is_undefined,

    # Properties of the value
    "positiveLength": positive_length,
    "hasNonWhitespace": has_non_whitespace,
    "hasNoTemplateStrings": has_no_template_strings,
    "hasAProperty": has_a_property,
    "min": min_value,
    "strictMin": strict_min,
    "max": max_value,
    "strictMax": strict_max,
    "length": length,
    "minLength": min_length,
    "strictMinLength": strict_min_length,
    "maxLength": max_length,
    "strictMaxLength": strict_max_length,

    # Collections
    "eachElement": each_element,
    "eachElementProperty": each_element_property,
}

__all__ = [
    "BASE_VALIDATORS",
    "each_element",
    "each_element_property",
    "size_of",
    "to_number",
    "type_of",
]
