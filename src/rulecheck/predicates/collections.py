"""Collection validators that apply child rules to every element.

Both validators re-enter the evaluator running the current call, passing the
same options object, so rule arguments such as ``max`` also apply to the
children.
"""

import logging
from collections.abc import Mapping
from typing import Any, Iterable

from ..errors import MissingOptionError, TypeMismatchError
from ..options import UNDEFINED, ValidationOptions

logger = logging.getLogger(__name__)


def _elements(x: Any, validator: str) -> Iterable[Any]:
    if isinstance(x, (list, tuple)):
        return x
    if isinstance(x, Mapping):
        return x.values()
    raise TypeMismatchError(validator, x)


def _require(options: ValidationOptions | None, validator: str, *names: str) -> None:
    for name in names:
        if options is None or getattr(options, name) in (None, "", []):
            option = ValidationOptions.model_fields[name].alias or name
            raise MissingOptionError(validator, option)


def _property(element: Any, property_name: str) -> Any:
    if isinstance(element, Mapping):
        return element.get(property_name, UNDEFINED)
    if isinstance(element, (list, tuple)):
        # only canonical non-negative indices name an element
        if not (property_name.isascii() and property_name.isdecimal()):
            return UNDEFINED
        if str(int(property_name)) != property_name:
            return UNDEFINED
        index = int(property_name)
        return element[index] if index < len(element) else UNDEFINED
    # instance attributes only, never methods or class attributes
    attributes = getattr(element, "__dict__", None)
    if not isinstance(attributes, dict):
        return UNDEFINED
    return attributes.get(property_name, UNDEFINED)


def each_element(x, options: ValidationOptions, failure_description=None) -> bool:
    """Validate every element of a sequence, or every value of a mapping, against ``options.rules``."""
    _require(options, "eachElement", "rules")
    elements = _elements(x, "eachElement")
    evaluator = options.evaluator

    logger.debug(f"eachElement over {type(x).__name__} with rules {options.rules!r}")

    all_valid = True
    for element in elements:
        valid = evaluator.validate(element, options.rules, failure_description, options)
        all_valid = all_valid and valid
    return all_valid


def each_element_property(x, options: ValidationOptions, failure_description=None) -> bool:
    """Validate ``element[options.property_name]`` of every element against ``options.rules``.

    A missing property is validated as ``UNDEFINED``.
    """
    _require(options, "eachElementProperty", "rules", "property_name")
    elements = _elements(x, "eachElementProperty")
    evaluator = options.evaluator
    property_name = options.property_name

    logger.debug(
        f"eachElementProperty over {type(x).__name__}, "
        f"property {property_name!r} with rules {options.rules!r}"
    )

    all_valid = True
    for element in elements:
        valid = evaluator.validate(
            _property(element, property_name), options.rules, failure_description, options
        )
        all_valid = all_valid and valid
    return all_valid
