"""rulecheck - Declarative value validation from short rule expressions.

Rule expressions such as ``"string, positiveLength"`` or ``"validNumber"``
resolve against a registry of primitive predicates, aliases and composite
rules, and are evaluated against a value, optionally raising a descriptive
failure.
"""

__version__ = "0.1.0"
__description__ = "Declarative value validation from short rule expressions"

from rulecheck.config import RulecheckConfig, create_registry, load_config
from rulecheck.defaults import create_default_registry, default_registry
from rulecheck.errors import (
    MissingOptionError,
    RulecheckError,
    TypeMismatchError,
    UnknownRuleError,
    ValidationFailure,
)
from rulecheck.evaluator import Evaluator, validate
from rulecheck.options import UNDEFINED, ValidationOptions
from rulecheck.registry import Composite, Primitive, RuleRegistry

__all__ = [
    "__version__",
    "__description__",
    "validate",
    "Evaluator",
    "RuleRegistry",
    "Primitive",
    "Composite",
    "create_default_registry",
    "default_registry",
    "ValidationOptions",
    "UNDEFINED",
    "RulecheckConfig",
    "create_registry",
    "load_config",
    "RulecheckError",
    "UnknownRuleError",
    "MissingOptionError",
    "TypeMismatchError",
    "ValidationFailure",
]
