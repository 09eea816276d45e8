"""Per-call validation options using Pydantic models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator


class _Undefined:
    """Marker for an absent value, distinct from ``None``."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_Undefined, ())


UNDEFINED = _Undefined()

DEFAULT_RULE_DELIMITER = ","
DEFAULT_NEGATE_CHARACTER = "!"

# Rules whose argument lives in the options under the rule's own name
RULES_REQUIRING_ARGS = [
    "minLength",
    "strictMinLength",
    "maxLength",
    "strictMaxLength",
    "length",
    "min",
    "strictMin",
    "max",
    "strictMax",
]


class ValidationOptions(BaseModel):
    """Options threaded through one top-level validate call.

    Unknown keys are kept as rule arguments, e.g. ``{"max": 12}`` is read by
    the ``max`` predicate as ``options.max``.
    """
    rule_delimiter: str = Field(alias="ruleDelimiter", default=DEFAULT_RULE_DELIMITER)
    allowed_optional_values: list[Any] = Field(
        alias="allowedOptionalValues", default_factory=lambda: [UNDEFINED]
    )
    rules_requiring_args: list[str] = Field(
        alias="rulesRequiringArgs", default_factory=lambda: list(RULES_REQUIRING_ARGS)
    )
    negate_character: str = Field(alias="negateCharacter", default=DEFAULT_NEGATE_CHARACTER)
    rules: str | list[str] | None = None
    property_name: str | None = Field(alias="propertyName", default=None)

    _evaluator: Any = PrivateAttr(default=None)

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @field_validator("rule_delimiter", "negate_character")
    @classmethod
    def validate_marker(cls, v):
        if not v:
            raise ValueError("delimiter and negate character must be non-empty")
        return v

    @classmethod
    def coerce(cls, options: "ValidationOptions | dict | None") -> "ValidationOptions":
        """Accept None, a mapping, or an existing options object."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.model_validate(dict(options))

    def bind(self, evaluator) -> "ValidationOptions":
        """Return a private copy of these options owned by ``evaluator``."""
        bound = self.model_copy()
        bound._evaluator = evaluator
        return bound

    def is_bound_to(self, evaluator) -> bool:
        return self._evaluator is evaluator

    @property
    def evaluator(self):
        """Evaluator running the current call (the default one when unbound)."""
        if self._evaluator is None:
            from .evaluator import get_default_evaluator
            return get_default_evaluator()
        return self._evaluator

    def argument(self, name: str, default: Any = UNDEFINED) -> Any:
        """Look up a rule argument such as ``max`` or ``minLength``."""
        return (self.model_extra or {}).get(name, default)

    def rule_arguments(self) -> list[str]:
        """Names of supplied arguments whose rule must be applied implicitly."""
        return [name for name in (self.model_extra or {}) if name in self.rules_requiring_args]

    def is_optional_value(self, value: Any) -> bool:
        for allowed in self.allowed_optional_values:
            if value is allowed:
                return True
            if type(value) is type(allowed) and value == allowed:
                return True
        return False

    def to_dict(self) -> dict:
        """Options supplied by the caller, keyed as the caller spelled them."""
        data = {
            field.alias or name: getattr(self, name)
            for name, field in type(self).model_fields.items()
            if name in self.model_fields_set
        }
        data.update(self.model_extra or {})
        return data
