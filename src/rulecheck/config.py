"""Configuration management for rulecheck using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .defaults import create_default_registry
from .options import (
    DEFAULT_NEGATE_CHARACTER,
    DEFAULT_RULE_DELIMITER,
    RULES_REQUIRING_ARGS,
    UNDEFINED,
    ValidationOptions,
)
from .registry import RuleRegistry

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".rulecheck.json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class DefaultsConfig(BaseModel):
    """Default validation options section."""
    rule_delimiter: str = Field(alias="ruleDelimiter", default=DEFAULT_RULE_DELIMITER)
    negate_character: str = Field(alias="negateCharacter", default=DEFAULT_NEGATE_CHARACTER)
    rules_requiring_args: list[str] = Field(
        alias="rulesRequiringArgs", default_factory=lambda: list(RULES_REQUIRING_ARGS)
    )
    allow_none: bool = Field(alias="allowNone", default=False)

    @field_validator("rule_delimiter", "negate_character")
    @classmethod
    def validate_marker(cls, v):
        if not v:
            raise ValueError("ruleDelimiter and negateCharacter must be non-empty")
        return v

    model_config = ConfigDict(populate_by_name=True)


class RegistryConfig(BaseModel):
    """Extra aliases and composite rules section."""
    aliases: dict[str, str] = Field(default_factory=dict)
    composites: dict[str, str | list[str]] = Field(default_factory=dict)
    allow_override: bool = Field(alias="allowOverride", default=False)

    @field_validator("composites")
    @classmethod
    def validate_composites(cls, v):
        for name, rules in v.items():
            if not rules:
                raise ValueError(f"composite {name} must reference at least one rule")
        return v

    model_config = ConfigDict(populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(use_enum_values=True)


class RulecheckConfig(BaseModel):
    """Complete rulecheck configuration model."""
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")

    def default_options(self, **arguments) -> ValidationOptions:
        """Validation options seeded from the defaults section."""
        allowed = [UNDEFINED, None] if self.defaults.allow_none else [UNDEFINED]
        return ValidationOptions(
            rule_delimiter=self.defaults.rule_delimiter,
            negate_character=self.defaults.negate_character,
            rules_requiring_args=list(self.defaults.rules_requiring_args),
            allowed_optional_values=allowed,
            **arguments,
        )


def create_registry(config: RulecheckConfig | None = None) -> RuleRegistry:
    """Build a default registry extended with the configured aliases and composites.

    Raises:
        ValueError: If a configured name shadows a built-in and overrides are not allowed
    """
    registry = create_default_registry()
    if config is None:
        return registry

    extra = config.registry
    for name, target in extra.aliases.items():
        _check_override(registry, name, extra.allow_override)
        registry.register_alias(name, target)
    for name, rules in extra.composites.items():
        _check_override(registry, name, extra.allow_override)
        registry.register_composite(name, rules)

    logger.info(
        f"Registry built with {len(extra.aliases)} configured aliases "
        f"and {len(extra.composites)} configured composites"
    )
    return registry


def _check_override(registry: RuleRegistry, name: str, allow_override: bool) -> None:
    if name not in registry:
        return
    if not allow_override:
        raise ValueError(f"'{name}' is already defined; set registry.allowOverride to replace it")
    logger.warning(f"Configuration overrides built-in rule '{name}'")


def configure_logging(config: RulecheckConfig) -> None:
    """Apply the configured level to the rulecheck logger."""
    level = LogLevel(config.logging.level).value
    level = "WARNING" if level == "warn" else level.upper()
    logging.getLogger("rulecheck").setLevel(level)


def load_config(config_path: str | Path | None = None) -> RulecheckConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .rulecheck.json

    Returns:
        RulecheckConfig: Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path is None or not config_path.exists():
        return create_default_config()

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = json.load(f)
        return RulecheckConfig(**config_data)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {config_path}: {e}")
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}")


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .rulecheck.json configuration file by searching up directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> RulecheckConfig:
    """Create default configuration."""
    return RulecheckConfig()
