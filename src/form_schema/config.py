"""
Configuration module for the form-schema package.

Handles environment variables and default settings.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, str(default).lower()).lower() == "true"


@dataclass
class FormSchemaConfig:
    """Configuration settings for form-schema."""

    # Logging settings
    log_level: str = "WARNING"
    log_diagnostics: bool = True  # Mirror decode diagnostics to the logger

    # Legacy list encoding (checkbox / multi-select defaults)
    list_separator: str = ","

    # Output settings
    indent_json_output: int = 2
    verbose_output: bool = False

    @classmethod
    def from_env(cls) -> "FormSchemaConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            log_level=os.getenv("FORM_SCHEMA_LOG_LEVEL", _defaults.log_level).upper(),
            log_diagnostics=_env_flag("FORM_SCHEMA_LOG_DIAGNOSTICS", _defaults.log_diagnostics),
            list_separator=os.getenv("FORM_SCHEMA_LIST_SEPARATOR", _defaults.list_separator) or _defaults.list_separator,
            indent_json_output=int(os.getenv("FORM_SCHEMA_INDENT_JSON", str(_defaults.indent_json_output))),
            verbose_output=_env_flag("FORM_SCHEMA_VERBOSE", _defaults.verbose_output),
        )


config = FormSchemaConfig.from_env()


def get_config() -> FormSchemaConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> FormSchemaConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config
