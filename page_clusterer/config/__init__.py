"""Модуль конфигурации."""

from .settings import Settings, load_settings
from .validator import ConfigValidationError, ConfigValidator, validate_config, validate_config_file

__all__ = [
    "Settings",
    "load_settings",
    "ConfigValidationError",
    "ConfigValidator",
    "validate_config",
    "validate_config_file",
]
