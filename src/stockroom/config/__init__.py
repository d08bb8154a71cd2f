"""Application configuration helpers."""

from __future__ import annotations

from .caller import CallerConfig, get_caller_config, parse_role
from .env import optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .logging import configure_logging, resolve_log_level
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "CallerConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "StorageConfig",
    "configure_logging",
    "get_caller_config",
    "get_database_config",
    "get_storage_config",
    "optional_env_var",
    "parse_role",
    "require_env_var",
    "require_env_vars",
    "resolve_log_level",
]
