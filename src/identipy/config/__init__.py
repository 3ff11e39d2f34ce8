"""Application configuration helpers."""

from __future__ import annotations

from .env import env_int, optional_env_var, require_env_vars
from .errors import ConfigurationError, LocalConfigError, MissingConfigurationError
from .identity import IdentityConfig, get_identity_config, require_user_name
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "IdentityConfig",
    "LocalConfigError",
    "MissingConfigurationError",
    "StorageConfig",
    "configure_logging",
    "env_int",
    "get_database_config",
    "get_identity_config",
    "get_storage_config",
    "optional_env_var",
    "require_env_vars",
    "require_user_name",
]
