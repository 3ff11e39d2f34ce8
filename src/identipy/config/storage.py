"""Where identipy keeps its identity registry and local settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

APP_DIR_NAME: Final[str] = "identipy"
DEFAULT_DB_FILENAME: Final[str] = "identipy.db"
LOCAL_CONFIG_FILENAME: Final[str] = "config.json"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Files below one data directory.

    The SQLite registry needs its directory up front; ``config.json`` is only
    created on the first fingerprint write, so reading its path never touches
    the filesystem.
    """

    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME
    local_config_filename: str = LOCAL_CONFIG_FILENAME

    def file_path(self, filename: str, *, ensure: bool) -> Path:
        base = self.data_dir.expanduser().resolve()
        if ensure:
            base.mkdir(parents=True, exist_ok=True)
        return base / filename

    def database_path(self) -> Path:
        return self.file_path(self.database_filename, ensure=True)

    def local_config_path(self) -> Path:
        return self.file_path(self.local_config_filename, ensure=False)

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return base_path / APP_DIR_NAME


def get_storage_config() -> StorageConfig:
    env_dir = optional_env_var("IDENTIPY_DATA_DIR")
    return StorageConfig(data_dir=Path(env_dir) if env_dir else _default_data_dir())


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    env_uri = optional_env_var("DATABASE_URI")
    if env_uri is not None:
        return DatabaseConfig(uri=env_uri)
    return DatabaseConfig(uri=(storage or get_storage_config()).database_uri())
