"""Where the catalog database lives."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

APP_DIR_NAME: Final[str] = "stockroom"
DEFAULT_DB_FILENAME: Final[str] = "stockroom.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Local data directory holding the SQLite catalog file."""

    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    @property
    def root(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def database_path(self, *, create_dir: bool = True) -> Path:
        if create_dir:
            self.root.mkdir(parents=True, exist_ok=True)
        return self.root / self.database_filename

    def sqlite_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _platform_data_home() -> Path:
    if os.name == "nt":
        local = os.getenv("LOCALAPPDATA")
        return Path(local) if local else Path.home() / "AppData" / "Local"
    xdg = os.getenv("XDG_DATA_HOME")
    return Path(xdg) if xdg else Path.home() / ".local" / "share"


def get_storage_config() -> StorageConfig:
    configured = optional_env_var("STOCKROOM_DATA_DIR")
    data_dir = Path(configured) if configured else _platform_data_home() / APP_DIR_NAME
    return StorageConfig(data_dir=data_dir)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """``DATABASE_URI`` wins; otherwise a SQLite file in the data directory."""

    uri = optional_env_var("DATABASE_URI")
    if uri is None:
        uri = (storage or get_storage_config()).sqlite_uri()
    return DatabaseConfig(uri=uri)
