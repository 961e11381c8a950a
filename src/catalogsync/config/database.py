"""Where the catalog database lives."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final

from .errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

DATABASE_URI_ENV_VAR: Final[str] = "DATABASE_URI"
DATA_DIR_ENV_VAR: Final[str] = "CATALOGSYNC_DATA_DIR"
CATALOG_FILENAME: Final[str] = "catalog.db"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    """Connection settings for the catalog store."""

    uri: str

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> DatabaseConfig:
        """Use ``DATABASE_URI`` when set, otherwise a SQLite file in the data directory."""

        env = os.environ if environ is None else environ
        explicit = env.get(DATABASE_URI_ENV_VAR, "").strip()
        if explicit:
            return cls(uri=explicit)
        return cls.for_catalog_file(_catalog_dir(env) / CATALOG_FILENAME)

    @classmethod
    def for_catalog_file(cls, path: Path) -> DatabaseConfig:
        """SQLite catalog stored at ``path``; missing parent directories are created."""

        if path.parent.exists() and not path.parent.is_dir():
            raise ConfigurationError(f"Catalog directory {path.parent} is not a directory")
        path.parent.mkdir(parents=True, exist_ok=True)
        return cls(uri=f"sqlite+pysqlite:///{path}")


def _catalog_dir(env: Mapping[str, str]) -> Path:
    configured = env.get(DATA_DIR_ENV_VAR, "").strip()
    if configured:
        return Path(configured).expanduser().resolve()
    if os.name == "nt":
        base = env.get("LOCALAPPDATA")
        base_path = Path(base) if base else Path.home() / "AppData" / "Local"
    else:
        base = env.get("XDG_DATA_HOME")
        base_path = Path(base) if base else Path.home() / ".local" / "share"
    return (base_path / "catalogsync").expanduser().resolve()
