"""Application configuration helpers."""

from __future__ import annotations

from .database import DatabaseConfig
from .errors import ConfigurationError
from .logging import configure_logging, resolve_log_level

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "configure_logging",
    "resolve_log_level",
]
