"""SQLAlchemy adapter package for catalogsync."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import SqlAlchemyCatalogRepository
from .unit_of_work import (
    CatalogDatabase,
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    current_database,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "CatalogDatabase",
    "SqlAlchemyCatalogRepository",
    "SqlAlchemyCatalogUnitOfWork",
    "StartupError",
    "create_all_tables",
    "current_database",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
