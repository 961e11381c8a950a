"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import CatalogRepository
from .unit_of_work import CatalogUnitOfWork

__all__ = [
    "CatalogRepository",
    "CatalogUnitOfWork",
]
