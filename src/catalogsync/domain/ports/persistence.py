"""Ports for persisting catalog entries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from catalogsync.domain.model import CatalogEntry


@runtime_checkable
class CatalogRepository(Protocol):
    """Persistence contract for the product catalog.

    ``create`` must fail when an entry with the same name or id already exists;
    ``save`` persists in-place mutations of an entry previously returned by
    ``retrieve_by_name`` or ``create``, including its comparison list.
    """

    def retrieve_by_name(self, name: str) -> CatalogEntry | None: ...

    def exists_at_store(self, name: str, store_name: str) -> bool: ...

    def create(self, entry: CatalogEntry) -> CatalogEntry: ...

    def save(self, entry: CatalogEntry) -> None: ...
