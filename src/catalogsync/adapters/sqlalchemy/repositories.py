"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from catalogsync.adapters.sqlalchemy.mappings import catalog_entry_table
from catalogsync.domain.model import CatalogEntry
from catalogsync.domain.reconciliation.errors import CreationConflict

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


class SqlAlchemyCatalogRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def retrieve_by_name(self, name: str) -> CatalogEntry | None:
        stmt = select(CatalogEntry).where(catalog_entry_table.c.product_name == name)
        return self.session.execute(stmt).scalar_one_or_none()

    def exists_at_store(self, name: str, store_name: str) -> bool:
        stmt = (
            select(catalog_entry_table.c.product_id)
            .where(catalog_entry_table.c.product_name == name)
            .where(catalog_entry_table.c.store_name == store_name)
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none() is not None

    def create(self, entry: CatalogEntry) -> CatalogEntry:
        self.session.add(entry)
        try:
            self.session.flush()
        except IntegrityError as exc:
            raise CreationConflict(
                f"Catalog entry {entry.product_id} for {entry.product_name!r} "
                f"conflicts with an existing entry: {exc.orig}",
                product_name=entry.product_name,
                store_name=entry.store_name,
            ) from exc
        return entry

    def save(self, entry: CatalogEntry) -> None:
        self.session.add(entry)
        self.session.flush()


if TYPE_CHECKING:
    from catalogsync.domain.ports.persistence import CatalogRepository

    _session_stub = cast("Session", object())
    _repo_check: CatalogRepository = SqlAlchemyCatalogRepository(_session_stub)
