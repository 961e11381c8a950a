"""SQLAlchemy mapping metadata for the catalog domain model."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Table, orm
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import configure_mappers, relationship

from catalogsync.domain.model import PRODUCT_ID_LENGTH, CatalogEntry, ComparisonVariant

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

catalog_entry_table = Table(
    "catalog_entry",
    mapper_registry.metadata,
    Column("product_id", String(PRODUCT_ID_LENGTH), primary_key=True),
    Column("product_name", String, nullable=False, unique=True),
    Column("store_name", String, nullable=False),
    Column("product_price", String, nullable=False),
    Column("product_link", String, nullable=False),
    Column("product_image", String, nullable=False),
    Index("ix_catalog_entry_name_store", "product_name", "store_name"),
)

# (product_id, store_name) as primary key: one comparison per store and entry.
comparison_variant_table = Table(
    "comparison_variant",
    mapper_registry.metadata,
    Column(
        "product_id",
        String(PRODUCT_ID_LENGTH),
        ForeignKey("catalog_entry.product_id", ondelete="CASCADE"),
        key="_entry_id",
        primary_key=True,
    ),
    Column("store_name", String, primary_key=True),
    Column("position", Integer, key="_position", nullable=False),
    Column("product_name", String, nullable=False),
    Column("product_price", String, nullable=False),
    Column("product_link", String, nullable=False),
    Column("product_image", String, nullable=False),
)


def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model (idempotent)."""

    if getattr(start_mappers, "_started", False):
        return mapper_registry
    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(
        CatalogEntry,
        catalog_entry_table,
        properties={
            "_product_comparison": relationship(
                ComparisonVariant,
                order_by=comparison_variant_table.c._position,  # noqa: SLF001
                collection_class=ordering_list("_position"),
                cascade="all, delete-orphan",
                lazy="selectin",
            ),
        },
    )

    mapper_registry.map_imperatively(
        ComparisonVariant,
        comparison_variant_table,
    )

    configure_mappers()
    start_mappers.__dict__["_started"] = True
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
