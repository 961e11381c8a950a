"""Public domain model surface."""

from __future__ import annotations

from catalogsync.domain.model.catalog import (
    LISTING_FIELDS,
    CatalogEntry,
    ComparisonVariant,
    Listing,
    ProductRecord,
)
from catalogsync.domain.model.identifiers import PRODUCT_ID_LENGTH, new_product_id

__all__ = [
    "LISTING_FIELDS",
    "PRODUCT_ID_LENGTH",
    "CatalogEntry",
    "ComparisonVariant",
    "Listing",
    "ProductRecord",
    "new_product_id",
]
