"""Catalog reconciliation: decide create, update or compare for scraped products."""

from __future__ import annotations

from .errors import (
    BatchFailure,
    CreationConflict,
    InvalidProductRecord,
    LookupFailure,
    PersistFailure,
    ReconciliationError,
    RecordFailure,
)
from .merge import merge_listing_fields
from .reconciler import Reconciler, ReconcileOutcome, ReconcileResult
from .scrape_results import (
    ScrapedProduct,
    ScrapedProductPayload,
    ScrapeResults,
    iter_scraped_products,
    parse_product_record,
)

__all__ = [
    "BatchFailure",
    "CreationConflict",
    "InvalidProductRecord",
    "LookupFailure",
    "PersistFailure",
    "ReconcileOutcome",
    "ReconcileResult",
    "Reconciler",
    "ReconciliationError",
    "RecordFailure",
    "ScrapeResults",
    "ScrapedProduct",
    "ScrapedProductPayload",
    "iter_scraped_products",
    "merge_listing_fields",
    "parse_product_record",
]
