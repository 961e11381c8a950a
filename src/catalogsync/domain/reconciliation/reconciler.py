"""Reconcile scraped products into the persistent catalog.

Every product goes through one lookup/decide/write cycle in its own unit of work:

- unknown name: create a catalog entry whose home store is the current store
- known name at its home store: merge price, link and image into the home fields
- known name at another store: merge into that store's comparison variant, or
  append a new variant when the store has not been seen for this product

Products are processed strictly one after another. Existence checks and writes
are separate round trips, so two records sharing a name must never be in flight
at the same time.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from catalogsync.domain.model import CatalogEntry, new_product_id

from .errors import (
    BatchFailure,
    CreationConflict,
    InvalidProductRecord,
    LookupFailure,
    PersistFailure,
    RecordFailure,
)
from .merge import merge_listing_fields
from .scrape_results import iter_scraped_products, parse_product_record

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from catalogsync.domain.model import ProductRecord
    from catalogsync.domain.ports.persistence import CatalogRepository
    from catalogsync.domain.ports.unit_of_work import CatalogUnitOfWork

    from .scrape_results import ScrapeResults

log = logging.getLogger(__name__)


class ReconcileOutcome(StrEnum):
    CREATED = "created"
    HOME_UPDATED = "home_updated"
    COMPARISON_UPDATED = "comparison_updated"
    COMPARISON_APPENDED = "comparison_appended"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass(slots=True)
class ReconcileResult:
    """Summary of one reconciliation run."""

    created: int = 0
    home_updated: int = 0
    comparison_updated: int = 0
    comparison_appended: int = 0
    unchanged: int = 0
    failed: int = 0
    aborted: bool = False

    @property
    def processed(self) -> int:
        return (
            self.created
            + self.home_updated
            + self.comparison_updated
            + self.comparison_appended
            + self.unchanged
            + self.failed
        )

    def record(self, outcome: ReconcileOutcome) -> None:
        setattr(self, outcome.value, getattr(self, outcome.value) + 1)


@contextmanager
def _stage(failure: type[RecordFailure], record: ProductRecord) -> Iterator[None]:
    """Re-raise anything escaping a catalog store call as ``failure``."""

    try:
        yield
    except RecordFailure:
        raise
    except Exception as exc:
        raise failure(
            f"{type(exc).__name__}: {exc}",
            product_name=record.product_name,
            store_name=record.store_name,
        ) from exc


class Reconciler:
    """Merge scrape output into the catalog, one product at a time."""

    def __init__(
        self,
        unit_of_work_factory: Callable[[], CatalogUnitOfWork],
        *,
        id_factory: Callable[[], str] = new_product_id,
    ) -> None:
        self._unit_of_work_factory = unit_of_work_factory
        self._id_factory = id_factory

    def reconcile(self, scrape_results: ScrapeResults) -> ReconcileResult:
        """Reconcile every product of ``scrape_results`` in insertion order."""

        result = ReconcileResult()
        log.info("Storing scrape results in the catalog")
        try:
            for scraped in iter_scraped_products(scrape_results):
                try:
                    record = parse_product_record(scraped.payload, store=scraped.store)
                except InvalidProductRecord as exc:
                    log.error(
                        "Skipping invalid product in %s/%s (product=%r, store=%r): %s",
                        scraped.store,
                        scraped.department,
                        exc.product_name,
                        exc.store_name,
                        exc,
                    )
                    result.record(ReconcileOutcome.FAILED)
                    continue
                result.record(self.process_product(record))
        except BatchFailure as exc:
            result.aborted = True
            log.error("Failed to reconcile scrape results: %s", exc)
        except Exception:  # noqa: BLE001
            result.aborted = True
            log.exception("Unexpected error while traversing scrape results")

        log.info(
            "Finished storing scrape results: processed=%s, created=%s, home_updated=%s, "
            "comparison_updated=%s, comparison_appended=%s, unchanged=%s, failed=%s, aborted=%s",
            result.processed,
            result.created,
            result.home_updated,
            result.comparison_updated,
            result.comparison_appended,
            result.unchanged,
            result.failed,
            result.aborted,
        )
        return result

    def process_product(self, record: ProductRecord) -> ReconcileOutcome:
        """Reconcile one product; failures are logged and never propagate."""

        try:
            with self._unit_of_work_factory() as uow:
                outcome = self._apply(uow.catalog, record)
                with _stage(PersistFailure, record):
                    uow.commit()
        except RecordFailure as exc:
            log.error(
                "Failed to reconcile product %r at store %r (%s): %s",
                record.product_name,
                record.store_name,
                type(exc).__name__,
                exc,
            )
            return ReconcileOutcome.FAILED
        except Exception:  # noqa: BLE001
            log.exception(
                "Unexpected error reconciling product %r at store %r",
                record.product_name,
                record.store_name,
            )
            return ReconcileOutcome.FAILED

        log.debug(
            "Reconciled product %r at store %r: %s",
            record.product_name,
            record.store_name,
            outcome,
        )
        return outcome

    def _apply(self, catalog: CatalogRepository, record: ProductRecord) -> ReconcileOutcome:
        with _stage(LookupFailure, record):
            entry = catalog.retrieve_by_name(record.product_name)

        if entry is None:
            return self._create(catalog, record)

        with _stage(LookupFailure, record):
            at_home_store = catalog.exists_at_store(record.product_name, record.store_name)

        if at_home_store:
            changed = merge_listing_fields(entry, record)
            self._save(catalog, entry, record)
            return ReconcileOutcome.HOME_UPDATED if changed else ReconcileOutcome.UNCHANGED

        variant = entry.variant_for(record.store_name)
        if variant is None:
            entry.add_variant(record)
            self._save(catalog, entry, record)
            return ReconcileOutcome.COMPARISON_APPENDED

        changed = merge_listing_fields(variant, record)
        self._save(catalog, entry, record)
        return ReconcileOutcome.COMPARISON_UPDATED if changed else ReconcileOutcome.UNCHANGED

    def _create(self, catalog: CatalogRepository, record: ProductRecord) -> ReconcileOutcome:
        entry = CatalogEntry.from_record(record, product_id=self._id_factory())
        with _stage(CreationConflict, record):
            catalog.create(entry)
        return ReconcileOutcome.CREATED

    @staticmethod
    def _save(catalog: CatalogRepository, entry: CatalogEntry, record: ProductRecord) -> None:
        with _stage(PersistFailure, record):
            catalog.save(entry)
