"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from catalogsync.adapters.scrape_file import dump_scrape_results, load_scrape_results
from catalogsync.adapters.sqlalchemy.unit_of_work import current_database, is_started, startup
from catalogsync.domain.ports.unit_of_work import CatalogUnitOfWork
from catalogsync.domain.reconciliation import Reconciler

if TYPE_CHECKING:
    from pathlib import Path

    from catalogsync.domain.model import ProductRecord
    from catalogsync.domain.reconciliation import ReconcileResult, ScrapeResults

UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]


log = getLogger(__name__)


def _default_unit_of_work_factory(database_uri: str | None) -> UnitOfWorkFactory:
    database = current_database() if is_started() else startup(database_uri=database_uri)
    return database.unit_of_work


def reconcile_scrape_results(
    scrape_results: ScrapeResults,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    database_uri: str | None = None,
    export_path: Path | None = None,
) -> ReconcileResult:
    """Store scrape results in the catalog using the configured adapters.

    When ``export_path`` is given the raw results are also written there as JSON
    before reconciling, so a scrape can be replayed later with
    :func:`reconcile_scrape_file`.
    """

    if export_path is not None:
        dump_scrape_results(scrape_results, export_path)
    effective_uow = unit_of_work_factory or _default_unit_of_work_factory(database_uri)
    log.info("Reconciling scrape results for %s store(s)", len(scrape_results))
    return Reconciler(effective_uow).reconcile(scrape_results)


def reconcile_scrape_file(
    path: Path,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    database_uri: str | None = None,
) -> ReconcileResult:
    """Load scrape results from a JSON file and store them in the catalog."""

    log.info("Loading scrape results from %s", path)
    return reconcile_scrape_results(
        load_scrape_results(path),
        unit_of_work_factory=unit_of_work_factory,
        database_uri=database_uri,
    )


def compare_product_prices(
    product_name: str,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    database_uri: str | None = None,
) -> tuple[ProductRecord, ...] | None:
    """Return every store's listing of ``product_name`` (home store first)."""

    effective_uow = unit_of_work_factory or _default_unit_of_work_factory(database_uri)
    with effective_uow() as uow:
        entry = uow.catalog.retrieve_by_name(product_name)
        if entry is None:
            return None
        return entry.listings()
