from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from catalogsync import app
from catalogsync.adapters.sqlalchemy.unit_of_work import is_started, shutdown
from tests.helpers.catalog import make_record, scrape_results_for

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from catalogsync.adapters.sqlalchemy.unit_of_work import SqlAlchemyCatalogUnitOfWork


def test_reconcile_scrape_results_exports_before_storing(
    sqlite_unit_of_work: Callable[[], SqlAlchemyCatalogUnitOfWork], tmp_path: Path
) -> None:
    results = scrape_results_for(
        make_record("Oranges", "FredMeyer", "1.99"), make_record("Oranges", "QFC", "2.29")
    )
    export_path = tmp_path / "exports" / "latest.json"

    result = app.reconcile_scrape_results(
        results, unit_of_work_factory=sqlite_unit_of_work, export_path=export_path
    )

    assert result.created == 1
    assert result.comparison_appended == 1
    assert json.loads(export_path.read_text(encoding="utf-8")) == results


def test_reconcile_scrape_file_then_compare(
    sqlite_unit_of_work: Callable[[], SqlAlchemyCatalogUnitOfWork], tmp_path: Path
) -> None:
    path = tmp_path / "scrape.json"
    path.write_text(
        json.dumps(
            scrape_results_for(
                make_record("Milk", "QFC", "3.49"),
                make_record("Milk", "Safeway", "3.29"),
                make_record("Eggs", "Safeway", "4.99"),
            )
        ),
        encoding="utf-8",
    )

    result = app.reconcile_scrape_file(path, unit_of_work_factory=sqlite_unit_of_work)
    listings = app.compare_product_prices("Milk", unit_of_work_factory=sqlite_unit_of_work)

    assert result.processed == 3
    assert listings is not None
    assert [(listing.store_name, listing.product_price) for listing in listings] == [
        ("QFC", "3.49"),
        ("Safeway", "3.29"),
    ]
    assert app.compare_product_prices("Bread", unit_of_work_factory=sqlite_unit_of_work) is None


@pytest.fixture
def fresh_adapter() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


@pytest.mark.usefixtures("fresh_adapter")
def test_default_adapter_is_started_on_demand() -> None:
    assert not is_started()

    result = app.reconcile_scrape_results(
        scrape_results_for(make_record("Oranges")), database_uri="sqlite+pysqlite:///:memory:"
    )

    assert is_started()
    assert result.created == 1
    listings = app.compare_product_prices("Oranges")
    assert listings is not None
    assert listings[0].store_name == "FredMeyer"
