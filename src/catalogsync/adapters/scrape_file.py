"""JSON files as the hand-off format between scrapers and the catalog."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from catalogsync.domain.model import ProductRecord
from catalogsync.domain.reconciliation.errors import BatchFailure
from catalogsync.domain.reconciliation.scrape_results import ScrapedProductPayload

if TYPE_CHECKING:
    from pathlib import Path

    from catalogsync.domain.reconciliation.scrape_results import ScrapeResults

log = logging.getLogger(__name__)


def load_scrape_results(path: Path) -> ScrapeResults:
    """Read scrape results previously written by :func:`dump_scrape_results`."""

    with path.open(encoding="utf-8") as handle:
        document: Any = json.load(handle)
    if not isinstance(document, dict):
        raise BatchFailure(
            f"{path} must contain a JSON object keyed by store, got {type(document).__name__}"
        )
    return document


def dump_scrape_results(scrape_results: ScrapeResults, path: Path) -> Path:
    """Write scrape results as pretty-printed JSON, creating parent directories."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(scrape_results, handle, indent=2, ensure_ascii=False, default=_encode)
        handle.write("\n")
    log.info("Exported scrape results to %s", path)
    return path


def _encode(value: object) -> object:
    if isinstance(value, ProductRecord):
        return ScrapedProductPayload.model_validate(value, from_attributes=True).model_dump(
            by_alias=True
        )
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
