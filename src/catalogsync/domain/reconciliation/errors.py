"""Failure taxonomy for catalog reconciliation.

Record-level failures are recovered by the reconciler: the record is skipped and
the run continues. Only :class:`BatchFailure` ends a run early.
"""

from __future__ import annotations


class ReconciliationError(Exception):
    """Base class for reconciliation failures."""


class RecordFailure(ReconciliationError):
    """A single scraped product could not be reconciled."""

    def __init__(
        self,
        message: str,
        *,
        product_name: str | None = None,
        store_name: str | None = None,
    ) -> None:
        super().__init__(message)
        self.product_name = product_name
        self.store_name = store_name


class InvalidProductRecord(RecordFailure):
    """A scraped product lacks a field or carries an unusable value."""


class LookupFailure(RecordFailure):
    """The catalog store could not answer a retrieve or existence check."""


class CreationConflict(RecordFailure):
    """A new catalog entry could not be created (duplicate name or id)."""


class PersistFailure(RecordFailure):
    """An update or comparison append could not be saved."""


class BatchFailure(ReconciliationError):
    """The scrape output as a whole is malformed."""
