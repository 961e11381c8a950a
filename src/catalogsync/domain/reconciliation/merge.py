"""Field-level update policy shared by home listings and comparison variants."""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalogsync.domain.model import LISTING_FIELDS

if TYPE_CHECKING:
    from catalogsync.domain.model import Listing, ProductRecord


def merge_listing_fields(target: Listing, record: ProductRecord) -> tuple[str, ...]:
    """Copy price, link and image from ``record`` where they differ.

    Name and store are never touched. Returns the names of the fields that changed,
    so an empty tuple means the merge was a no-op.
    """

    changed: list[str] = []
    for field_name in LISTING_FIELDS:
        incoming = getattr(record, field_name)
        if getattr(target, field_name) != incoming:
            setattr(target, field_name, incoming)
            changed.append(field_name)
    return tuple(changed)
