"""
Catalog building blocks:
scraped product records, catalog entries and their store comparison variants.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final, Protocol

LISTING_FIELDS: Final[tuple[str, ...]] = ("product_price", "product_link", "product_image")


class Listing(Protocol):
    """Anything carrying a store's price, link and image for a product."""

    product_name: str
    store_name: str
    product_price: str
    product_link: str
    product_image: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ProductRecord:
    """One scraped product sighting at one store."""

    product_name: str
    store_name: str
    product_price: str
    product_link: str
    product_image: str


@dataclass(eq=False, kw_only=True)
class ComparisonVariant:
    """A secondary store's listing of a product catalogued under another home store."""

    product_name: str
    store_name: str
    product_price: str
    product_link: str
    product_image: str

    @classmethod
    def from_record(cls, record: ProductRecord) -> ComparisonVariant:
        return cls(
            product_name=record.product_name,
            store_name=record.store_name,
            product_price=record.product_price,
            product_link=record.product_link,
            product_image=record.product_image,
        )

    def as_record(self) -> ProductRecord:
        return _as_record(self)


@dataclass(eq=False, kw_only=True)
class CatalogEntry:
    """One catalogued product, keyed by its exact name.

    The home fields (``store_name`` and the listing fields) belong to the store the
    product was first seen at. Every other store lives in ``product_comparison``.
    """

    product_id: str
    product_name: str
    store_name: str
    product_price: str
    product_link: str
    product_image: str

    _product_comparison: list[ComparisonVariant] = field(
        default_factory=list["ComparisonVariant"], repr=False
    )

    @classmethod
    def from_record(cls, record: ProductRecord, *, product_id: str) -> CatalogEntry:
        return cls(
            product_id=product_id,
            product_name=record.product_name,
            store_name=record.store_name,
            product_price=record.product_price,
            product_link=record.product_link,
            product_image=record.product_image,
        )

    @property
    def product_comparison(self) -> tuple[ComparisonVariant, ...]:
        return tuple(self._product_comparison)

    @property
    def stores(self) -> tuple[str, ...]:
        """Home store first, then comparison stores in the order they were added."""
        return (self.store_name, *(variant.store_name for variant in self._product_comparison))

    def variant_for(self, store_name: str) -> ComparisonVariant | None:
        for variant in self._product_comparison:
            if variant.store_name == store_name:
                return variant
        return None

    def add_variant(self, record: ProductRecord) -> ComparisonVariant:
        if record.product_name != self.product_name:
            raise ValueError(
                f"Cannot compare {record.product_name!r} against entry {self.product_name!r}"
            )
        if record.store_name == self.store_name:
            raise ValueError(f"{record.store_name!r} is the home store of {self.product_name!r}")
        if self.variant_for(record.store_name) is not None:
            raise ValueError(
                f"{self.product_name!r} already has a comparison for {record.store_name!r}"
            )
        variant = ComparisonVariant.from_record(record)
        self._product_comparison.append(variant)
        return variant

    def home_listing(self) -> ProductRecord:
        return _as_record(self)

    def listings(self) -> tuple[ProductRecord, ...]:
        """Every store's listing of this product, home store first."""
        return (self.home_listing(), *(variant.as_record() for variant in self._product_comparison))


def _as_record(listing: Listing) -> ProductRecord:
    return ProductRecord(
        product_name=listing.product_name,
        store_name=listing.store_name,
        product_price=listing.product_price,
        product_link=listing.product_link,
        product_image=listing.product_image,
    )
