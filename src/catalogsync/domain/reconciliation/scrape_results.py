"""Input boundary for scrape output.

Scrapers hand over a nested mapping ``store -> department -> [product, ...]`` where
every product is a mapping with camelCase keys. Structure problems are batch
failures; problems with a single product only invalidate that product.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import TYPE_CHECKING, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, field_validator

from catalogsync.domain.model import ProductRecord

from .errors import BatchFailure, InvalidProductRecord

if TYPE_CHECKING:
    from collections.abc import Iterator


type ScrapeResults = Mapping[str, Mapping[str, Sequence[object]]]


class ScrapedProduct(NamedTuple):
    store: str
    department: str
    payload: object


def iter_scraped_products(scrape_results: object) -> Iterator[ScrapedProduct]:
    """Yield every product payload in insertion order.

    Raises :class:`BatchFailure` as soon as the traversal meets a level of the
    structure with the wrong shape.
    """

    if not isinstance(scrape_results, Mapping):
        raise BatchFailure(
            "Scrape results must map store names to departments, "
            f"got {type(scrape_results).__name__}"
        )
    for store, departments in scrape_results.items():
        if not isinstance(departments, Mapping):
            raise BatchFailure(
                f"Store {store!r} must map department names to products, "
                f"got {type(departments).__name__}"
            )
        for department, products in departments.items():
            if isinstance(products, str | bytes) or not isinstance(products, Sequence):
                raise BatchFailure(
                    f"Department {department!r} of store {store!r} must list products, "
                    f"got {type(products).__name__}"
                )
            for payload in products:
                yield ScrapedProduct(store=str(store), department=str(department), payload=payload)


class ScrapedProductPayload(BaseModel):
    """One product as emitted by the store scrapers."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    product_name: StrictStr = Field(alias="productName")
    store_name: StrictStr = Field(alias="storeName")
    product_price: StrictStr = Field(alias="productPrice")
    product_link: StrictStr = Field(alias="productLink")
    product_image: StrictStr = Field(alias="productImage")

    @field_validator("product_price", mode="before")
    @classmethod
    def _price_to_text(cls, value: object) -> object:
        if isinstance(value, bool):
            raise ValueError("price must be a string or number")  # noqa: TRY004
        if isinstance(value, int | float | Decimal):
            return str(value)
        return value

    @field_validator("product_name", "store_name")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def to_record(self) -> ProductRecord:
        return ProductRecord(**self.model_dump())


def parse_product_record(payload: object, *, store: str | None = None) -> ProductRecord:
    """Validate one scraped product and convert it to a :class:`ProductRecord`.

    ``store`` is only used for error context when the payload has no usable store name.
    """

    if isinstance(payload, ProductRecord):
        return payload
    if not isinstance(payload, Mapping):
        raise InvalidProductRecord(
            f"Product must be a mapping, got {type(payload).__name__}", store_name=store
        )

    name = payload.get("productName")
    store_name = payload.get("storeName")
    try:
        return ScrapedProductPayload.model_validate(payload).to_record()
    except ValidationError as exc:
        raise InvalidProductRecord(
            f"Invalid product fields: {_describe_errors(exc)}",
            product_name=name if isinstance(name, str) else None,
            store_name=store_name if isinstance(store_name, str) else store,
        ) from exc


def _describe_errors(exc: ValidationError) -> str:
    problems = sorted(
        f"{'.'.join(str(part) for part in error['loc'])} ({error['msg']})" for error in exc.errors()
    )
    return ", ".join(problems)
