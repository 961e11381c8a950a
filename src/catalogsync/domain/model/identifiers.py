"""Catalog identifier generation."""

from __future__ import annotations

import secrets
from typing import Final

PRODUCT_ID_BYTES: Final[int] = 16
PRODUCT_ID_LENGTH: Final[int] = PRODUCT_ID_BYTES * 2


def new_product_id() -> str:
    """Return 128 random bits encoded as lowercase hex."""
    return secrets.token_hex(PRODUCT_ID_BYTES)
