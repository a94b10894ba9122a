"""Dwelling names and the Hostaway listings behind them."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

DWELLING_LISTING_IDS: Mapping[str, int] = MappingProxyType(
    {
        "Cantwell Lodge": 124502,
        "3BR Bungalow": 297337,
        "2BR Bungalow 1": 182391,
        "2BR Bungalow 2": 182427,
        "2BR Bungalow 3": 182428,
        "Bungalow Buyout": 182431,
    }
)


def resolve_listing_id(
    dwelling: str, listings: Mapping[str, int] = DWELLING_LISTING_IDS
) -> int | None:
    """Return the listing id for an exact dwelling name, or None."""
    return listings.get(dwelling)
