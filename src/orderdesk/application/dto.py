"""Data Transfer Objects: plain containers that cross layer boundaries.

An ``OrderDTO`` is the populated view of an order: product ids have
been replaced by the products they reference.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    price: str  # formatted, e.g. "$15.00"


@dataclass(frozen=True)
class OrderDTO:
    """Output: an order with its products resolved."""

    id: str
    buyer_email: str
    status: str
    products: list[ProductDTO]
