"""Product aggregate.

Products live independently of orders and are read-only from the
order side: orders only hold their ids.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class Product:
    """A product in the catalog."""

    id: str
    name: str
    price: Decimal

    def display_price(self) -> str:
        return f"${self.price:.2f}"
