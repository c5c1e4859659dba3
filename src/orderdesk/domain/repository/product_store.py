"""Abstract store for Product records.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations live in the infrastructure
layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from orderdesk.domain.model.product import Product


class ProductStore(ABC):

    @abstractmethod
    async def find_by_ids(self, product_ids: Iterable[str]) -> list[Product]:
        """Return every product whose id is in *product_ids*.

        Unknown ids are skipped; the result order is unspecified.
        """

    @abstractmethod
    async def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    async def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    async def save(self, product: Product) -> None:
        """Persist a new or updated product."""
