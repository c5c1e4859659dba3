"""Abstract store for Order records.

Implementations raise ``StoreError`` on any storage fault; callers let it
propagate.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderdesk.domain.model.order import Order
from orderdesk.domain.model.query import OrderQuery


class OrderStore(ABC):

    @abstractmethod
    async def find(self, query: OrderQuery) -> list[Order]:
        """Return the page of orders selected by *query*, sorted by id."""

    @abstractmethod
    async def find_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    async def insert(self, order: Order) -> Order:
        """Persist a new order. Fails if the id is already taken."""

    @abstractmethod
    async def save(self, order: Order) -> Order:
        """Replace the stored document for ``order.id`` (upsert)."""

    @abstractmethod
    async def delete_one(self, order_id: str) -> None:
        """Remove the order if present. Missing ids are not an error."""
