"""JSON-file-backed implementation of OrderStore."""

from __future__ import annotations

from pathlib import Path

from orderdesk.domain.exceptions import StoreError
from orderdesk.domain.model.order import Order, OrderStatus
from orderdesk.domain.model.query import OrderQuery
from orderdesk.domain.repository.order_store import OrderStore
from orderdesk.infrastructure.persistence.json_file import JsonFile


class JsonOrderStore(OrderStore):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderStore interface -------------------------------------------------

    async def find(self, query: OrderQuery) -> list[Order]:
        orders = [self._to_domain(raw) for raw in await self._file.load()]
        return query.apply(orders)

    async def find_by_id(self, order_id: str) -> Order | None:
        for raw in await self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    async def insert(self, order: Order) -> Order:
        def _append(orders: list[dict]) -> None:
            if any(raw["id"] == order.id for raw in orders):
                raise StoreError(f"Duplicate order id {order.id}")
            orders.append(self._to_raw(order))

        await self._file.update(_append)
        return order

    async def save(self, order: Order) -> Order:
        def _upsert(orders: list[dict]) -> None:
            # Replace if exists, otherwise append
            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    orders[i] = self._to_raw(order)
                    return
            orders.append(self._to_raw(order))

        await self._file.update(_upsert)
        return order

    async def delete_one(self, order_id: str) -> None:
        def _remove(orders: list[dict]) -> None:
            orders[:] = [raw for raw in orders if raw["id"] != order_id]

        await self._file.update(_remove)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "buyer_email": order.buyer_email,
            "products": list(order.products),
            "status": order.status.value,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        try:
            return Order(
                id=raw["id"],
                buyer_email=raw["buyer_email"],
                products=list(raw["products"]),
                status=OrderStatus(raw["status"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise StoreError(f"Malformed order record: {raw!r}") from exc
