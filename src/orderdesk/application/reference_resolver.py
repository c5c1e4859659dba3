"""Application service: resolve product references on orders.

Replaces each product id held by an order with the full Product record,
keeping the stored sequence order and any duplicates. All orders
passed in one call share a single product lookup.

Product ids that no longer match a Product are dropped from the resolved
list and logged at WARNING level; they never fail the read.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from orderdesk.application.dto import OrderDTO, ProductDTO
from orderdesk.domain.model.order import Order
from orderdesk.domain.model.product import Product
from orderdesk.domain.repository.product_store import ProductStore

logger = logging.getLogger(__name__)


class ReferenceResolver:

    def __init__(self, product_store: ProductStore) -> None:
        self._product_store = product_store

    async def resolve(
        self, orders: Order | Sequence[Order] | None
    ) -> OrderDTO | list[OrderDTO] | None:
        """Populate one order, a sequence of orders, or None.

        The result has the same shape as the input.
        """
        if orders is None:
            return None
        if isinstance(orders, Order):
            return (await self._resolve_many([orders]))[0]
        return await self._resolve_many(orders)

    async def _resolve_many(self, orders: Sequence[Order]) -> list[OrderDTO]:
        if not orders:
            return []

        wanted = {pid for order in orders for pid in order.products}
        found = await self._product_store.find_by_ids(sorted(wanted))
        by_id = {product.id: product for product in found}

        return [self._populate(order, by_id) for order in orders]

    @staticmethod
    def _populate(order: Order, by_id: dict[str, Product]) -> OrderDTO:
        missing = [pid for pid in order.products if pid not in by_id]
        if missing:
            logger.warning(
                "Order %s references unknown product(s) %s; omitting them",
                order.id,
                ", ".join(missing),
            )

        return OrderDTO(
            id=order.id,
            buyer_email=order.buyer_email,
            status=order.status.value,
            products=[
                ProductDTO(
                    id=by_id[pid].id,
                    name=by_id[pid].name,
                    price=by_id[pid].display_price(),
                )
                for pid in order.products
                if pid in by_id
            ],
        )
