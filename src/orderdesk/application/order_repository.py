"""Application service: the Order repository facade.

Every operation goes to the store first and, when it returns order
data, passes the result through the ReferenceResolver so callers always
see populated products. Store failures propagate unchanged; nothing here
retries or recovers.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Mapping

from orderdesk.application.dto import OrderDTO
from orderdesk.application.reference_resolver import ReferenceResolver
from orderdesk.domain.exceptions import NotFoundError
from orderdesk.domain.model.order import Order, OrderStatus
from orderdesk.domain.model.query import DEFAULT_LIMIT, DEFAULT_OFFSET, OrderQuery
from orderdesk.domain.repository.order_store import OrderStore

logger = logging.getLogger(__name__)


def generate_id() -> str:
    return uuid.uuid4().hex


class OrderRepository:

    def __init__(
        self,
        order_store: OrderStore,
        resolver: ReferenceResolver,
        id_generator: Callable[[], str] = generate_id,
    ) -> None:
        self._order_store = order_store
        self._resolver = resolver
        self._id_generator = id_generator

    async def create(self, fields: Mapping[str, object]) -> OrderDTO:
        """Create and persist a new order.

        ``buyer_email`` and ``products`` are required; ``status`` defaults
        to CREATED and ``id`` is generated when not supplied.
        """
        order_id = fields.get("id")
        if order_id is None or order_id == "":
            order_id = self._id_generator()
        order = Order.create(order_id, fields)

        saved = await self._order_store.insert(order)
        logger.debug("Created order %s with %d product(s)", saved.id, len(saved.products))
        return await self._resolver.resolve(saved)

    async def get(self, order_id: str) -> OrderDTO | None:
        """Return the populated order, or None if it does not exist."""
        order = await self._order_store.find_by_id(order_id)
        return await self._resolver.resolve(order)

    async def list(
        self,
        offset: int = DEFAULT_OFFSET,
        limit: int = DEFAULT_LIMIT,
        product_id: str | None = None,
        status: OrderStatus | str | None = None,
    ) -> list[OrderDTO]:
        """Return one page of orders sorted by ascending id.

        ``product_id`` and ``status`` are optional filters; when both are
        given an order must satisfy both.
        """
        query = OrderQuery.build(
            offset=offset, limit=limit, product_id=product_id, status=status
        )
        orders = await self._order_store.find(query)
        return await self._resolver.resolve(orders)

    async def edit(self, order_id: str, changes: Mapping[str, object]) -> OrderDTO:
        """Merge *changes* onto an existing order and persist it.

        Only ``buyer_email``, ``products`` and ``status`` may be changed.
        Status transitions are not restricted.
        """
        order = await self._order_store.find_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order {order_id} not found")

        order.apply_changes(changes)

        saved = await self._order_store.save(order)
        logger.debug("Edited order %s (%s)", saved.id, ", ".join(sorted(changes)))
        return await self._resolver.resolve(saved)

    async def destroy(self, order_id: str) -> None:
        """Delete the order if present; deleting twice is harmless."""
        await self._order_store.delete_one(order_id)
        logger.debug("Deleted order %s", order_id)
