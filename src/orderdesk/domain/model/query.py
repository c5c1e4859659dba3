"""Query object describing a filtered, paginated slice of orders.

Stores receive an ``OrderQuery`` and are expected to apply it in a fixed
sequence: filter, sort by ascending id, skip ``offset``, take ``limit``.
Sorting on the immutable id keeps pages stable between mutations.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from orderdesk.domain.exceptions import ValidationError
from orderdesk.domain.model.order import Order, OrderStatus

DEFAULT_OFFSET = 0
DEFAULT_LIMIT = 25


@dataclass(frozen=True)
class OrderQuery:
    offset: int = DEFAULT_OFFSET
    limit: int = DEFAULT_LIMIT
    product_id: str | None = None
    status: OrderStatus | None = None

    def __post_init__(self) -> None:
        if isinstance(self.offset, bool) or not isinstance(self.offset, int) or self.offset < 0:
            raise ValidationError(f"Offset must be a non-negative integer, got {self.offset!r}")
        if isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit <= 0:
            raise ValidationError(f"Limit must be a positive integer, got {self.limit!r}")

    @staticmethod
    def build(
        offset: int = DEFAULT_OFFSET,
        limit: int = DEFAULT_LIMIT,
        product_id: str | None = None,
        status: OrderStatus | str | None = None,
    ) -> OrderQuery:
        """Normalise raw list options; empty filter values mean "no filter"."""
        return OrderQuery(
            offset=offset,
            limit=limit,
            product_id=product_id or None,
            status=OrderStatus.parse(status) if status else None,
        )

    def matches(self, order: Order) -> bool:
        """True if *order* satisfies every supplied filter (logical AND)."""
        if self.product_id is not None and not order.references(self.product_id):
            return False
        if self.status is not None and order.status != self.status:
            return False
        return True

    def apply(self, orders: Iterable[Order]) -> list[Order]:
        """Filter, sort and paginate an in-memory collection."""
        matched = sorted((o for o in orders if self.matches(o)), key=lambda o: o.id)
        return matched[self.offset : self.offset + self.limit]
