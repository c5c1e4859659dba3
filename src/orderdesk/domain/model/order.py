"""Order aggregate.

An Order belongs to a buyer and references one or more Products by id.
Product ids are foreign keys only; resolving them into full Product
records is the job of the application layer.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from orderdesk.domain.exceptions import ValidationError


class OrderStatus(Enum):
    CREATED = "CREATED"
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"

    @staticmethod
    def parse(value: OrderStatus | str) -> OrderStatus:
        """Coerce a raw value to an OrderStatus, rejecting anything else."""
        if isinstance(value, OrderStatus):
            return value
        try:
            return OrderStatus(value)
        except ValueError as exc:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"Invalid order status {value!r} (expected one of {allowed})"
            ) from exc


# Fields a caller may set through create/edit. ``id`` is only accepted
# on create and is never mutable afterwards.
MUTABLE_FIELDS = frozenset({"buyer_email", "products", "status"})
CREATE_FIELDS = MUTABLE_FIELDS | {"id"}


@dataclass
class Order:
    """A purchase order referencing products by id.

    Use ``Order.create()`` for new orders and ``apply_changes()`` for
    edits; both validate.  The ``__init__`` is intentionally plain so
    stores can reconstitute persisted orders without re-validating.
    """

    id: str
    buyer_email: str
    products: list[str] = field(default_factory=list)
    status: OrderStatus = OrderStatus.CREATED

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(order_id: object, fields: Mapping[str, object]) -> Order:
        """Build a new order from raw fields, enforcing all invariants."""
        _reject_unknown(fields, CREATE_FIELDS)

        return Order(
            id=_clean_id(order_id),
            buyer_email=_clean_email(fields.get("buyer_email")),
            products=_clean_products(fields.get("products")),
            status=OrderStatus.parse(fields.get("status") or OrderStatus.CREATED),
        )

    # --- Partial update -------------------------------------------------------

    def apply_changes(self, changes: Mapping[str, object]) -> None:
        """Overwrite the fields named in *changes*; leave the rest alone.

        All values are validated before anything is assigned, so a
        rejected edit leaves the order untouched.
        """
        _reject_unknown(changes, MUTABLE_FIELDS)

        updates: dict[str, object] = {}
        if "buyer_email" in changes:
            updates["buyer_email"] = _clean_email(changes["buyer_email"])
        if "products" in changes:
            updates["products"] = _clean_products(changes["products"])
        if "status" in changes:
            updates["status"] = OrderStatus.parse(changes["status"])  # type: ignore[arg-type]

        for name, value in updates.items():
            setattr(self, name, value)

    # --- Queries --------------------------------------------------------------

    def references(self, product_id: str) -> bool:
        return product_id in self.products


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _reject_unknown(fields: Mapping[str, object], allowed: frozenset[str]) -> None:
    unknown = sorted(set(fields) - allowed)
    if unknown:
        raise ValidationError(f"Unknown or read-only order field(s): {', '.join(unknown)}")


def _clean_id(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Order id must be a non-empty string, got {value!r}")
    return value


def _clean_email(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Buyer email is required")
    return value.strip()


def _clean_products(value: object) -> list[str]:
    if not isinstance(value, (list, tuple)) or not value:
        raise ValidationError("Order must reference at least one product")
    products = list(value)
    for product_id in products:
        if not isinstance(product_id, str) or not product_id:
            raise ValidationError(f"Invalid product id: {product_id!r}")
    return products
