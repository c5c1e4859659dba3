"""Shared fixtures: a small product catalog and a wired repository."""

from __future__ import annotations

from decimal import Decimal
from itertools import count

import pytest

from orderdesk.application.order_repository import OrderRepository
from orderdesk.application.reference_resolver import ReferenceResolver
from orderdesk.domain.model.product import Product
from tests.fakes import FakeOrderStore, FakeProductStore


@pytest.fixture
def products() -> list[Product]:
    return [
        Product(id="p1", name="Widget", price=Decimal("15.00")),
        Product(id="p2", name="Gadget", price=Decimal("25.00")),
        Product(id="p3", name="Gizmo", price=Decimal("5.50")),
    ]


@pytest.fixture
def product_store(products) -> FakeProductStore:
    return FakeProductStore(products)


@pytest.fixture
def order_store() -> FakeOrderStore:
    return FakeOrderStore()


@pytest.fixture
def repo(order_store, product_store) -> OrderRepository:
    # Zero-padded sequential ids sort in creation order, which keeps
    # pagination assertions readable.
    ids = count(1)
    return OrderRepository(
        order_store=order_store,
        resolver=ReferenceResolver(product_store),
        id_generator=lambda: f"ord-{next(ids):04d}",
    )
