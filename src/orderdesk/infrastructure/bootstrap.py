"""Factories that build the JSON stores and the order repository.

File locations come from a Settings object, so the CLI (or a test)
decides where data lives; nothing else imports the concrete stores.
"""

from __future__ import annotations

from orderdesk.application.order_repository import OrderRepository
from orderdesk.application.reference_resolver import ReferenceResolver
from orderdesk.infrastructure.config import Settings
from orderdesk.infrastructure.persistence.json_order_store import JsonOrderStore
from orderdesk.infrastructure.persistence.json_product_store import (
    JsonProductStore,
)


def product_store(settings: Settings) -> JsonProductStore:
    return JsonProductStore(settings.products_file)


def order_store(settings: Settings) -> JsonOrderStore:
    return JsonOrderStore(settings.orders_file)


def order_repository(settings: Settings) -> OrderRepository:
    return OrderRepository(
        order_store=order_store(settings),
        resolver=ReferenceResolver(product_store(settings)),
    )
