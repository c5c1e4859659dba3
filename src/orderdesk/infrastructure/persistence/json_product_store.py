"""JSON-file-backed implementation of ProductStore."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal, InvalidOperation
from pathlib import Path

from orderdesk.domain.exceptions import StoreError
from orderdesk.domain.model.product import Product
from orderdesk.domain.repository.product_store import ProductStore
from orderdesk.infrastructure.persistence.json_file import JsonFile


class JsonProductStore(ProductStore):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductStore interface -----------------------------------------------

    async def find_by_ids(self, product_ids: Iterable[str]) -> list[Product]:
        wanted = set(product_ids)
        products = await self._load()
        return [p for pid, p in products.items() if pid in wanted]

    async def get_by_id(self, product_id: str) -> Product | None:
        products = await self._load()
        return products.get(product_id)

    async def list_all(self) -> list[Product]:
        return list((await self._load()).values())

    async def save(self, product: Product) -> None:
        record = {"id": product.id, "name": product.name, "price": str(product.price)}

        def _upsert(products: list[dict]) -> None:
            for i, raw in enumerate(products):
                if raw["id"] == product.id:
                    products[i] = record
                    return
            products.append(record)

        await self._file.update(_upsert)

    # --- Serialization helpers ------------------------------------------------

    async def _load(self) -> dict[str, Product]:
        try:
            return {
                item["id"]: Product(
                    id=item["id"],
                    name=item["name"],
                    price=Decimal(str(item["price"])),
                )
                for item in await self._file.load()
            }
        except (KeyError, TypeError, InvalidOperation) as exc:
            raise StoreError(f"Malformed product record in {self._file.path}") from exc
