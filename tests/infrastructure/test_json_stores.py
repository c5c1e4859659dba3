"""Tests for the JSON-file-backed stores, using pytest's tmp_path."""

import asyncio
import json
from decimal import Decimal

import pytest

from orderdesk.application.order_repository import OrderRepository
from orderdesk.application.reference_resolver import ReferenceResolver
from orderdesk.domain.exceptions import StoreError
from orderdesk.domain.model.order import Order, OrderStatus
from orderdesk.domain.model.product import Product
from orderdesk.domain.model.query import OrderQuery
from orderdesk.infrastructure.persistence.json_order_store import JsonOrderStore
from orderdesk.infrastructure.persistence.json_product_store import JsonProductStore


def _order(order_id: str, products: list[str], status: OrderStatus = OrderStatus.CREATED) -> Order:
    return Order(id=order_id, buyer_email=f"{order_id}@x.com", products=products, status=status)


class TestJsonOrderStore:

    def test_creates_missing_file(self, tmp_path):
        path = tmp_path / "nested" / "orders.json"
        JsonOrderStore(path)
        assert json.loads(path.read_text()) == []

    @pytest.mark.asyncio
    async def test_insert_and_find_by_id(self, tmp_path):
        store = JsonOrderStore(tmp_path / "orders.json")
        await store.insert(_order("o1", ["p1", "p2"], OrderStatus.PENDING))

        loaded = await store.find_by_id("o1")
        assert loaded == _order("o1", ["p1", "p2"], OrderStatus.PENDING)
        assert await store.find_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_insert_duplicate_rejected(self, tmp_path):
        store = JsonOrderStore(tmp_path / "orders.json")
        await store.insert(_order("o1", ["p1"]))
        with pytest.raises(StoreError, match="Duplicate"):
            await store.insert(_order("o1", ["p2"]))

    @pytest.mark.asyncio
    async def test_save_replaces_document(self, tmp_path):
        path = tmp_path / "orders.json"
        store = JsonOrderStore(path)
        await store.insert(_order("o1", ["p1"]))
        await store.save(_order("o1", ["p2"], OrderStatus.COMPLETED))

        raw = json.loads(path.read_text())
        assert raw == [
            {"id": "o1", "buyer_email": "o1@x.com", "products": ["p2"], "status": "COMPLETED"}
        ]

    @pytest.mark.asyncio
    async def test_find_applies_query(self, tmp_path):
        store = JsonOrderStore(tmp_path / "orders.json")
        for order in (
            _order("c", ["p1"], OrderStatus.PENDING),
            _order("a", ["p1"], OrderStatus.PENDING),
            _order("b", ["p2"], OrderStatus.PENDING),
            _order("d", ["p1"]),
        ):
            await store.insert(order)

        found = await store.find(OrderQuery.build(product_id="p1", status="PENDING"))
        assert [o.id for o in found] == ["a", "c"]

        page = await store.find(OrderQuery(offset=1, limit=2))
        assert [o.id for o in page] == ["b", "c"]

    @pytest.mark.asyncio
    async def test_delete_one_is_idempotent(self, tmp_path):
        store = JsonOrderStore(tmp_path / "orders.json")
        await store.insert(_order("o1", ["p1"]))
        await store.delete_one("o1")
        await store.delete_one("o1")
        assert await store.find_by_id("o1") is None

    @pytest.mark.asyncio
    async def test_corrupt_file_raises_store_error(self, tmp_path):
        path = tmp_path / "orders.json"
        path.write_text("{not json")
        store = JsonOrderStore(path)
        with pytest.raises(StoreError, match="Cannot read"):
            await store.find(OrderQuery())

    @pytest.mark.asyncio
    async def test_malformed_record_raises_store_error(self, tmp_path):
        path = tmp_path / "orders.json"
        path.write_text(json.dumps([{"id": "o1", "status": "WEIRD"}]))
        store = JsonOrderStore(path)
        with pytest.raises(StoreError, match="Malformed"):
            await store.find_by_id("o1")

    @pytest.mark.asyncio
    async def test_record_without_id_raises_store_error(self, tmp_path):
        path = tmp_path / "orders.json"
        path.write_text(
            json.dumps([{"buyer_email": "a@x.com", "products": ["p1"], "status": "CREATED"}])
        )
        store = JsonOrderStore(path)
        with pytest.raises(StoreError, match="Malformed record"):
            await store.find_by_id("o1")

    @pytest.mark.asyncio
    async def test_non_object_record_raises_store_error(self, tmp_path):
        path = tmp_path / "orders.json"
        path.write_text(json.dumps(["o1", 42]))
        store = JsonOrderStore(path)
        with pytest.raises(StoreError, match="Malformed record"):
            await store.find(OrderQuery())
        with pytest.raises(StoreError, match="Malformed record"):
            await store.insert(_order("o2", ["p1"]))
        assert json.loads(path.read_text()) == ["o1", 42]


class TestJsonProductStore:

    @pytest.mark.asyncio
    async def test_save_and_lookup(self, tmp_path):
        store = JsonProductStore(tmp_path / "products.json")
        await store.save(Product(id="p1", name="Widget", price=Decimal("15.00")))
        await store.save(Product(id="p2", name="Gadget", price=Decimal("25.00")))

        assert (await store.get_by_id("p1")).name == "Widget"
        assert await store.get_by_id("p9") is None
        assert len(await store.list_all()) == 2

    @pytest.mark.asyncio
    async def test_find_by_ids_skips_unknown(self, tmp_path):
        store = JsonProductStore(tmp_path / "products.json")
        await store.save(Product(id="p1", name="Widget", price=Decimal("15.00")))

        found = await store.find_by_ids(["p1", "ghost"])
        assert [p.id for p in found] == ["p1"]
        assert found[0].price == Decimal("15.00")

    @pytest.mark.asyncio
    async def test_malformed_price_raises_store_error(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text(json.dumps([{"id": "p1", "name": "Widget", "price": "cheap"}]))
        store = JsonProductStore(path)
        with pytest.raises(StoreError, match="Malformed"):
            await store.list_all()


class TestConcurrentAccess:

    @pytest.mark.asyncio
    async def test_concurrent_inserts_all_persist(self, tmp_path):
        path = tmp_path / "orders.json"
        store = JsonOrderStore(path)

        await asyncio.gather(*(store.insert(_order(f"o{i}", ["p1"])) for i in range(10)))

        on_disk = sorted(raw["id"] for raw in json.loads(path.read_text()))
        assert on_disk == sorted(f"o{i}" for i in range(10))

    @pytest.mark.asyncio
    async def test_separate_store_instances_share_the_file_lock(self, tmp_path):
        path = tmp_path / "orders.json"
        stores = [JsonOrderStore(path) for _ in range(10)]

        await asyncio.gather(
            *(s.insert(_order(f"o{i}", ["p1"])) for i, s in enumerate(stores))
        )

        assert len(await JsonOrderStore(path).find(OrderQuery(limit=100))) == 10

    @pytest.mark.asyncio
    async def test_concurrent_creates_through_repository(self, tmp_path):
        products = JsonProductStore(tmp_path / "products.json")
        await products.save(Product(id="p1", name="Widget", price=Decimal("15.00")))
        repo = OrderRepository(
            JsonOrderStore(tmp_path / "orders.json"), ReferenceResolver(products)
        )

        created = await asyncio.gather(
            *(repo.create({"buyer_email": f"b{i}@x.com", "products": ["p1"]}) for i in range(10))
        )

        for dto in created:
            fetched = await repo.get(dto.id)
            assert fetched == dto
        assert len(await repo.list(limit=100)) == 10

    @pytest.mark.asyncio
    async def test_mixed_writes_and_deletes(self, tmp_path):
        store = JsonOrderStore(tmp_path / "orders.json")
        for i in range(5):
            await store.insert(_order(f"o{i}", ["p1"]))

        await asyncio.gather(
            *(store.delete_one(f"o{i}") for i in range(5)),
            *(store.insert(_order(f"n{i}", ["p2"])) for i in range(5)),
            *(store.save(_order(f"s{i}", ["p3"], OrderStatus.PENDING)) for i in range(5)),
        )

        ids = [o.id for o in await store.find(OrderQuery(limit=100))]
        assert ids == sorted([f"n{i}" for i in range(5)] + [f"s{i}" for i in range(5)])

    @pytest.mark.asyncio
    async def test_list_during_writes_sees_whole_documents(self, tmp_path):
        store = JsonOrderStore(tmp_path / "orders.json")
        for i in range(3):
            await store.insert(_order(f"a{i}", ["p1"]))

        results = await asyncio.gather(
            *(store.insert(_order(f"b{i}", ["p1"])) for i in range(5)),
            *(store.find(OrderQuery(limit=2)) for _ in range(5)),
        )

        # The two lowest ids never change, so every page read mid-write agrees.
        for page in results[5:]:
            assert [o.id for o in page] == ["a0", "a1"]

    @pytest.mark.asyncio
    async def test_no_temp_files_left_behind(self, tmp_path):
        store = JsonOrderStore(tmp_path / "orders.json")
        await asyncio.gather(*(store.insert(_order(f"o{i}", ["p1"])) for i in range(5)))
        assert sorted(p.name for p in tmp_path.iterdir()) == ["orders.json"]
