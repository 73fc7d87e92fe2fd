"""Tests for the JSON-file product store."""

import asyncio
import json

import pytest

from billing.domain.model.product import Product
from billing.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)

SEED = [
    {"id": 1, "name": "Blue ballpoint pen", "price": 3.5},
    {"id": 2, "name": "White eraser", "price": 2.2},
]


class TestJsonProductRepository:

    def test_missing_file_is_seeded(self, tmp_path):
        path = tmp_path / "data" / "products.json"
        JsonProductRepository(path, seed=SEED)
        assert json.loads(path.read_text(encoding="utf-8")) == SEED

    def test_existing_file_is_not_reseeded(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text(json.dumps([{"id": 9, "name": "Stapler", "price": 12}]), encoding="utf-8")
        JsonProductRepository(path, seed=SEED)
        assert [raw["id"] for raw in json.loads(path.read_text(encoding="utf-8"))] == [9]

    def test_non_array_content_rejected(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text(json.dumps({"id": 1, "name": "Stapler", "price": 12}), encoding="utf-8")
        with pytest.raises(ValueError, match="JSON array"):
            JsonProductRepository(path, seed=SEED)

    def test_unwritable_location_fails(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(OSError):
            JsonProductRepository(blocker / "products.json", seed=SEED)

    @pytest.mark.asyncio
    async def test_create_uses_max_id_plus_one(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json", seed=SEED)
        await repo.delete(1)
        created = await repo.create(Product.create(name="Stapler", price=12))
        assert created.id == 3
        assert await repo.find_by_id(3) == created

    @pytest.mark.asyncio
    async def test_update_and_delete(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json", seed=SEED)
        updated = await repo.update(2, {"price": 2.5})
        assert updated == Product(id=2, name="White eraser", price=2.5)
        assert await repo.update(99, {"price": 1}) is None
        assert await repo.delete(2) is True
        assert await repo.delete(2) is False
        assert [p.id for p in await repo.find_all()] == [1]

    @pytest.mark.asyncio
    async def test_concurrent_creates_keep_every_record(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json", seed=SEED)
        created = await asyncio.gather(*(
            repo.create(Product.create(name=f"Item {n}", price=n)) for n in range(5)
        ))
        assert sorted(p.id for p in created) == [3, 4, 5, 6, 7]
        assert len(await repo.find_all()) == 7

    @pytest.mark.asyncio
    async def test_file_changes_are_visible_immediately(self, tmp_path):
        path = tmp_path / "products.json"
        repo = JsonProductRepository(path, seed=SEED)
        path.write_text(json.dumps([{"id": 4, "name": "Edited by hand", "price": 1}]), encoding="utf-8")
        assert [p.id for p in await repo.find_all()] == [4]
