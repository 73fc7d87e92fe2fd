"""JSON-file-backed implementation of ProductRepository.

The file is a pretty-printed UTF-8 array of ``{id, name, price}`` objects.
Every operation reads the whole file; mutations rewrite it.  Mutations are
serialized through one lock per repository and land via a temp file plus
an atomic rename, so concurrent writers in this process cannot lose each
other's changes and readers never see a half-written file.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from billing.domain.model.product import Product
from billing.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path, seed: Sequence[Mapping[str, Any]] = ()) -> None:
        self._file_path = file_path
        self._lock = asyncio.Lock()
        self._ensure_file(seed)

    @property
    def file_path(self) -> Path:
        return self._file_path

    # --- ProductRepository interface ------------------------------------------

    async def find_all(self) -> list[Product]:
        return [Product.from_plain(raw) for raw in await self._load_raw()]

    async def find_by_id(self, product_id: int) -> Product | None:
        for raw in await self._load_raw():
            if int(raw["id"]) == product_id:
                return Product.from_plain(raw)
        return None

    async def create(self, product: Product) -> Product:
        async with self._lock:
            records = await self._load_raw()
            next_id = max((int(r["id"]) for r in records), default=0) + 1
            created = Product.create(id=next_id, name=product.name, price=product.price)
            records.append(created.to_plain())
            await self._persist_raw(records)
        return created

    async def update(self, product_id: int, changes: Mapping[str, Any]) -> Product | None:
        async with self._lock:
            records = await self._load_raw()
            for i, raw in enumerate(records):
                if int(raw["id"]) == product_id:
                    updated = Product.from_plain(raw).with_changes(
                        name=changes.get("name"), price=changes.get("price")
                    )
                    records[i] = updated.to_plain()
                    await self._persist_raw(records)
                    return updated
        return None

    async def delete(self, product_id: int) -> bool:
        async with self._lock:
            records = await self._load_raw()
            kept = [raw for raw in records if int(raw["id"]) != product_id]
            if len(kept) == len(records):
                return False
            await self._persist_raw(kept)
        return True

    # --- File helpers ---------------------------------------------------------

    async def _load_raw(self) -> list[dict[str, Any]]:
        text = await asyncio.to_thread(self._file_path.read_text, encoding="utf-8")
        return json.loads(text or "[]")

    async def _persist_raw(self, records: list[dict[str, Any]]) -> None:
        await asyncio.to_thread(self._write_atomic, json.dumps(records, indent=2) + "\n")

    def _write_atomic(self, text: str) -> None:
        tmp_path = self._file_path.with_name(self._file_path.name + ".tmp")
        tmp_path.write_text(text, encoding="utf-8")
        tmp_path.replace(self._file_path)

    def _ensure_file(self, seed: Sequence[Mapping[str, Any]]) -> None:
        """Create the file with *seed* when absent; fail if it is unusable."""
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            seeded = [Product.from_plain(raw).to_plain() for raw in seed]
            self._write_atomic(json.dumps(seeded, indent=2) + "\n")
            logger.debug("Seeded %s with %d products", self._file_path, len(seeded))
        elif not os.access(self._file_path, os.W_OK) or not os.access(
            self._file_path.parent, os.W_OK
        ):
            raise PermissionError(f"{self._file_path} is not writable")
        elif not self._file_path.is_file():
            raise IsADirectoryError(f"{self._file_path} is not a regular file")
        else:
            text = self._file_path.read_text(encoding="utf-8")
            if not isinstance(json.loads(text or "[]"), list):
                raise ValueError(f"{self._file_path} does not hold a JSON array")
