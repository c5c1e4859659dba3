"""Shared helpers for the JSON-file-backed stores.

Each store keeps one JSON array of records per file; every record is an
object with a string ``id``. Reads and writes run on a worker thread so
the event loop is never blocked on disk I/O. Any filesystem, decoding
or record-shape failure surfaces as StoreError.

All access to a given path, from any ``JsonFile`` instance in the same
event loop, is serialised by one ``asyncio.Lock``. Writes go to a
temporary file that is then renamed over the target, so readers see
either the old or the new document, never a partial one.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
import weakref
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from orderdesk.domain.exceptions import StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_locks: weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, dict[Path, asyncio.Lock]] = (
    weakref.WeakKeyDictionary()
)


def _lock_for(path: Path) -> asyncio.Lock:
    per_loop = _locks.setdefault(asyncio.get_running_loop(), {})
    return per_loop.setdefault(path, asyncio.Lock())


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._key = file_path.resolve()
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    async def load(self) -> list[dict]:
        async with _lock_for(self._key):
            return await asyncio.to_thread(self._read)

    async def update(self, mutate: Callable[[list[dict]], T]) -> T:
        """Load the records, let *mutate* change them in place, persist.

        The whole sequence holds the path's lock. If *mutate* raises,
        nothing is written.
        """
        async with _lock_for(self._key):
            return await asyncio.to_thread(self._read_modify_write, mutate)

    # --- File helpers ---------------------------------------------------------

    def _read_modify_write(self, mutate: Callable[[list[dict]], T]) -> T:
        records = self._read()
        result = mutate(records)
        self._write(records)
        return result

    def _read(self) -> list[dict]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Cannot read {self._file_path}: {exc}") from exc
        if not isinstance(raw, list):
            raise StoreError(f"Expected a JSON array in {self._file_path}")
        for item in raw:
            if not isinstance(item, dict) or not isinstance(item.get("id"), str):
                raise StoreError(f"Malformed record in {self._file_path}: {item!r}")
        return raw

    def _write(self, records: list[dict]) -> None:
        payload = json.dumps(records, indent=2) + "\n"
        tmp_path: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._file_path.parent,
                prefix=f".{self._file_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as fh:
                tmp_path = fh.name
                fh.write(payload)
            os.replace(tmp_path, self._file_path)
        except OSError as exc:
            if tmp_path is not None:
                Path(tmp_path).unlink(missing_ok=True)
            raise StoreError(f"Cannot write {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if self._file_path.exists():
            return
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreError(f"Cannot create {self._file_path}: {exc}") from exc
        self._write([])
        logger.info("Created empty store file %s", self._file_path)
