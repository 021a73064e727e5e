"""Async wrapper around one JSON file holding a list of records.

File I/O runs in a worker thread so the event loop is never blocked.
``lock`` serialises read-modify-write cycles within the process.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path


class JsonFileStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self.lock = asyncio.Lock()
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    async def load(self) -> list[dict]:
        return await asyncio.to_thread(self._load_raw)

    async def persist(self, records: list[dict]) -> None:
        await asyncio.to_thread(self._persist_raw, records)

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        tmp_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        tmp_path.replace(self._file_path)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
