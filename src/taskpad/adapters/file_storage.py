# src/taskpad/adapters/file_storage.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class JsonFileStorage:
    """
    StorageService backed by one file per key: <data_dir>/<key>.json.

    Writes go to a temp file first and are swapped in with os.replace, so a
    crash mid-write never leaves a truncated record behind. Blocking file I/O
    runs in a worker thread.
    """

    def __init__(self, data_dir: str | Path) -> None:
        self._dir = Path(data_dir)

    def path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key) or key in (".", ".."):
            raise ValueError(f"invalid storage key: {key!r}")
        return self._dir / f"{key}.json"

    async def read(self, key: str) -> bytes | None:
        return await asyncio.to_thread(self._read_sync, key)

    async def write(self, key: str, data: bytes) -> None:
        await asyncio.to_thread(self._write_sync, key, data)

    def _read_sync(self, key: str) -> bytes | None:
        path = self.path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None

    def _write_sync(self, key: str, data: bytes) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".tmp")
        tmp.write_bytes(data)
        os.replace(tmp, path)
        with contextlib.suppress(OSError):
            # Best-effort: keep the task list private on disk.
            os.chmod(path, 0o600)
        logger.debug("Wrote %d bytes to %s", len(data), path)
