"""File-backed implementation of KeyValueStore.

Each key is one file in the data directory, holding the raw blob.  This
is the command-line counterpart of browser local storage: best effort,
last write wins when several processes share a directory.
"""

from __future__ import annotations

import re
from pathlib import Path

from storeorder.domain.repository.key_value_store import KeyValueStore

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class FileKeyValueStore(KeyValueStore):

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    # --- KeyValueStore interface ----------------------------------------------

    def get(self, key: str) -> bytes | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def set(self, key: str, value: bytes) -> None:
        self._ensure_dir()
        path = self._path_for(key)
        # Write-then-rename so a crash never leaves a half-written blob
        tmp = path.with_name(path.name + ".tmp")
        tmp.write_bytes(value)
        tmp.replace(path)

    def delete(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)

    # --- File helpers ---------------------------------------------------------

    def _path_for(self, key: str) -> Path:
        return self._directory / f"{_UNSAFE_CHARS.sub('_', key)}.json"

    def _ensure_dir(self) -> None:
        if not self._directory.exists():
            self._directory.mkdir(parents=True, exist_ok=True)
