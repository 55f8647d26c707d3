"""
Local key-value store for persisted session entries.

Every entry is stored as JSON text under a fixed key, mirroring a browser
local storage: values are encoded by the caller and the store only moves
strings around.
"""

from __future__ import annotations

import json
import os
from typing import Dict, Optional, Protocol

from infra.logger import get_logger


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """In-process store, used by tests and dry runs."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.entries: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.entries.get(key)

    def set(self, key: str, value: str) -> None:
        self.entries[key] = value


class JsonFileStore:
    """
    All entries kept in one JSON object on disk.

    The file is read once on construction and rewritten atomically after
    every set. A missing file is an empty store; an unreadable one is logged
    and treated as empty so the session starts from defaults.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        self.logger = get_logger("JsonFileStore")
        self._entries: Dict[str, str] = self._read()

    def get(self, key: str) -> Optional[str]:
        return self._entries.get(key)

    def set(self, key: str, value: str) -> None:
        self._entries[key] = value
        self._write()

    def _read(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            self.logger.warning("Ignoring unreadable state file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            self.logger.warning("Ignoring state file %s: expected a JSON object", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(self._entries, f, indent=2, sort_keys=True)
        os.replace(tmp_path, self.path)
