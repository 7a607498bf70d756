"""
core/storage.py

Pluggable persistence backends for the memory store.
A backend moves one JSON-safe table ({session_id: memory dict}) in and out:
- load() returns the table, or None when nothing has been saved yet
- save(table) replaces the whole persisted table

Backends may raise; the store catches and logs every failure.

Environment:
- MEMORY_STORE_PATH: JSON file used by default_backend() (default conversation_memory.json)
"""

import json
import os
from typing import Protocol


DEFAULT_STORE_PATH = "conversation_memory.json"


class StorageBackend(Protocol):
    def load(self) -> dict | None: ...

    def save(self, table: dict) -> None: ...


class JsonFileBackend:
    """Whole-table JSON file. Writes go to a temp file first, then os.replace."""

    def __init__(self, path):
        self.path = os.fspath(path)

    def load(self):
        if not os.path.exists(self.path):
            return None
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path}: expected a JSON object at top level")
        return data

    def save(self, table):
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        tmp = self.path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(table, f, ensure_ascii=False, indent=2)
        os.replace(tmp, self.path)

    def __repr__(self):
        return f"JsonFileBackend({self.path!r})"


class InMemoryBackend:
    """Keeps the serialized table as a JSON string inside the process.

    Serializing (rather than holding the dict) keeps the same round trip as the
    file backend, so tests exercise the real encode/decode path.
    """

    def __init__(self, blob: str | None = None):
        self.blob = blob
        self.saves = 0

    def load(self):
        if self.blob is None:
            return None
        return json.loads(self.blob)

    def save(self, table):
        self.blob = json.dumps(table, ensure_ascii=False)
        self.saves += 1


def default_backend():
    return JsonFileBackend(os.getenv("MEMORY_STORE_PATH", DEFAULT_STORE_PATH))
