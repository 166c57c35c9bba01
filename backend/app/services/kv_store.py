"""
Key-value storage backends.

The review store only needs ``get``/``set`` on opaque byte blobs. Anything
that satisfies :class:`KeyValueStore` can back it.
"""
from typing import Protocol

from sqlalchemy.orm import Session

from app.db.models import KeyValueEntry


class KeyValueStore(Protocol):
    def get(self, key: str) -> bytes | None: ...

    def set(self, key: str, value: bytes) -> None: ...


class InMemoryKeyValueStore:
    """Dict-backed store. Lives as long as the process."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self._data: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class SqlKeyValueStore:
    """Durable store: one ``kv_entries`` row per key, committed on every write."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, key: str) -> bytes | None:
        row = self.db.get(KeyValueEntry, key)
        if row is None:
            return None
        return bytes(row.value)

    def set(self, key: str, value: bytes) -> None:
        self.db.merge(KeyValueEntry(key=key, value=bytes(value)))
        self.db.commit()
