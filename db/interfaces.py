"""Shared storage interface definitions.

This module provides a lightweight typing Protocol for the key-value store
the frequency model persists itself through, so models can depend on an
abstraction instead of a concrete backend. This helps with testability and
decoupling.
"""

from __future__ import annotations

from typing import Optional, Protocol


class KeyValueStore(Protocol):
    """Protocol for best-effort string storage used by `FrequencyModel`.

    Implemented by `db.key_value_store.InMemoryKeyValueStore` and
    `db.key_value_store.SQLiteKeyValueStore`. Both methods may raise
    `db.exceptions.StorageError`; `OSError` from file-backed stores is
    tolerated by the model as well.
    """

    def get(self, key: str) -> Optional[str]:
        """Return the stored value for key, or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...
