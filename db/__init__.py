"""
Storage package for the circular text entry engine.
This package contains the key-value store contract and its backends.
"""

from .exceptions import StorageError
from .interfaces import KeyValueStore
from .key_value_store import InMemoryKeyValueStore, SQLiteKeyValueStore

__all__ = [
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "SQLiteKeyValueStore",
    "StorageError",
]
