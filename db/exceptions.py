"""
Custom storage exceptions for the circular text entry engine.
"""


class StorageError(Exception):
    """Base class for all key-value storage exceptions."""


class StorageReadError(StorageError):
    """Raised when a value cannot be read from the backing store."""


class StorageWriteError(StorageError):
    """Raised when a value cannot be written to the backing store."""


class StorageCorruptError(StorageError):
    """Raised when a stored value exists but cannot be decoded."""
