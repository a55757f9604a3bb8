"""
Storage Services Package

Provides the key-value storage interface and its implementations.
JSON files are the durable backend; memory is used in tests.
"""

from busticket.services.storage.interface import (
    CorruptStateError,
    KeyValueStorage,
    StorageError,
    StorageWriteError,
)
from busticket.services.storage.json_file import JsonFileStorage
from busticket.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "KeyValueStorage",
    # Exceptions
    "CorruptStateError",
    "StorageError",
    "StorageWriteError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]
