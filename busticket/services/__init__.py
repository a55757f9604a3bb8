"""Services package."""

from busticket.services.extraction import (
    ExtractionError,
    TicketExtractionService,
)
from busticket.services.storage import (
    CorruptStateError,
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorage,
    StorageError,
    StorageWriteError,
)

__all__ = [
    # Extraction
    "ExtractionError",
    "TicketExtractionService",
    # Storage
    "CorruptStateError",
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorage",
    "StorageError",
    "StorageWriteError",
]
