"""
Abstract Storage Interface

DESIGN DECISION: The ledger persists through a tiny key-value interface,
the same shape as browser local storage. Each key holds one serialized
full-collection snapshot that is overwritten wholesale on every change.
This allows us to:
1. Use in-memory storage for testing
2. Keep the store decoupled from where the bytes end up
3. Swap the JSON file backend for something else later

Values are opaque strings at this layer. Parsing them into models is the
store's job, so a malformed record is detected (and reported) there.
A backend that cannot even decode the stored bytes raises
CorruptStateError itself.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorage(ABC):
    """
    Abstract interface for durable key-value storage.
    
    All operations are synchronous; a write returns only after the value
    is durable or has failed.
    """
    
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.
        
        Returns:
            The stored string, or None if the key is absent

        Raises:
            CorruptStateError: If the stored bytes cannot be decoded
            StorageError: If the value exists but could not be read
        """
        pass
    
    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Overwrite the value stored under a key.
        
        Raises:
            StorageWriteError: If the value could not be written
        """
        pass
    
    @abstractmethod
    def remove(self, key: str) -> None:
        """
        Delete a key. Removing an absent key is a no-op.
        
        Raises:
            StorageWriteError: If the key exists but could not be removed
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageWriteError(StorageError):
    """A write-through to storage failed."""
    
    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(message)


class CorruptStateError(StorageError):
    """A persisted record exists but does not parse."""
    
    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(message)
