"""In-memory storage, used by tests and by the UI when no data dir is set."""

from typing import Optional

from busticket.services.storage.interface import KeyValueStorage


class InMemoryStorage(KeyValueStorage):
    """Dictionary-backed storage. Nothing survives the process."""
    
    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})
    
    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)
    
    def set(self, key: str, value: str) -> None:
        self._data[key] = value
    
    def remove(self, key: str) -> None:
        self._data.pop(key, None)
    
    def keys(self) -> list[str]:
        return list(self._data)
