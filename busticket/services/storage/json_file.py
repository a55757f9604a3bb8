"""
JSON File Storage Implementation

DESIGN DECISION: A directory of small JSON files is used as the durable
backend because:
1. No database setup required
2. The files can be inspected and backed up by hand
3. One file per key mirrors the browser storage layout exactly

TRADEOFFS:
- Whole-file rewrite on every change (fine for a small agency's ledger)
- No locking; one process owns the data directory

Writes go to a temporary file that is then renamed over the target,
so a crash mid-write leaves the previous snapshot intact.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from busticket.logger import get_logger
from busticket.services.storage.interface import (
    CorruptStateError,
    KeyValueStorage,
    StorageError,
    StorageWriteError,
)


logger = get_logger(__name__)


class JsonFileStorage(KeyValueStorage):
    """
    File-per-key storage under a data directory.

    Each key `k` is stored at `<data_dir>/k.json`.
    """

    def __init__(self, data_dir: Union[str, Path]):
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _path_for(self, key: str) -> Path:
        return self._data_dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            logger.error("persisted_state_corrupt", key=key, error=str(e))
            raise CorruptStateError(
                key, f"Stored record '{key}' is not valid UTF-8: {e}"
            ) from e
        except OSError as e:
            logger.error("storage_read_failed", key=key, error=str(e))
            raise StorageError(f"Failed to read {key}: {e}") from e

    def set(self, key: str, value: str) -> None:
        try:
            self._write_atomic(self._path_for(key), value)
        except OSError as e:
            logger.error("storage_write_failed", key=key, error=str(e))
            raise StorageWriteError(key, f"Failed to write {key}: {e}") from e

    def remove(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.error("storage_remove_failed", key=key, error=str(e))
            raise StorageWriteError(key, f"Failed to remove {key}: {e}") from e

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _write_atomic(self, path: Path, value: str) -> None:
        """Write to a temp file in the same directory, then rename over."""
        fd, tmp_name = tempfile.mkstemp(
            dir=self._data_dir, prefix=f".{path.stem}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
