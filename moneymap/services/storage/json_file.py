"""
JSON File Storage Implementation

DESIGN DECISION: All entries live in one small JSON object on disk,
{key: string value}, mirroring how a browser's local storage holds them.

TRADEOFFS:
- The whole file is rewritten on every write (fine for personal data)
- Writes go through a temp file + os.replace (retried on transient
  OS errors) so a crash mid-write leaves the previous file intact
- A corrupt file is treated as empty on write, so the app can always
  save its way out of a bad state
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

import structlog
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from moneymap.services.storage.interface import (
    CorruptDataError,
    KeyValueStore,
    StorageError,
)


logger = structlog.get_logger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """Key-value store persisted as a single JSON file."""

    def __init__(self, path: Path, fsync_writes: bool = True):
        self._path = Path(path)
        self._fsync_writes = fsync_writes

    @property
    def path(self) -> Path:
        return self._path

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read_for_update()
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        data = self._read_for_update()
        if key in data:
            del data[key]
            self._write_all(data)

    def keys(self) -> list[str]:
        return sorted(self._read_all())

    def _read_all(self) -> dict[str, str]:
        """
        Read every entry.

        Raises:
            CorruptDataError: If the file is not a JSON object of strings
            StorageError: If the file cannot be read
        """
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except json.JSONDecodeError as e:
            raise CorruptDataError(f"Storage file is not valid JSON: {self._path}") from e
        except OSError as e:
            raise StorageError(f"Failed to read storage file {self._path}: {e}") from e

        if not isinstance(data, dict):
            raise CorruptDataError(f"Storage file does not hold a JSON object: {self._path}")
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _read_for_update(self) -> dict[str, str]:
        try:
            return self._read_all()
        except CorruptDataError as e:
            logger.warning("storage_file_corrupt_overwriting", path=str(self._path), error=str(e))
            return {}

    def _write_all(self, data: dict[str, str]) -> None:
        """Atomically replace the file with the given entries."""
        content = json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False)
        try:
            self._replace_file(content)
        except OSError as e:
            raise StorageError(f"Failed to write storage file {self._path}: {e}") from e
        logger.debug("storage_file_written", path=str(self._path), keys=len(data))

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=0.5),
        retry=retry_if_exception_type(OSError),
        reraise=True,
    )
    def _replace_file(self, content: str) -> None:
        directory = self._path.parent
        temp_name: Optional[str] = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                prefix=self._path.name + "-",
                suffix=".tmp",
                dir=directory,
                delete=False,
            ) as handle:
                temp_name = handle.name
                handle.write(content)
                handle.flush()
                if self._fsync_writes:
                    os.fsync(handle.fileno())
            os.replace(temp_name, self._path)
            temp_name = None
        finally:
            if temp_name and os.path.exists(temp_name):
                os.unlink(temp_name)
