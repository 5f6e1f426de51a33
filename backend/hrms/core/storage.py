"""Key-value blob storage backing the employee record store.

Each key maps to one string blob, the same contract as browser local storage.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class StorageUnavailableError(Exception):
    """Raised when the storage medium cannot be read or written."""


class BlobStorage(Protocol):
    def load(self, key: str) -> str | None: ...

    def save(self, key: str, blob: str) -> None: ...


class InMemoryStorage:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> str | None:
        return self.items.get(key)

    def save(self, key: str, blob: str) -> None:
        self.items[key] = blob


class FileStorage:
    """All keys live in one JSON object file.

    Writes go to a sibling temp file first and then replace the target, so a
    crash mid-write leaves the previous contents in place.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise StorageUnavailableError(f"Cannot read {self.path}: {e}") from e
        except UnicodeDecodeError as e:
            raise StorageUnavailableError(f"Storage file {self.path} is not valid UTF-8") from e

        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageUnavailableError(f"Storage file {self.path} is not a JSON object") from e
        if not isinstance(data, dict):
            raise StorageUnavailableError(f"Storage file {self.path} is not a JSON object")
        return data

    def load(self, key: str) -> str | None:
        value = self._read_all().get(key)
        if value is None:
            return None
        return value if isinstance(value, str) else json.dumps(value)

    def save(self, key: str, blob: str) -> None:
        items = self._read_all()
        items[key] = blob

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(items, fh, ensure_ascii=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageUnavailableError(f"Cannot write {self.path}: {e}") from e

        logger.debug("Saved key=%s (%d bytes) to %s", key, len(blob), self.path)

    def check(self) -> bool:
        try:
            self._read_all()
        except StorageUnavailableError:
            logger.exception("Storage check failed for %s", self.path)
            return False
        target = self.path
        while not target.exists():
            target = target.parent
        return os.access(target, os.W_OK)
