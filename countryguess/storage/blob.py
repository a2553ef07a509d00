"""
Blob Stores - Key-value storage for persisted games.

The store:
- Maps a string key to an opaque string value
- Knows nothing about games; serialization lives in persisted.py
- May fail (disk full, permissions); callers decide how to recover

Design decisions:
- Simple file-based storage, one JSON file per key
- Writes go through a temp file and rename, so a crash never
  leaves a half-written record behind
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
import os
import re
import tempfile

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class BlobStore(ABC):
    """Abstract key-value store with get/set/delete semantics."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the key. Missing keys are not an error."""
        ...


class MemoryBlobStore(BlobStore):
    """
    In-process store.

    Used by tests and by hosts that do not want anything on disk.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class FileBlobStore(BlobStore):
    """
    File-based store.

    Usage:
        store = FileBlobStore("~/.countryguess")
        store.set("country-guesser-game", raw_json)
        raw = store.get("country-guesser-game")
    """

    def __init__(self, directory: str | Path | None = None):
        if directory is None:
            directory = Path.home() / ".countryguess"
        self.directory = Path(directory).expanduser()

    def get(self, key: str) -> str | None:
        path = self._get_path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._get_path(key)

        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=".tmp-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def delete(self, key: str) -> None:
        self._get_path(key).unlink(missing_ok=True)

    def _get_path(self, key: str) -> Path:
        """File path for a key; unsafe characters are replaced."""
        return self.directory / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"
