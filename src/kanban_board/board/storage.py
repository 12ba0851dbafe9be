"""Key-value storage adapters for the serialized board blob.

The board core only needs ``get``/``set`` of opaque strings under a fixed key.
:class:`FileStorage` keeps one file per key inside a directory and serializes
writers with an exclusive file lock; :class:`MemoryStorage` keeps values in a
dict and is meant for tests and embedding.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ..io_utils import DirectoryLock, _atomic_write_text, _read_text


class BoardError(Exception):
    """Base for board errors that must reach the caller."""


class InvalidStorageKey(BoardError):
    def __init__(self, key: str) -> None:
        super().__init__(f"Invalid storage key: {key!r}")
        self.key = key


_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class StorageAdapter(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class MemoryStorage(StorageAdapter):
    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value


class FileStorage(StorageAdapter):
    """One ``<key>.json`` file per key under *directory*.

    Parameters
    ----------
    directory:
        Folder holding the value files and the lock file.
    """

    def __init__(self, directory: Path) -> None:
        self._lock = DirectoryLock(directory)

    @property
    def directory(self) -> Path:
        return self._lock.directory

    def path_for(self, key: str) -> Path:
        if not _KEY_RE.match(key) or key in {".", ".."}:
            raise InvalidStorageKey(key)
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        with self._lock:
            return _read_text(path)

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        with self._lock:
            _atomic_write_text(path, value)
