from __future__ import annotations

import os
from pathlib import Path
from typing import IO, Any, Optional

import yaml

from .constants import LOCK_FILE, WINDOWS_LOCK_BYTES


def _lock_handle(handle: IO[str], exclusive: bool) -> None:
    if os.name == "nt":
        import msvcrt
        handle.seek(0)
        mode = msvcrt.LK_LOCK if exclusive else msvcrt.LK_UNLCK
        msvcrt.locking(handle.fileno(), mode, WINDOWS_LOCK_BYTES)
    else:
        import fcntl
        fcntl.flock(handle, fcntl.LOCK_EX if exclusive else fcntl.LOCK_UN)


class DirectoryLock:
    """Exclusive inter-process lock over one storage directory.

    The lock file lives inside the directory it guards, which is created on
    first acquire.  Not re-entrant: acquiring a held lock raises.

    Parameters
    ----------
    directory:
        Directory whose contents the lock serializes access to.
    name:
        File name of the lock file inside *directory*.
    """

    def __init__(self, directory: Path, name: str = LOCK_FILE) -> None:
        self.directory = directory
        self.path = directory / name
        self._handle: Optional[IO[str]] = None

    @property
    def held(self) -> bool:
        return self._handle is not None

    def acquire(self) -> None:
        if self._handle is not None:
            raise RuntimeError(f"Lock already held: {self.path}")
        self.directory.mkdir(parents=True, exist_ok=True)
        handle = open(self.path, "a", encoding="utf-8")
        try:
            _lock_handle(handle, exclusive=True)
        except OSError:
            handle.close()
            raise
        self._handle = handle

    def release(self) -> None:
        handle, self._handle = self._handle, None
        if handle is None:
            return
        try:
            _lock_handle(handle, exclusive=False)
        finally:
            handle.close()

    def __enter__(self) -> "DirectoryLock":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


def _atomic_write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with open(tmp_path, "w", encoding="utf-8") as handle:
        handle.write(text)
        handle.flush()
        os.fsync(handle.fileno())
    os.replace(tmp_path, path)


def _read_text(path: Path) -> Optional[str]:
    if not path.exists():
        return None
    return path.read_text(encoding="utf-8")


def _read_yaml_mapping(path: Path) -> tuple[dict[str, Any], str | None]:
    """Read a YAML file whose top level must be a mapping.

    A missing or empty file yields ``({}, None)``.  Unreadable files, YAML
    syntax errors and non-mapping documents yield ``({}, message)``.
    """
    try:
        text = _read_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        return {}, f"{path.name}: {exc.__class__.__name__}: {exc}"
    if text is None:
        return {}, None
    try:
        data = yaml.safe_load(text)
    except (yaml.YAMLError, RecursionError) as exc:
        return {}, f"{path.name}: {exc.__class__.__name__}: {exc}"
    if data is None:
        return {}, None
    if not isinstance(data, dict):
        return {}, f"{path.name}: expected mapping, got {type(data).__name__}"
    return data, None
