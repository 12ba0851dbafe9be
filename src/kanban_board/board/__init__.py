"""Single-board state and reordering engine.

This package provides the board model, the mutation operations, the live
drag resolver and the persistence bridge, tied together by
:class:`~.session.BoardSession`.
"""

from __future__ import annotations

from pathlib import Path

from ..config import get_log_level, get_seed_lists, get_storage_key, load_board_config
from ..constants import STATE_DIR_NAME, STORAGE_DIR_NAME
from ..logging_utils import configure_logging
from .persistence import BoardPersistence
from .session import BoardSession
from .storage import FileStorage


def open_session(project_dir: Path, configure_logs: bool = False) -> BoardSession:
    """Open the board kept under ``<project_dir>/.kanban/``, honouring its config.

    With *configure_logs* the loguru sink is reset to the configured level.
    Raises :class:`~.storage.InvalidStorageKey` if the configured storage key
    is not a safe file name.
    """
    config, _ = load_board_config(project_dir)
    if configure_logs:
        configure_logging(get_log_level(config))
    storage = FileStorage(project_dir.resolve() / STATE_DIR_NAME / STORAGE_DIR_NAME)
    key = get_storage_key(config)
    storage.path_for(key)
    persistence = BoardPersistence(
        storage,
        key=key,
        seed_layout=get_seed_lists(config),
    )
    return BoardSession(persistence)


__all__ = ["BoardPersistence", "BoardSession", "FileStorage", "open_session"]
