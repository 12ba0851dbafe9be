"""Persistence bridge between a :class:`Board` and a storage adapter.

Boards are stored as a single JSON blob under a fixed key.  Loading never
raises: a missing, unparsable or shape-invalid blob is reported as ``None``
and the caller falls back to the seed board.  Saving is best-effort; write
failures are logged and otherwise ignored.
"""

from __future__ import annotations

import json
from typing import Any, Optional, Sequence

from loguru import logger
from pydantic import ValidationError

from ..constants import SEED_LAYOUT, STORAGE_KEY
from ..logging_utils import summarize_board
from .model import Board, make_card, make_list
from .schema import BoardBlob
from .storage import StorageAdapter


def seed_board(layout: Optional[Sequence[dict[str, Any]]] = None) -> Board:
    """Build the demo board.

    *layout* overrides the built-in demo content; it uses the stored blob
    shape without ids: ``[{"title", "cards": [{"title", "desc"}]}]``.
    """
    if layout is None:
        return Board(
            lists=[
                make_list(title, [make_card(c_title, c_desc) for c_title, c_desc in cards])
                for title, cards in SEED_LAYOUT
            ]
        )
    return Board(
        lists=[
            make_list(
                entry["title"],
                [make_card(c["title"], c.get("desc", "")) for c in entry.get("cards", [])],
            )
            for entry in layout
        ]
    )


def parse_board(raw: Optional[str]) -> Optional[Board]:
    """Turn a stored blob into a board, or None if it is unusable."""
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        logger.warning("Stored board could not be decoded, ignoring it: {}", exc)
        return None
    if not isinstance(data, dict) or not isinstance(data.get("lists"), list):
        logger.warning("Stored board has an unexpected shape, ignoring it")
        return None
    try:
        board = BoardBlob.model_validate(data).to_board()
    except ValidationError as exc:
        logger.warning("Stored board failed validation, ignoring it: {}", exc)
        return None
    if not board.has_unique_ids():
        logger.warning("Stored board contains duplicate ids, ignoring it")
        return None
    return board


def dump_board(board: Board) -> str:
    return json.dumps(board.to_dict())


class BoardPersistence:
    """Save, load and reset the board held under *key* in *storage*.

    Parameters
    ----------
    storage:
        Adapter that keeps the serialized blob.
    key:
        Storage key of the blob.
    seed_layout:
        Optional override for the demo content used by :meth:`reset`.
    """

    def __init__(
        self,
        storage: StorageAdapter,
        key: str = STORAGE_KEY,
        seed_layout: Optional[Sequence[dict[str, Any]]] = None,
    ) -> None:
        self.storage = storage
        self.key = key
        self.seed_layout = seed_layout

    def save(self, board: Board) -> None:
        try:
            self.storage.set(self.key, dump_board(board))
        except Exception as exc:
            logger.error("Failed to persist board under {}: {}", self.key, exc)

    def load(self) -> Optional[Board]:
        try:
            raw = self.storage.get(self.key)
        except Exception as exc:
            logger.warning("Failed to read stored board {}: {}", self.key, exc)
            return None
        board = parse_board(raw)
        if board is not None:
            logger.debug("Loaded board {}: {}", self.key, summarize_board(board))
        return board

    def seed(self) -> Board:
        return seed_board(self.seed_layout)

    def load_or_seed(self) -> Board:
        board = self.load()
        if board is None:
            logger.info("No usable stored board under {}, starting from seed data", self.key)
            board = self.seed()
        return board

    def reset(self) -> Board:
        """Replace whatever is stored with a fresh seed board and return it."""
        board = self.seed()
        self.save(board)
        logger.info("Board {} reset to seed data", self.key)
        return board
