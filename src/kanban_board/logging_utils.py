"""Configure loguru and summarize board state for log output."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    from .board.model import Board


def configure_logging(level: str = "INFO") -> None:
    """Configure loguru logger with the specified level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{module}</cyan>:<cyan>{line}</cyan>\n"
            "{message}"
        ),
    )


def summarize_board(board: "Board | None") -> dict[str, Any]:
    """Render a compact, JSON-friendly summary of a board.

    Args:
        board: Board instance (or None).

    Returns:
        A dictionary with the list count, the total card count and one
        ``{"id", "title", "cards"}`` entry per list.
    """
    if board is None:
        return {"board": None}

    lists = [
        {"id": lst.id, "title": lst.title, "cards": len(lst.cards)}
        for lst in board.lists
    ]
    return {
        "lists": len(lists),
        "cards": sum(entry["cards"] for entry in lists),
        "columns": lists,
    }
