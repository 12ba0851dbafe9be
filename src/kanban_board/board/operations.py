"""Board mutations: add, rename, delete and move lists and cards.

Every function mutates the board (or list/card) in place and keeps the board
invariants: unique ids, each card in exactly one list, gap-free ordering.
Invalid arguments (unknown ids, out-of-range indices) turn the call into a
no-op that reports ``None``/``False`` instead of raising.  Empty titles are
replaced with :data:`~kanban_board.constants.PLACEHOLDER_TITLE`.

Confirmation for destructive operations (``delete_list``, ``delete_card``) is
the caller's job; these functions assume it was already given.
"""

from __future__ import annotations

from typing import Optional, Union

from loguru import logger

from ..constants import (
    DEFAULT_CARD_TITLE,
    DEFAULT_LIST_TITLE,
    DIRECTION_LEFT,
    DIRECTION_RIGHT,
    PLACEHOLDER_TITLE,
)
from .model import Board, BoardList, Card, make_card, make_list

Direction = Union[str, int]

_DIRECTION_STEPS: dict[Direction, int] = {
    DIRECTION_LEFT: -1,
    DIRECTION_RIGHT: 1,
    -1: -1,
    1: 1,
}


def normalize_title(title: Optional[str]) -> str:
    return (title or "").strip() or PLACEHOLDER_TITLE


def _in_range(index: Optional[int], size: int) -> bool:
    return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < size


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------

def add_list(board: Board, title: str = DEFAULT_LIST_TITLE) -> BoardList:
    """Append a new empty list to the end of the board."""
    lst = make_list(title)
    board.lists.append(lst)
    return lst


def rename_list(lst: BoardList, new_title: Optional[str]) -> None:
    lst.title = normalize_title(new_title)


def delete_list(board: Board, index: int) -> Optional[BoardList]:
    """Remove the list at *index* together with its cards.

    Returns the removed list, or None when *index* is out of bounds.
    """
    if not _in_range(index, len(board.lists)):
        logger.debug("delete_list ignored: index {} out of range", index)
        return None
    return board.lists.pop(index)


def move_list_to(board: Board, from_index: int, to_index: int) -> bool:
    """Reposition a list; *to_index* is clamped to the valid range."""
    if not _in_range(from_index, len(board.lists)):
        return False
    to_index = max(0, min(int(to_index), len(board.lists) - 1))
    if to_index == from_index:
        return False
    lst = board.lists.pop(from_index)
    board.lists.insert(to_index, lst)
    return True


def move_list(board: Board, from_index: int, direction: Direction) -> bool:
    """Swap the list at *from_index* with its left or right neighbour.

    *direction* is ``"left"``/``"right"`` (or ``-1``/``1``).  Moving the first
    list left or the last list right is a no-op.
    """
    step = _DIRECTION_STEPS.get(direction)
    if step is None:
        logger.debug("move_list ignored: unknown direction {!r}", direction)
        return False
    if not _in_range(from_index, len(board.lists)):
        return False
    target = from_index + step
    if target < 0 or target >= len(board.lists):
        return False
    return move_list_to(board, from_index, target)


# ---------------------------------------------------------------------------
# Cards
# ---------------------------------------------------------------------------

def add_card(lst: BoardList, title: str = DEFAULT_CARD_TITLE) -> Card:
    """Append a new card with an empty description to *lst*."""
    card = make_card(title)
    lst.cards.append(card)
    return card


def edit_card(card: Card, title: Optional[str], description: Optional[str]) -> None:
    """Set the title (trimmed, placeholder if empty) and the description as given."""
    card.title = normalize_title(title)
    card.description = description if description is not None else ""


def delete_card(lst: BoardList, card_id: str) -> Optional[Card]:
    idx = lst.card_index(card_id)
    if idx is None:
        logger.debug("delete_card ignored: {} not in list {}", card_id, lst.id)
        return None
    return lst.cards.pop(idx)


def move_card(
    from_list: Optional[BoardList],
    from_index: Optional[int],
    to_list: Optional[BoardList],
    to_index: Optional[int],
) -> Optional[int]:
    """Move the card at *from_index* of *from_list* into *to_list* at *to_index*.

    *to_index* is clamped to ``[0, len(to_list.cards)]`` measured after the
    card was removed, so moving within one list never overshoots.  Returns
    the card's final index in *to_list*, or None when nothing was moved.
    A missing *to_index* appends.
    """
    if from_list is None or to_list is None:
        return None
    if not _in_range(from_index, len(from_list.cards)):
        logger.debug("move_card ignored: index {} out of range for list {}", from_index, from_list.id)
        return None
    card = from_list.cards.pop(from_index)
    if to_index is None:
        to_index = len(to_list.cards)
    to_index = max(0, min(int(to_index), len(to_list.cards)))
    to_list.cards.insert(to_index, card)
    return to_index
