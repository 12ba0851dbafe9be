"""Live drag-and-drop reordering of cards.

A drag gesture runs from pointer-down to pointer-release.  While it is
active, the presentation layer reports what the pointer is over:

* a list container with no card beneath the pointer -> the card goes to the
  end of that list;
* a card -> the card goes before the hovered card when the pointer is above
  the hovered card's vertical midpoint, after it otherwise.

Each report is resolved to a target ``(list, index)`` and applied right away
through :func:`~.operations.move_card`, so cards part to make room while the
pointer moves.  Dropping applies the same rule once more and ends the
gesture; cancelling just ends it.  There is no revert to the origin.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from loguru import logger

from .model import Board, BoardList
from .operations import move_card


@dataclass(frozen=True)
class Rect:
    """Vertical extent of an on-screen element (y grows downward)."""

    top: float
    height: float

    @property
    def midpoint(self) -> float:
        return self.top + self.height / 2


def is_after(pointer_y: float, rect: Rect) -> bool:
    """True when the pointer is at or below the element's vertical midpoint."""
    return pointer_y >= rect.midpoint


@dataclass
class DragGesture:
    """State of one in-progress drag.  Created on start, dropped on end.

    ``list_id``/``index`` track where the card sits now.  ``origin_list_id``,
    ``origin_index`` and ``moves`` are diagnostic: they are reported in the log
    when the gesture ends and returned to the caller of :meth:`DragResolver.end`.
    """

    card_id: str
    origin_list_id: str
    origin_index: int
    list_id: str
    index: int
    moves: int = 0


class DragResolver:
    """Turn pointer reports into card moves for one gesture at a time.

    Parameters
    ----------
    board_provider:
        Returns the board being edited.  Called on every event so a board
        replaced between events (e.g. by a reset) is picked up.
    on_move:
        Called after every applied move (persist and re-render hook).
    """

    def __init__(
        self,
        board_provider: Callable[[], Board],
        on_move: Optional[Callable[[], None]] = None,
    ) -> None:
        self._board_provider = board_provider
        self._on_move = on_move
        self.gesture: Optional[DragGesture] = None

    @property
    def active(self) -> bool:
        return self.gesture is not None

    # -- gesture lifecycle --------------------------------------------------

    def start(self, list_id: str, card_index: int) -> Optional[DragGesture]:
        """Begin dragging the card at *card_index* of list *list_id*."""
        board = self._board_provider()
        lst = board.find_list(list_id)
        if lst is None or not 0 <= card_index < len(lst.cards):
            logger.debug("Drag start ignored: no card {} in list {}", card_index, list_id)
            self.gesture = None
            return None
        card = lst.cards[card_index]
        self.gesture = DragGesture(
            card_id=card.id,
            origin_list_id=lst.id,
            origin_index=card_index,
            list_id=lst.id,
            index=card_index,
        )
        return self.gesture

    def end(self) -> Optional[DragGesture]:
        """Finish the gesture (drop or cancel) and return it."""
        gesture, self.gesture = self.gesture, None
        if gesture is not None:
            logger.debug(
                "Drag of card {} ended: {}[{}] -> {}[{}] after {} move(s)",
                gesture.card_id,
                gesture.origin_list_id,
                gesture.origin_index,
                gesture.list_id,
                gesture.index,
                gesture.moves,
            )
        return gesture

    # -- pointer reports ----------------------------------------------------

    def over_list(self, list_id: str) -> Optional[int]:
        """Pointer is over a list container with no card beneath it."""
        located = self._locate()
        if located is None:
            return None
        gesture, board, src_list, src_index = located
        target = board.find_list(list_id)
        if target is None:
            return None
        if target is src_list:
            to_index = len(target.cards) - 1
        else:
            to_index = len(target.cards)
        return self._apply(gesture, src_list, src_index, target, to_index)

    def over_card(
        self,
        list_id: str,
        card_index: int,
        pointer_y: float,
        rect: Rect,
    ) -> Optional[int]:
        """Pointer is over the card at *card_index* of list *list_id*."""
        located = self._locate()
        if located is None:
            return None
        gesture, board, src_list, src_index = located
        target = board.find_list(list_id)
        if target is None or not 0 <= card_index < len(target.cards):
            return None
        if target is src_list and card_index == src_index:
            return None
        to_index = card_index + (1 if is_after(pointer_y, rect) else 0)
        if target is src_list and src_index < to_index:
            # Indices past the dragged card shift up by one once it is lifted out.
            to_index -= 1
        return self._apply(gesture, src_list, src_index, target, to_index)

    def drop_on_list(self, list_id: str) -> Optional[int]:
        result = self.over_list(list_id)
        self.end()
        return result

    def drop_on_card(
        self,
        list_id: str,
        card_index: int,
        pointer_y: float,
        rect: Rect,
    ) -> Optional[int]:
        result = self.over_card(list_id, card_index, pointer_y, rect)
        self.end()
        return result

    # -- internals ----------------------------------------------------------

    def _locate(self) -> Optional[tuple[DragGesture, Board, BoardList, int]]:
        gesture = self.gesture
        if gesture is None:
            return None
        board = self._board_provider()
        located = board.locate_card(gesture.card_id)
        if located is None:
            logger.debug("Dragged card {} vanished, ending gesture", gesture.card_id)
            self.gesture = None
            return None
        src_list, src_index = located
        return gesture, board, src_list, src_index

    def _apply(
        self,
        gesture: DragGesture,
        src_list: BoardList,
        src_index: int,
        target: BoardList,
        to_index: int,
    ) -> Optional[int]:
        if target is src_list and to_index == src_index:
            return None
        final_index = move_card(src_list, src_index, target, to_index)
        if final_index is None:
            return None
        gesture.list_id = target.id
        gesture.index = final_index
        gesture.moves += 1
        if self._on_move is not None:
            self._on_move()
        return final_index
