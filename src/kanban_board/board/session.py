"""Board session: the single owner of board state for one user session.

This is the entry-point for presentation code.  It wraps the board and its
:class:`BoardPersistence` with the intent-level operations (by id), the
dialog hand-off for destructive actions and card edits, and the live drag
resolver.  Every applied mutation is saved and then announced to listeners
with the full board; no-ops are neither saved nor announced.
"""

from __future__ import annotations

from typing import Callable, Optional

from loguru import logger

from ..constants import DEFAULT_CARD_TITLE, DEFAULT_LIST_TITLE
from . import operations as ops
from .dialogs import (
    CardEdit,
    Confirmation,
    delete_card_confirmation,
    delete_list_confirmation,
    reset_confirmation,
)
from .drag import DragResolver
from .model import Board, BoardList, Card
from .operations import Direction
from .persistence import BoardPersistence

Listener = Callable[[Board], None]


class BoardSession:
    """Explicit state container for one board.

    Parameters
    ----------
    persistence:
        Bridge used to load the initial board and to save after mutations.
    board:
        Initial board.  When omitted the stored board is loaded, falling back
        to seed data.
    """

    def __init__(self, persistence: BoardPersistence, board: Optional[Board] = None) -> None:
        self.persistence = persistence
        self.board = board if board is not None else persistence.load_or_seed()
        self.drag = DragResolver(lambda: self.board, on_move=self._commit)
        self.pending_confirmation: Optional[Confirmation] = None
        self.editing: Optional[CardEdit] = None
        self._listeners: list[Listener] = []

    # -- listeners ----------------------------------------------------------

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self.board)
            except Exception:
                logger.exception("Board listener {!r} failed", listener)

    def _commit(self) -> None:
        self.persistence.save(self.board)
        self._notify()

    # -- lists --------------------------------------------------------------

    def add_list(self, title: str = DEFAULT_LIST_TITLE) -> BoardList:
        lst = ops.add_list(self.board, title)
        self._commit()
        logger.debug("Added list {}", lst.id)
        return lst

    def rename_list(self, list_id: str, new_title: str) -> bool:
        lst = self.board.find_list(list_id)
        if lst is None:
            return False
        ops.rename_list(lst, new_title)
        self._commit()
        return True

    def move_list(self, list_id: str, direction: Direction) -> bool:
        index = self.board.list_index(list_id)
        if index is None or not ops.move_list(self.board, index, direction):
            return False
        self._commit()
        return True

    def delete_list(self, list_id: str) -> bool:
        """Remove a list immediately.  UI code should go through :meth:`request_delete_list`."""
        index = self.board.list_index(list_id)
        if index is None or ops.delete_list(self.board, index) is None:
            return False
        self._commit()
        logger.info("Deleted list {}", list_id)
        return True

    def request_delete_list(self, list_id: str) -> Optional[Confirmation]:
        lst = self.board.find_list(list_id)
        if lst is None:
            return None
        return self._ask(delete_list_confirmation(lst.title, lambda: self.delete_list(list_id)))

    # -- cards --------------------------------------------------------------

    def add_card(self, list_id: str, title: str = DEFAULT_CARD_TITLE) -> Optional[Card]:
        lst = self.board.find_list(list_id)
        if lst is None:
            return None
        card = ops.add_card(lst, title)
        self._commit()
        return card

    def edit_card(self, card_id: str, title: str, description: str) -> bool:
        card = self.board.find_card(card_id)
        if card is None:
            return False
        ops.edit_card(card, title, description)
        self._commit()
        return True

    def delete_card(self, list_id: str, card_id: str) -> bool:
        """Remove a card immediately.  UI code should go through :meth:`request_delete_card`."""
        lst = self.board.find_list(list_id)
        if lst is None or ops.delete_card(lst, card_id) is None:
            return False
        if self.editing is not None and self.editing.card_id == card_id:
            self.editing = None
        self._commit()
        return True

    def request_delete_card(self, list_id: str, card_id: str) -> Optional[Confirmation]:
        lst = self.board.find_list(list_id)
        idx = lst.card_index(card_id) if lst is not None else None
        if lst is None or idx is None:
            return None
        title = lst.cards[idx].title
        return self._ask(delete_card_confirmation(title, lambda: self.delete_card(list_id, card_id)))

    def move_card(
        self,
        from_list_id: str,
        from_index: int,
        to_list_id: str,
        to_index: Optional[int],
    ) -> Optional[int]:
        final_index = ops.move_card(
            self.board.find_list(from_list_id),
            from_index,
            self.board.find_list(to_list_id),
            to_index,
        )
        if final_index is not None:
            self._commit()
        return final_index

    # -- card editor --------------------------------------------------------

    def open_card_editor(self, list_id: str, card_id: str) -> Optional[CardEdit]:
        lst = self.board.find_list(list_id)
        idx = lst.card_index(card_id) if lst is not None else None
        if lst is None or idx is None:
            return None
        card = lst.cards[idx]
        self.editing = CardEdit(
            list_id=lst.id,
            card_id=card.id,
            title=card.title,
            description=card.description or "",
        )
        return self.editing

    def save_card_edit(self, title: str, description: str) -> bool:
        """Apply the editor's values to the card being edited.

        The edit context stays open, like a dialog whose save button does not
        close it; call :meth:`close_card_editor` when the dialog closes.
        """
        if self.editing is None:
            return False
        lst = self.board.find_list(self.editing.list_id)
        idx = lst.card_index(self.editing.card_id) if lst is not None else None
        if lst is None or idx is None:
            return False
        ops.edit_card(lst.cards[idx], title, description)
        self._commit()
        return True

    def close_card_editor(self) -> None:
        self.editing = None

    # -- whole board --------------------------------------------------------

    def reset(self) -> Board:
        """Replace the board with seed data.  UI code should use :meth:`request_reset`."""
        self.drag.end()
        self.editing = None
        self.board = self.persistence.reset()
        self._notify()
        return self.board

    def request_reset(self) -> Confirmation:
        return self._ask(reset_confirmation(self.reset))

    # -- dialogs ------------------------------------------------------------

    def _ask(self, confirmation: Confirmation) -> Confirmation:
        if self.pending_confirmation is not None:
            self.pending_confirmation.decline()
        self.pending_confirmation = confirmation
        return confirmation

    def accept_confirmation(self) -> bool:
        confirmation, self.pending_confirmation = self.pending_confirmation, None
        if confirmation is None:
            return False
        return confirmation.accept()

    def decline_confirmation(self) -> None:
        confirmation, self.pending_confirmation = self.pending_confirmation, None
        if confirmation is not None:
            confirmation.decline()
