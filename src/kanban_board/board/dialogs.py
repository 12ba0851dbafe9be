"""Values handed to the dialog collaborator.

The core never opens dialogs itself.  It hands out a :class:`Confirmation`
(text to show plus the action to run on accept) or a :class:`CardEdit`
snapshot, and the dialog owner calls back once the user has answered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


@dataclass
class Confirmation:
    """A pending yes/no question guarding a destructive action."""

    title: str
    message: str
    on_accept: Callable[[], None] = field(repr=False)
    closed: bool = False

    def accept(self) -> bool:
        """Run the guarded action once.  Returns False if already closed."""
        if self.closed:
            return False
        self.closed = True
        self.on_accept()
        return True

    def decline(self) -> None:
        self.closed = True


@dataclass(frozen=True)
class CardEdit:
    """Snapshot of the card being edited, for pre-filling the editor."""

    list_id: str
    card_id: str
    title: str
    description: str


def delete_list_confirmation(list_title: str, on_accept: Callable[[], None]) -> Confirmation:
    return Confirmation(
        title="Delete list",
        message=f'Delete list "{list_title}" and all its cards?',
        on_accept=on_accept,
    )


def delete_card_confirmation(card_title: str, on_accept: Callable[[], None]) -> Confirmation:
    return Confirmation(
        title="Delete card",
        message=f'Delete card "{card_title}"?',
        on_accept=on_accept,
    )


def reset_confirmation(on_accept: Callable[[], None]) -> Confirmation:
    return Confirmation(
        title="Reset board",
        message="This will clear the board and load demo data again.",
        on_accept=on_accept,
    )
