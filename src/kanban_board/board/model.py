"""Board data model: cards, lists and the board aggregate.

A :class:`Board` is an ordered sequence of :class:`BoardList` columns, each
holding an ordered sequence of :class:`Card` items.  Order is significant
everywhere: list order is left-to-right display order and card order is
top-to-bottom processing order.

Ids are opaque strings, immutable once assigned.  Serialization follows the
stored blob layout ``{"lists": [{"id", "title", "cards": [{"id", "title",
"desc"}]}]}``, so the card description is written under ``desc``.  Reading a
stored blob back is the job of :mod:`.schema`, which validates it first.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------

def generate_id() -> str:
    """Opaque random identifier: 16 hex chars (64 bits) taken from ``uuid4``."""
    return uuid.uuid4().hex[:16]


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------

@dataclass
class Card:
    """A single task item."""

    title: str = ""
    description: str = ""
    id: str = field(default_factory=generate_id)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "desc": self.description}


@dataclass
class BoardList:
    """A named, ordered column of cards."""

    title: str = ""
    cards: list[Card] = field(default_factory=list)
    id: str = field(default_factory=generate_id)

    def card_index(self, card_id: str) -> Optional[int]:
        for idx, card in enumerate(self.cards):
            if card.id == card_id:
                return idx
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "cards": [c.to_dict() for c in self.cards],
        }


@dataclass
class Board:
    """Root aggregate: the ordered lists of a single board."""

    lists: list[BoardList] = field(default_factory=list)

    # -- lookups ------------------------------------------------------------

    def list_index(self, list_id: str) -> Optional[int]:
        for idx, lst in enumerate(self.lists):
            if lst.id == list_id:
                return idx
        return None

    def find_list(self, list_id: str) -> Optional[BoardList]:
        idx = self.list_index(list_id)
        return self.lists[idx] if idx is not None else None

    def locate_card(self, card_id: str) -> Optional[tuple[BoardList, int]]:
        """Return ``(owning list, index)`` for *card_id*, or None."""
        for lst in self.lists:
            idx = lst.card_index(card_id)
            if idx is not None:
                return lst, idx
        return None

    def find_card(self, card_id: str) -> Optional[Card]:
        located = self.locate_card(card_id)
        if located is None:
            return None
        lst, idx = located
        return lst.cards[idx]

    def iter_cards(self) -> Iterator[Card]:
        for lst in self.lists:
            yield from lst.cards

    def card_count(self) -> int:
        return sum(len(lst.cards) for lst in self.lists)

    def all_list_ids(self) -> list[str]:
        return [lst.id for lst in self.lists]

    def all_card_ids(self) -> list[str]:
        return [card.id for card in self.iter_cards()]

    def has_unique_ids(self) -> bool:
        list_ids = self.all_list_ids()
        card_ids = self.all_card_ids()
        return len(set(list_ids)) == len(list_ids) and len(set(card_ids)) == len(card_ids)

    # -- serialization ------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted blob layout."""
        return {"lists": [lst.to_dict() for lst in self.lists]}


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

def make_list(title: str, cards: Optional[list[Card]] = None) -> BoardList:
    """Create a list with a fresh id.  The title is kept verbatim."""
    return BoardList(title=title, cards=list(cards) if cards else [])


def make_card(title: str, description: str = "") -> Card:
    """Create a card with a fresh id.  The title is kept verbatim."""
    return Card(title=title, description=description)
