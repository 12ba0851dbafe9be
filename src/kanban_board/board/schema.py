"""Pydantic models describing the persisted board blob.

Used only at the storage boundary: a stored blob is validated against
:class:`BoardBlob` before it is turned into a :class:`~.model.Board`.
Unknown keys are ignored so blobs written by newer versions still load.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from .model import Board, BoardList, Card, generate_id


class CardBlob(BaseModel):
    """Stored card entry."""

    model_config = ConfigDict(extra="ignore")

    id: StrictStr = Field(default_factory=generate_id, min_length=1)
    title: StrictStr = ""
    desc: StrictStr = ""


class ListBlob(BaseModel):
    """Stored list entry."""

    model_config = ConfigDict(extra="ignore")

    id: StrictStr = Field(default_factory=generate_id, min_length=1)
    title: StrictStr = ""
    cards: list[CardBlob] = Field(default_factory=list)


class BoardBlob(BaseModel):
    """Stored board: ``{"lists": [...]}``."""

    model_config = ConfigDict(extra="ignore")

    lists: list[ListBlob]

    def to_board(self) -> Board:
        return Board(
            lists=[
                BoardList(
                    id=lst.id,
                    title=lst.title,
                    cards=[Card(id=c.id, title=c.title, description=c.desc) for c in lst.cards],
                )
                for lst in self.lists
            ]
        )
