"""Tests for storage adapters and the persistence bridge."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import pytest

from kanban_board.board.model import Board, BoardList, Card
from kanban_board.board.persistence import BoardPersistence, dump_board, parse_board, seed_board
from kanban_board.board.storage import (
    FileStorage,
    InvalidStorageKey,
    MemoryStorage,
    StorageAdapter,
)
from kanban_board.constants import STORAGE_KEY
from kanban_board.io_utils import DirectoryLock


def _sample_board() -> Board:
    return Board(
        lists=[
            BoardList(
                id="l1",
                title="To Do",
                cards=[
                    Card(id="c1", title="First", description="multi\nline"),
                    Card(id="c2", title="Second", description=""),
                ],
            ),
            BoardList(id="l2", title="Empty", cards=[]),
        ]
    )


class _FailingStorage(StorageAdapter):
    def get(self, key: str) -> Optional[str]:
        raise OSError("disk gone")

    def set(self, key: str, value: str) -> None:
        raise OSError("quota exceeded")


# ---------------------------------------------------------------------------
# Storage adapters
# ---------------------------------------------------------------------------

class TestMemoryStorage:
    def test_get_set(self) -> None:
        storage = MemoryStorage()
        assert storage.get("k") is None
        storage.set("k", "v")
        assert storage.get("k") == "v"
        storage.set("k", "w")
        assert storage.get("k") == "w"


class TestFileStorage:
    def test_round_trip(self, tmp_path: Path) -> None:
        storage = FileStorage(tmp_path / "store")
        assert storage.get(STORAGE_KEY) is None
        storage.set(STORAGE_KEY, '{"lists": []}')
        assert storage.get(STORAGE_KEY) == '{"lists": []}'
        assert (tmp_path / "store" / f"{STORAGE_KEY}.json").exists()

    def test_overwrite_leaves_no_tmp(self, tmp_path: Path) -> None:
        storage = FileStorage(tmp_path)
        storage.set("board", "one")
        storage.set("board", "two")
        assert storage.get("board") == "two"
        assert not list(tmp_path.glob("*.tmp"))

    def test_survives_new_instance(self, tmp_path: Path) -> None:
        FileStorage(tmp_path).set("board", "persistent")
        assert FileStorage(tmp_path).get("board") == "persistent"

    def test_lock_released_after_each_call(self, tmp_path: Path) -> None:
        storage = FileStorage(tmp_path / "store")
        storage.set("board", "x")
        assert (tmp_path / "store" / ".lock").exists()
        with DirectoryLock(tmp_path / "store") as lock:
            assert lock.held
        assert storage.get("board") == "x"

    @pytest.mark.parametrize("key", ["../escape", "a/b", "", ".."])
    def test_rejects_unsafe_keys(self, tmp_path: Path, key: str) -> None:
        storage = FileStorage(tmp_path)
        with pytest.raises(InvalidStorageKey):
            storage.set(key, "x")


# ---------------------------------------------------------------------------
# Blob parsing
# ---------------------------------------------------------------------------

class TestParseBoard:
    def test_round_trip_preserves_everything(self) -> None:
        board = _sample_board()
        restored = parse_board(dump_board(board))
        assert restored is not None
        assert restored.to_dict() == board.to_dict()
        assert restored.lists[0].cards[0].description == "multi\nline"

    def test_blob_uses_desc_key(self) -> None:
        data = json.loads(dump_board(_sample_board()))
        assert set(data) == {"lists"}
        assert set(data["lists"][0]) == {"id", "title", "cards"}
        assert set(data["lists"][0]["cards"][0]) == {"id", "title", "desc"}

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            "",
            "{not json",
            '"just a string"',
            "[]",
            "null",
            '{"lists": "not-an-array"}',
            '{"lists": {"a": 1}}',
            '{"other": []}',
            '{"lists": [42]}',
            '{"lists": [{"id": "l1", "title": "x", "cards": "nope"}]}',
            '{"lists": [{"id": "l1", "title": "x", "cards": [{"id": 7, "title": "c"}]}]}',
            '{"lists": [{"id": "l1", "title": null, "cards": []}]}',
        ],
    )
    def test_invalid_blobs_are_rejected(self, raw: Optional[str]) -> None:
        assert parse_board(raw) is None

    def test_deeply_nested_blob_rejected(self) -> None:
        raw = '{"lists": ' + "[" * 100000 + "]" * 100000 + "}"
        assert parse_board(raw) is None

    def test_duplicate_card_ids_rejected(self) -> None:
        raw = json.dumps(
            {
                "lists": [
                    {"id": "l1", "title": "A", "cards": [{"id": "c1", "title": "x", "desc": ""}]},
                    {"id": "l2", "title": "B", "cards": [{"id": "c1", "title": "y", "desc": ""}]},
                ]
            }
        )
        assert parse_board(raw) is None

    def test_missing_optional_fields_are_filled(self) -> None:
        raw = json.dumps({"lists": [{"id": "l1", "title": "A", "cards": [{"id": "c1", "title": "x"}]}]})
        board = parse_board(raw)
        assert board is not None
        assert board.lists[0].cards[0].description == ""

    def test_missing_ids_are_generated(self) -> None:
        raw = json.dumps({"lists": [{"title": "Only title", "cards": [{"title": "card"}, {"title": "other"}]}]})
        board = parse_board(raw)
        assert board is not None
        assert board.lists[0].id
        assert board.has_unique_ids()
        assert [c.title for c in board.lists[0].cards] == ["card", "other"]

    def test_empty_id_rejected(self) -> None:
        raw = json.dumps({"lists": [{"id": "", "title": "A", "cards": []}]})
        assert parse_board(raw) is None

    def test_unknown_keys_ignored(self) -> None:
        raw = json.dumps({"lists": [], "theme": "dark"})
        board = parse_board(raw)
        assert board is not None
        assert board.lists == []


# ---------------------------------------------------------------------------
# BoardPersistence
# ---------------------------------------------------------------------------

class TestBoardPersistence:
    def test_save_then_load(self) -> None:
        storage = MemoryStorage()
        persistence = BoardPersistence(storage)
        board = _sample_board()
        persistence.save(board)
        loaded = persistence.load()
        assert loaded is not None
        assert loaded is not board
        assert loaded.to_dict() == board.to_dict()
        assert storage.get(STORAGE_KEY) is not None

    def test_load_missing_returns_none(self) -> None:
        assert BoardPersistence(MemoryStorage()).load() is None

    @pytest.mark.parametrize("raw", ["{not json", '{"lists": "not-an-array"}'])
    def test_corrupt_blob_falls_back_to_seed(self, raw: str) -> None:
        persistence = BoardPersistence(MemoryStorage({STORAGE_KEY: raw}))
        assert persistence.load() is None
        board = persistence.load_or_seed()
        assert [lst.title for lst in board.lists] == ["To Do", "In Progress", "Done"]

    def test_deeply_nested_blob_falls_back_to_seed(self) -> None:
        raw = '{"lists": ' + "[" * 100000 + "]" * 100000 + "}"
        persistence = BoardPersistence(MemoryStorage({STORAGE_KEY: raw}))
        assert persistence.load() is None
        assert persistence.load_or_seed().card_count() == 5

    def test_custom_key(self) -> None:
        storage = MemoryStorage()
        BoardPersistence(storage, key="other").save(_sample_board())
        assert storage.get("other") is not None
        assert storage.get(STORAGE_KEY) is None

    def test_reset_overwrites(self) -> None:
        storage = MemoryStorage()
        persistence = BoardPersistence(storage)
        persistence.save(_sample_board())
        board = persistence.reset()
        loaded = persistence.load()
        assert loaded is not None
        assert loaded.to_dict() == board.to_dict()
        assert loaded.card_count() == 5

    def test_save_failure_is_swallowed(self) -> None:
        persistence = BoardPersistence(_FailingStorage())
        persistence.save(_sample_board())
        assert persistence.load() is None

    def test_with_file_storage(self, tmp_path: Path) -> None:
        BoardPersistence(FileStorage(tmp_path)).save(_sample_board())
        loaded = BoardPersistence(FileStorage(tmp_path)).load()
        assert loaded is not None
        assert [lst.id for lst in loaded.lists] == ["l1", "l2"]


class TestSeed:
    def test_default_layout(self) -> None:
        board = seed_board()
        assert [lst.title for lst in board.lists] == ["To Do", "In Progress", "Done"]
        assert [len(lst.cards) for lst in board.lists] == [2, 2, 1]
        assert board.lists[0].cards[0].title == "Draft project README"
        assert board.lists[0].cards[0].description == "Outline features and usage"
        assert board.has_unique_ids()

    def test_fresh_ids_each_time(self) -> None:
        assert set(seed_board().all_card_ids()).isdisjoint(seed_board().all_card_ids())

    def test_custom_layout(self) -> None:
        board = seed_board([{"title": "Only", "cards": [{"title": "x", "desc": "y"}]}])
        assert len(board.lists) == 1
        assert board.lists[0].cards[0].description == "y"

    def test_persistence_uses_custom_layout(self) -> None:
        persistence = BoardPersistence(MemoryStorage(), seed_layout=[{"title": "Mine", "cards": []}])
        assert [lst.title for lst in persistence.reset().lists] == ["Mine"]
