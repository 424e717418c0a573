"""Unit tests for src/db/kv_store.py"""

import json
from unittest.mock import Mock

import pytest

from src.board.headless import HeadlessBoard
from src.chess.engine import PythonChessEngine
from src.core.exceptions import PersistenceError
from src.core.models import EffectiveConfig, GameStateRecord
from src.core.shared_types import BoardStyle, Color, PieceStyle
from src.db.kv_store import KEY_PREFIX, KeyValueGameStateStore
from src.services.sync_controller import SyncController


def test_write_then_read() -> None:
    storage: dict[str, str] = {}
    store = KeyValueGameStateStore(storage)
    record = GameStateRecord(
        id="abc",
        pgn="1. e4 *",
        free=True,
        board_style=BoardStyle.IC,
        piece_style=PieceStyle.HORSEY,
        orientation=Color.BLACK,
        shapes=[{"orig": "e4"}],
        current_move_idx=0,
    )
    store.write("abc", record)

    assert list(storage) == [f"{KEY_PREFIX}abc"]
    assert json.loads(storage[f"{KEY_PREFIX}abc"])["orientation"] == "black"
    assert store.read("abc") == record


def test_read_unknown_id() -> None:
    store = KeyValueGameStateStore({})
    assert store.read("abc") is None


def test_malformed_json_is_treated_as_absent() -> None:
    storage = {f"{KEY_PREFIX}abc": "{not json"}
    store = KeyValueGameStateStore(storage)
    assert store.read("abc") is None


def test_invalid_values_are_treated_as_absent() -> None:
    storage = {f"{KEY_PREFIX}abc": json.dumps({"id": "abc", "orientation": "upside down"})}
    store = KeyValueGameStateStore(storage)
    assert store.read("abc") is None


def test_custom_prefix_keeps_stores_apart() -> None:
    storage: dict[str, str] = {}
    first = KeyValueGameStateStore(storage, prefix="one:")
    second = KeyValueGameStateStore(storage, prefix="two:")
    first.write("abc", GameStateRecord(id="abc", pgn="1. e4 *"))

    assert second.read("abc") is None
    assert first.read("abc") == GameStateRecord(id="abc", pgn="1. e4 *")


class BrokenStorage(dict):
    """Storage that fails like a full quota or a dbm file that cannot be accessed."""

    def __getitem__(self, key: str) -> str:
        raise OSError("storage not accessible")

    def get(self, key: str, default: object = None) -> str:
        raise OSError("storage not accessible")

    def __setitem__(self, key: str, value: str) -> None:
        raise OSError("quota exceeded")


def test_failing_write_raises_persistence_error() -> None:
    store = KeyValueGameStateStore(BrokenStorage())
    with pytest.raises(PersistenceError):
        store.write("abc", GameStateRecord(id="abc", pgn="1. e4 *"))


def test_failing_read_is_treated_as_absent() -> None:
    store = KeyValueGameStateStore(BrokenStorage())
    assert store.read("abc") is None


def test_failing_storage_does_not_break_the_board() -> None:
    notify = Mock()
    config = EffectiveConfig(
        id="abc",
        board_style=BoardStyle.BROWN,
        piece_style=PieceStyle.CBURNETT,
        orientation=Color.WHITE,
        free=False,
        view_only=False,
        drawable=True,
        remember_cursor=False,
    )
    controller = SyncController(
        PythonChessEngine(), HeadlessBoard(), KeyValueGameStateStore(BrokenStorage()), config, notify=notify
    )

    controller.apply_move("e2", "e4")
    assert len(controller.ledger) == 1
    assert controller.turn() == Color.BLACK
    notify.assert_called_once()
