"""Unit tests for src/db/sql_store.py and src/db/database.py"""

from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from src.core.exceptions import PersistenceError
from src.core.models import GameStateRecord
from src.core.shared_types import BoardStyle, Color, PieceStyle
from src.db.database import create_session_factory, get_db
from src.db.schema import DBGameState
from src.db.sql_store import SQLGameStateStore


def full_record(board_id: str = "abc12345") -> GameStateRecord:
    return GameStateRecord(
        id=board_id,
        pgn="1. e4 e5 2. Nf3 *",
        fen="rnbqkbnr/pppp1ppp/8/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R b KQkq - 1 2",
        free=False,
        board_style=BoardStyle.BLUE,
        piece_style=PieceStyle.ALPHA,
        orientation=Color.BLACK,
        shapes=[{"orig": "e4", "dest": "e5", "brush": "red"}],
        current_move_idx=2,
    )


def test_write_then_read(db_session: Session) -> None:
    store = SQLGameStateStore(db_session)
    record = full_record()
    store.write(record.id, record)

    found = store.read(record.id)
    assert isinstance(found, GameStateRecord)
    assert found == record


def test_record_with_only_id(db_session: Session) -> None:
    store = SQLGameStateStore(db_session)
    store.write("abc", GameStateRecord(id="abc"))
    assert store.read("abc") == GameStateRecord(id="abc")


def test_read_unknown_id(db_session: Session) -> None:
    """With an empty database, any id is a valid test case."""
    store = SQLGameStateStore(db_session)
    assert store.read("nothing") is None

    store.write("abc", full_record("abc"))
    assert store.read("other") is None


def test_last_write_wins(db_session: Session) -> None:
    store = SQLGameStateStore(db_session)
    store.write("abc", full_record("abc"))

    after = GameStateRecord(id="abc", pgn="1. d4 *", orientation=Color.WHITE)
    store.write("abc", after)
    assert store.read("abc") == after
    assert db_session.query(DBGameState).count() == 1


def test_records_are_kept_per_id(db_session: Session) -> None:
    store = SQLGameStateStore(db_session)
    first = GameStateRecord(id="first", pgn="1. e4 *")
    second = GameStateRecord(id="second", pgn="1. d4 *")
    store.write("first", first)
    store.write("second", second)

    assert store.read("first") == first
    assert store.read("second") == second


def test_malformed_row_is_treated_as_absent(db_session: Session) -> None:
    """Somebody edited the table by hand: the board should load as if nothing was stored."""
    db_session.add(DBGameState(id="abc", orientation="sideways", board_style="tartan"))
    db_session.commit()

    store = SQLGameStateStore(db_session)
    assert store.read("abc") is None


def test_write_failure_raises_persistence_error() -> None:
    session = Mock()
    session.scalar.return_value = None
    session.commit.side_effect = OperationalError("INSERT", {}, Exception("disk full"))

    store = SQLGameStateStore(session)
    with pytest.raises(PersistenceError):
        store.write("abc", GameStateRecord(id="abc"))
    session.rollback.assert_called_once()


def test_read_failure_is_treated_as_absent() -> None:
    session = Mock()
    session.scalar.side_effect = OperationalError("SELECT", {}, Exception("no such table"))

    store = SQLGameStateStore(session)
    assert store.read("abc") is None


def test_session_factory_creates_tables() -> None:
    factory = create_session_factory("sqlite://")
    session = next(get_db(factory))
    store = SQLGameStateStore(session)

    store.write("abc", full_record("abc"))
    assert store.read("abc") == full_record("abc")
