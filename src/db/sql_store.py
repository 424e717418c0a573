"""Implementation of GameStateStore using SQLAlchemy"""

import logging

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.config.models import RECORD_ADAPTER
from src.core.exceptions import PersistenceError
from src.core.models import GameStateRecord
from src.db.schema import DBGameState

logger = logging.getLogger(__name__)

RECORD_COLUMNS = (
    "pgn",
    "fen",
    "free",
    "board_style",
    "piece_style",
    "orientation",
    "shapes",
    "current_move_idx",
)


class SQLGameStateStore:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def read(self, board_id: str) -> GameStateRecord | None:
        try:
            row = self._fetch(board_id)
        except SQLAlchemyError as e:
            logger.warning("Could not read state of board %s: %s", board_id, e)
            return None
        if row is None:
            return None
        return self._to_record(row)

    def write(self, board_id: str, record: GameStateRecord) -> None:
        values = self._to_columns(record)
        try:
            row = self._fetch(board_id)
            if row is None:
                self.db.add(DBGameState(id=board_id, **values))
            else:
                for column, value in values.items():
                    setattr(row, column, value)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Could not store state of board {board_id}: {e}") from e

    def _fetch(self, board_id: str) -> DBGameState | None:
        query = select(DBGameState).where(DBGameState.id == board_id)
        return self.db.scalar(query)

    def _to_record(self, row: DBGameState) -> GameStateRecord | None:
        """Convert SQLAlchemy model to data transfer model. Rows that do not validate are treated as absent."""
        data = {"id": row.id, **{column: getattr(row, column) for column in RECORD_COLUMNS}}
        try:
            return RECORD_ADAPTER.validate_python(data)
        except ValidationError as e:
            logger.warning("Ignoring malformed state of board %s: %s", row.id, e)
            return None

    @staticmethod
    def _to_columns(record: GameStateRecord) -> dict[str, object]:
        """Plain column values (enums stored by value)."""
        data = RECORD_ADAPTER.dump_python(record, mode="json")
        return {column: data[column] for column in RECORD_COLUMNS}
