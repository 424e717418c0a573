"""Protocol store (implemented for SQLAlchemy, any key-value mapping, and the declarative block itself)"""

from typing import Protocol

from src.core.models import GameStateRecord


class GameStateStore(Protocol):
    """Persistence layer of board states, keyed by board id."""

    def read(self, board_id: str) -> GameStateRecord | None:
        """Get the record of a board, if there is one. Unreadable/malformed data counts as no record."""
        ...

    def write(self, board_id: str, record: GameStateRecord) -> None:
        """Store the record under the board id (last write wins). Raise PersistenceError on failure."""
        ...
