"""
Move history of one board, kept independently of the rules engine's own (linear) history.

The cursor marks which position is displayed. Moving it backward never discards the moves after it,
so the user can step back and forth through the game.
"""

from typing import Iterable, Iterator, Optional

from src.chess.moves import Move
from src.core.exceptions import HistoryError


class MoveLedger:
    # cursor value for "starting position, no move played yet"
    START = -1

    def __init__(self, starting_fen: str, moves: Iterable[Move] = ()) -> None:
        self.starting_fen = starting_fen
        self._moves: list[Move] = list(moves)
        self._cursor = len(self._moves) - 1

    def __len__(self) -> int:
        return len(self._moves)

    def __iter__(self) -> Iterator[Move]:
        return iter(self._moves)

    @property
    def cursor(self) -> int:
        return self._cursor

    @cursor.setter
    def cursor(self, index: int) -> None:
        """Clamped into [START, len - 1]."""
        self._cursor = max(self.START, min(index, len(self._moves) - 1))

    @property
    def at_start(self) -> bool:
        return self._cursor == self.START

    @property
    def at_end(self) -> bool:
        return self._cursor == len(self._moves) - 1

    @property
    def current(self) -> Optional[Move]:
        """Move that led to the displayed position (None for the starting position)."""
        return None if self.at_start else self._moves[self._cursor]

    @property
    def last_move(self) -> Optional[Move]:
        return self._moves[-1] if self._moves else None

    def append(self, move: Move) -> None:
        """Record a new move and move the cursor onto it."""
        if not self.at_end:
            raise HistoryError(
                f"Cannot add {move.san!r}: cursor at {self._cursor}, but history has {len(self)} moves."
            )
        self._moves.append(move)
        self._cursor = len(self._moves) - 1

    def at(self, index: int) -> Move:
        if not 0 <= index < len(self._moves):
            raise IndexError(f"No move at index {index} (history has {len(self)} moves).")
        return self._moves[index]

    def diagram_at(self, index: int) -> str:
        """FEN of the position after the move at 'index' (the starting FEN for START)."""
        if index == self.START:
            return self.starting_fen
        return self.at(index).fen

    def moves_until(self, index: int) -> list[Move]:
        """Moves to replay from the starting position to reach the position at 'index' (inclusive)."""
        return self._moves[: max(index, self.START) + 1]
