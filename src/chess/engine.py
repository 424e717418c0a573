"""
Contract for the move-legality engine + the implementation backed by python-chess.

The synchronization controller only talks to the Protocol. Anything that can load a FEN/PGN,
list legal destinations and apply a move can be plugged in.
"""

import io
import logging
from typing import Optional, Protocol

import chess
import chess.pgn

from src.chess.moves import Move
from src.core.exceptions import IllegalMoveError, InvalidPositionError
from src.core.shared_types import Color, PieceType, SquareName

logger = logging.getLogger(__name__)

# Computed from the board on export, never taken over from a loaded game
DERIVED_HEADERS = ("FEN", "SetUp", "Result")


class LegalityEngine(Protocol):
    """Rules state of one board instance."""

    def load_diagram(self, fen: str, keep_headers: bool = False) -> None:
        """
        Replace the game by the position in 'fen'. Clears the engine's own move history.
        keep_headers: keep the tags (Event, White, ...) of the loaded game, when rewinding within that game.
        """
        ...

    def load_game_notation(self, pgn: str) -> None:
        """Replace the game by the (full) game in 'pgn', tags included."""
        ...

    def serialize_diagram(self) -> str: ...

    def serialize_game_notation(self) -> str: ...

    def starting_diagram(self) -> str:
        """FEN of the position the currently loaded game started from."""
        ...

    def legal_destinations(self, square: SquareName) -> set[SquareName]: ...

    def apply_move(
        self,
        origin: SquareName,
        destination: SquareName,
        promotion: Optional[PieceType] = None,
    ) -> Move:
        """Play a move for the side to move. Raise IllegalMoveError (and change nothing) if not allowed."""
        ...

    def turn_color(self) -> Color: ...

    def in_check(self) -> bool: ...

    def history(self) -> list[Move]:
        """Moves played since the starting diagram, oldest first."""
        ...


class PythonChessEngine:
    """LegalityEngine on top of a python-chess Board."""

    def __init__(self, fen: Optional[str] = None) -> None:
        self._board = chess.Board()
        # tags the user wrote in a loaded game, without the placeholder ones ('?')
        self._headers: dict[str, str] = {}
        if fen:
            self.load_diagram(fen)

    # --- loading ---
    def load_diagram(self, fen: str, keep_headers: bool = False) -> None:
        try:
            self._board = chess.Board(fen)
        except ValueError as e:
            raise InvalidPositionError(f"Cannot load FEN {fen!r}: {e}") from e
        if not keep_headers:
            self._headers = {}

    def load_game_notation(self, pgn: str) -> None:
        game = chess.pgn.read_game(io.StringIO(pgn))
        if game is None:
            raise InvalidPositionError(f"No game found in PGN {pgn!r}.")
        if game.errors:
            raise InvalidPositionError(f"Cannot load PGN {pgn!r}: {game.errors[0]}")

        # board() of the last node replays the mainline, so the move stack is populated
        self._board = game.end().board()
        placeholders = chess.pgn.Headers()
        self._headers = {
            name: value
            for name, value in game.headers.items()
            if name not in DERIVED_HEADERS and placeholders.get(name) != value
        }

    # --- serialization ---
    def serialize_diagram(self) -> str:
        return self._board.fen()

    def serialize_game_notation(self) -> str:
        """
        PGN of the game so far.
        Games from the standard starting position without tags are exported as movetext only ('1. e4 e5 *'),
        others carry the headers (FEN/SetUp are needed to replay them, the user's tags are kept).
        """
        game = chess.pgn.Game.from_board(self._board)
        game.headers.update(self._headers)
        from_standard_start = self._board.root() == chess.Board()
        exporter = chess.pgn.StringExporter(
            headers=bool(self._headers) or not from_standard_start,
            variations=False,
            comments=False,
        )
        return game.accept(exporter)

    def starting_diagram(self) -> str:
        return self._board.root().fen()

    # --- queries ---
    def legal_destinations(self, square: SquareName) -> set[SquareName]:
        try:
            origin = chess.parse_square(square)
        except ValueError:
            return set()
        return {
            chess.square_name(move.to_square)
            for move in self._board.legal_moves
            if move.from_square == origin
        }

    def turn_color(self) -> Color:
        return Color.WHITE if self._board.turn == chess.WHITE else Color.BLACK

    def in_check(self) -> bool:
        return self._board.is_check()

    def history(self) -> list[Move]:
        """Replay the move stack from the root, so every Move knows its SAN and resulting FEN."""
        replay = self._board.root()
        moves = []
        for move in self._board.move_stack:
            moves.append(self._push(replay, move))
        return moves

    # --- mutation ---
    def apply_move(
        self,
        origin: SquareName,
        destination: SquareName,
        promotion: Optional[PieceType] = None,
    ) -> Move:
        try:
            from_square = chess.parse_square(origin)
            to_square = chess.parse_square(destination)
        except ValueError as e:
            raise IllegalMoveError(f"Move not allowed: {origin}{destination}") from e

        promotion_type = self._promotion_type(from_square, to_square, promotion)
        move = chess.Move(from_square, to_square, promotion=promotion_type)
        if move not in self._board.legal_moves:
            raise IllegalMoveError(f"Move not allowed: {move.uci()}")
        return self._push(self._board, move)

    # -- PRIVATE HELPERS ---
    def _promotion_type(
        self,
        from_square: chess.Square,
        to_square: chess.Square,
        promotion: Optional[PieceType],
    ) -> Optional[chess.PieceType]:
        """Drag and drop gives no promotion piece: a pawn reaching the last rank becomes a queen."""
        if promotion is not None:
            return chess.PIECE_NAMES.index(promotion.value)

        piece = self._board.piece_at(from_square)
        if piece is None or piece.piece_type != chess.PAWN:
            return None
        last_rank = 7 if piece.color == chess.WHITE else 0
        if chess.square_rank(to_square) == last_rank:
            return chess.QUEEN
        return None

    @staticmethod
    def _push(board: chess.Board, move: chess.Move) -> Move:
        san = board.san(move)
        board.push(move)
        return Move(
            origin=chess.square_name(move.from_square),
            destination=chess.square_name(move.to_square),
            san=san,
            fen=board.fen(),
            promotion=PieceType(chess.piece_name(move.promotion))
            if move.promotion
            else None,
        )
