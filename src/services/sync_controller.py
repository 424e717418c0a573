"""
Keeps the rules engine, the board on screen and the persisted record of one board instance in sync.

After every user action the controller:
1. updates the rules engine (apply a move / replay the history up to the displayed position)
2. updates the move ledger (append / move the cursor)
3. pushes the fully recomputed visual state to the board
4. stores the new record (best effort: failing to save never breaks the board)
"""

import logging
from typing import Callable, Optional

from src.board.renderer import BoardRenderer, BoardSnapshot, BoardUpdate
from src.chess.engine import LegalityEngine
from src.chess.ledger import MoveLedger
from src.chess.moves import Move
from src.core.exceptions import (
    HistoryError,
    IllegalMoveError,
    PersistenceError,
    ReplayModeError,
)
from src.core.models import EffectiveConfig, GameStateRecord, Shape
from src.core.shared_types import (
    SQUARE_NAMES,
    STARTING_FEN,
    Color,
    Dests,
    MovableColor,
    PieceType,
    SquareName,
)
from src.db.store import GameStateStore

logger = logging.getLogger(__name__)

# Shows a message to the user (a notice/toast in the host application)
Notifier = Callable[[str], None]


def log_notice(message: str) -> None:
    logger.warning(message)


class SyncController:
    """Orchestration of rules engine, board renderer, move ledger and store for one board."""

    def __init__(
        self,
        engine: LegalityEngine,
        board: BoardRenderer,
        store: GameStateStore,
        config: EffectiveConfig,
        notify: Optional[Notifier] = None,
    ) -> None:
        self.engine = engine
        self.board = board
        self.store = store
        self.config = config
        self._notify = notify or log_notice

        self.free = config.free
        self.shapes: list[Shape] = list(config.shapes)

        # The engine was loaded with the full game: take over its history, then let the ledger lead.
        self.ledger = MoveLedger(engine.starting_diagram(), engine.history())
        self._game_notation = engine.serialize_game_notation()
        if config.remember_cursor and config.current_move_idx is not None:
            self.ledger.cursor = config.current_move_idx
            if not self.ledger.at_end:
                self._rewind()

        board.on_move(self._on_board_move)
        board.on_shapes_change(self._on_shapes_change)
        if self.shapes:
            board.set(BoardUpdate(shapes=self.shapes))
        self._sync_board()

    # --- moves ---
    def apply_move(
        self,
        origin: SquareName,
        destination: SquareName,
        promotion: Optional[PieceType] = None,
    ) -> None:
        """
        Play a move in the displayed position.
        ----
        Rejected (nothing changes, the board is put back to the engine's position) if:
        - the move is illegal (IllegalMoveError)
        - an earlier position of the game is displayed (ReplayModeError). Step forward to the last move first.
        """
        if not self.ledger.at_end:
            self._sync_board()
            raise ReplayModeError(
                f"Cannot play {origin}{destination}: showing move {self.ledger.cursor + 1} of {len(self.ledger)}."
            )

        try:
            move = self.engine.apply_move(origin, destination, promotion)
        except IllegalMoveError:
            self._sync_board()
            raise

        self.ledger.append(move)
        self._game_notation = self.engine.serialize_game_notation()
        logger.debug("Board %s: played %s (%s)", self.config.id, move.san, move.to_uci())

        self._sync_board()
        self._save()

    def new_game(self, fen: str = STARTING_FEN) -> None:
        """Start over from the given position. The previous history is dropped."""
        self.engine.load_diagram(fen)
        self.ledger = MoveLedger(self.engine.starting_diagram())
        self._game_notation = self.engine.serialize_game_notation()
        logger.info("Board %s: new game from %s", self.config.id, fen)

        self._sync_board()
        self._save()

    # --- history navigation ---
    def undo(self) -> None:
        if self.ledger.at_start:
            return
        self.go_to(self.ledger.cursor - 1)

    def redo(self) -> None:
        """Replay the next recorded move."""
        if self.ledger.at_end:
            return

        next_move = self.ledger.at(self.ledger.cursor + 1)
        self.ledger.cursor += 1
        try:
            self.engine.apply_move(
                next_move.origin, next_move.destination, next_move.promotion
            )
        except IllegalMoveError as e:
            logger.warning(
                "Board %s: could not replay %s (%s), rebuilding from history",
                self.config.id,
                next_move.san,
                e,
            )
            self._rewind()

        self._sync_board()
        self._after_navigation()

    def reset(self) -> None:
        """Show the starting position. The moves stay available for redo."""
        self.go_to(MoveLedger.START)

    def go_to(self, index: int) -> None:
        """Show the position after the move at 'index' (MoveLedger.START for the starting position)."""
        previous = self.ledger.cursor
        self.ledger.cursor = index
        if self.ledger.cursor == previous:
            return

        self._rewind()
        self._sync_board()
        self._after_navigation()

    # --- board modes ---
    def toggle_free_move(self, enabled: bool) -> None:
        """
        Free move: pieces can be dragged anywhere, nothing gets checked or recorded.
        Switching it off puts the board back to the engine's position. The mode itself is stored.
        """
        self.free = enabled
        logger.debug("Board %s: free move %s", self.config.id, "on" if enabled else "off")
        self._sync_board()
        self._save()

    def flip(self) -> None:
        self.board.toggle_orientation()

    # --- queries ---
    @property
    def current_move_idx(self) -> int:
        return self.ledger.cursor

    @property
    def is_live(self) -> bool:
        """True if the last position of the game is displayed (new moves can be played)."""
        return self.ledger.at_end

    def turn(self) -> Color:
        return self.engine.turn_color()

    def history(self) -> list[Move]:
        return list(self.ledger)

    def fen(self) -> str:
        return self.engine.serialize_diagram()

    def pgn(self) -> str:
        """Game notation of the whole recorded game (not only up to the displayed position)."""
        return self._game_notation

    def dests(self) -> Dests:
        """Legal destinations for every square that has at least one legal move."""
        dests: Dests = {}
        for square in SQUARE_NAMES:
            destinations = self.engine.legal_destinations(square)
            if destinations:
                dests[square] = sorted(destinations)
        return dests

    def board_state(self) -> BoardSnapshot:
        return self.board.state()

    def snapshot(self) -> GameStateRecord:
        return GameStateRecord(
            id=self.config.id,
            pgn=self._game_notation,
            free=self.free,
            orientation=self.board.state().orientation,
            shapes=list(self.shapes),
            current_move_idx=self.ledger.cursor if self.config.remember_cursor else None,
        )

    def close(self) -> None:
        self.board.destroy()

    # -- Board callbacks --
    def _on_board_move(self, origin: SquareName, destination: SquareName) -> None:
        if self.free:
            logger.debug("Board %s: free move %s-%s not recorded", self.config.id, origin, destination)
            return
        try:
            self.apply_move(origin, destination)
        except (IllegalMoveError, HistoryError) as e:
            logger.warning("Board %s: move rejected: %s", self.config.id, e)

    def _on_shapes_change(self, shapes: list[Shape]) -> None:
        self.shapes = list(shapes)
        self._save()

    # -- Internal helpers --
    def _rewind(self) -> None:
        """Bring the engine to the displayed position: reload the starting diagram and replay the ledger up to the cursor."""
        self.engine.load_diagram(self.ledger.starting_fen, keep_headers=True)
        for move in self.ledger.moves_until(self.ledger.cursor):
            self.engine.apply_move(move.origin, move.destination, move.promotion)

        expected = self.ledger.diagram_at(self.ledger.cursor)
        if self.engine.serialize_diagram() != expected:
            logger.warning(
                "Board %s: engine position %r differs from recorded %r",
                self.config.id,
                self.engine.serialize_diagram(),
                expected,
            )

    def _sync_board(self) -> None:
        """Push the complete visual state derived from the engine (never a partial patch)."""
        turn = self.engine.turn_color()
        current = self.ledger.current
        if self.free:
            movable, dests = MovableColor.BOTH, {}
        elif self.ledger.at_end:
            movable, dests = MovableColor(turn.value), self.dests()
        else:
            movable, dests = MovableColor.NONE, {}

        self.board.set(
            BoardUpdate(
                fen=self.engine.serialize_diagram(),
                turn_color=turn,
                check=self.engine.in_check(),
                movable_color=movable,
                free=self.free,
                dests=dests,
                last_move=(current.origin, current.destination) if current else (),
            )
        )

    def _after_navigation(self) -> None:
        """The full game did not change. Only store when the displayed position is part of the record."""
        if self.config.remember_cursor:
            self._save()

    def _save(self) -> None:
        record = self.snapshot()
        try:
            self.store.write(self.config.id, record)
        except PersistenceError as e:
            logger.warning("Board %s not saved: %s", self.config.id, e)
            self._notify(f"Chesser: could not save board ({e})")
