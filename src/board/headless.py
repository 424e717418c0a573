"""
In-memory board renderer.
----
Behaves like an interactive board without drawing anything: keeps the visual state, validates drags
against the destinations it was given, and fires the same callbacks a graphical board would.
Used by hosts without a graphical board, and to drive the controller in tests.
"""

import logging
from dataclasses import fields, replace
from typing import Optional

import chess

from src.board.renderer import (
    BoardSnapshot,
    BoardUpdate,
    MoveCallback,
    ShapesCallback,
)
from src.core.exceptions import InvalidConfigError
from src.core.models import Shape
from src.core.shared_types import Color, MovableColor, SquareName

logger = logging.getLogger(__name__)

STARTING_BOARD_FEN = chess.STARTING_BOARD_FEN


class HeadlessBoard:
    def __init__(self, config: Optional[BoardUpdate] = None) -> None:
        config = config or BoardUpdate()
        self._placement = chess.BaseBoard()
        self._state = BoardSnapshot(
            fen=STARTING_BOARD_FEN,
            orientation=Color.WHITE,
            turn_color=Color.WHITE,
            check=False,
            movable_color=MovableColor.BOTH,
            free=True,
        )
        self._move_callbacks: list[MoveCallback] = []
        self._shapes_callbacks: list[ShapesCallback] = []
        self.destroyed = False
        self.set(config)

    # --- BoardRenderer API ---
    def set(self, update: BoardUpdate) -> None:
        changes = {
            f.name: getattr(update, f.name)
            for f in fields(update)
            if getattr(update, f.name) is not None
        }
        if "orientation" in changes:
            try:
                changes["orientation"] = Color(changes["orientation"])
            except ValueError as e:
                raise InvalidConfigError(
                    f"Invalid orientation: {changes['orientation']!r}"
                ) from e
        if "fen" in changes:
            changes["fen"] = self._load_placement(changes["fen"])
        self._state = replace(self._state, **changes)

    def on_move(self, callback: MoveCallback) -> None:
        self._move_callbacks.append(callback)

    def on_shapes_change(self, callback: ShapesCallback) -> None:
        self._shapes_callbacks.append(callback)

    def toggle_orientation(self) -> None:
        self._state = replace(self._state, orientation=self._state.orientation.opposite)

    def state(self) -> BoardSnapshot:
        return self._state

    def destroy(self) -> None:
        self._move_callbacks.clear()
        self._shapes_callbacks.clear()
        self.destroyed = True

    # --- user interaction ---
    def user_move(self, origin: SquareName, destination: SquareName) -> bool:
        """
        The user drags a piece from origin to destination.
        Returns False (and leaves the board untouched) if the board does not allow that drag.
        """
        if not self._allows(origin, destination):
            logger.debug("Board rejected drag %s-%s", origin, destination)
            return False

        from_square = chess.parse_square(origin)
        piece = self._placement.remove_piece_at(from_square)
        self._placement.set_piece_at(chess.parse_square(destination), piece)
        self._state = replace(
            self._state,
            fen=self._placement.board_fen(),
            last_move=(origin, destination),
        )
        for callback in list(self._move_callbacks):
            callback(origin, destination)
        return True

    def user_draw(self, shapes: list[Shape]) -> bool:
        if self._state.view_only or not self._state.drawable:
            return False
        self._state = replace(self._state, shapes=list(shapes))
        for callback in list(self._shapes_callbacks):
            callback(list(shapes))
        return True

    # -- PRIVATE HELPERS ---
    def _load_placement(self, fen: str) -> str:
        """Accept a full FEN or only its piece placement part."""
        try:
            self._placement = chess.BaseBoard(fen.split(" ")[0])
        except ValueError as e:
            raise InvalidConfigError(f"Invalid board FEN: {fen!r}") from e
        return self._placement.board_fen()

    def _allows(self, origin: SquareName, destination: SquareName) -> bool:
        if self._state.view_only or self.destroyed:
            return False
        try:
            piece = self._placement.piece_at(chess.parse_square(origin))
            chess.parse_square(destination)
        except ValueError:
            return False
        if piece is None or origin == destination:
            return False
        if self._state.free:
            return True

        movable = self._state.movable_color
        piece_color = Color.WHITE if piece.color == chess.WHITE else Color.BLACK
        if movable == MovableColor.NONE or movable not in (
            MovableColor.BOTH,
            MovableColor(piece_color.value),
        ):
            return False
        return destination in self._state.dests.get(origin, [])
