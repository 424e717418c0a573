"""
Contract for the board rendering engine.

Modelled after the chessground API: a renderer receives partial updates ('set'), and reports
user interaction (moves, drawn shapes) through callbacks.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol

from src.core.models import Shape
from src.core.shared_types import Color, Dests, MovableColor, SquareName

MoveCallback = Callable[[SquareName, SquareName], None]
ShapesCallback = Callable[[list[Shape]], None]


@dataclass
class BoardUpdate:
    """Partial visual state. A field left at None keeps its current value on the board."""

    fen: Optional[str] = None
    orientation: Optional[Color] = None
    turn_color: Optional[Color] = None
    check: Optional[bool] = None
    movable_color: Optional[MovableColor] = None
    free: Optional[bool] = None
    dests: Optional[Dests] = None
    shapes: Optional[list[Shape]] = None
    # () clears the last-move highlight
    last_move: Optional[tuple[SquareName, ...]] = None
    view_only: Optional[bool] = None
    drawable: Optional[bool] = None


@dataclass(frozen=True)
class BoardSnapshot:
    """What the board currently shows."""

    fen: str
    orientation: Color
    turn_color: Color
    check: bool
    movable_color: MovableColor
    free: bool
    dests: Dests = field(default_factory=dict)
    shapes: list[Shape] = field(default_factory=list)
    last_move: tuple[SquareName, ...] = ()
    view_only: bool = False
    drawable: bool = True


class BoardRenderer(Protocol):
    def set(self, update: BoardUpdate) -> None: ...

    def on_move(self, callback: MoveCallback) -> None:
        """Called with (origin, destination) after the user dropped a piece."""
        ...

    def on_shapes_change(self, callback: ShapesCallback) -> None: ...

    def toggle_orientation(self) -> None: ...

    def state(self) -> BoardSnapshot: ...

    def destroy(self) -> None: ...


# Factory used by the loader: build a renderer from the initial visual config (raise InvalidConfigError if invalid)
RendererFactory = Callable[[BoardUpdate], BoardRenderer]
