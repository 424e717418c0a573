"""
Boundary layer data model(s).

These objects are what crosses the boundaries between the controller, the configuration layer and the stores.
(Decouples the pydantic models of the declarative block and the SQLAlchemy rows from what the controller works with)
"""

from dataclasses import dataclass, field, fields
from typing import Any, Optional

from src.core.shared_types import BoardStyle, Color, PieceStyle

# Drawn annotations are kept as plain mappings ({"orig": "e2", "dest": "e4", "brush": "green"}),
# so that keys the renderer adds later survive a round-trip through any store.
Shape = dict[str, Any]


@dataclass
class GameStateRecord:
    """Persisted snapshot of one board instance, keyed by its id."""

    id: str
    pgn: Optional[str] = None
    fen: Optional[str] = None
    free: Optional[bool] = None
    board_style: Optional[BoardStyle] = None
    piece_style: Optional[PieceStyle] = None
    orientation: Optional[Color] = None
    shapes: Optional[list[Shape]] = None
    current_move_idx: Optional[int] = None


# Everything but the identity may be overwritten by a persisted record when merging.
MERGEABLE_FIELDS: tuple[str, ...] = tuple(
    f.name for f in fields(GameStateRecord) if f.name != "id"
)


@dataclass
class EffectiveConfig:
    """Configuration a board gets built from: declared block + persisted record + defaults."""

    id: str
    board_style: BoardStyle
    piece_style: PieceStyle
    orientation: Color
    free: bool
    view_only: bool
    drawable: bool
    remember_cursor: bool
    pgn: Optional[str] = None
    fen: Optional[str] = None
    shapes: list[Shape] = field(default_factory=list)
    current_move_idx: Optional[int] = None
    id_generated: bool = False
