"""Declarative block model: what a user writes inside a ```chesser block."""

from dataclasses import asdict
from typing import Optional, Self

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from src.core.models import GameStateRecord, Shape
from src.core.shared_types import BoardStyle, Color, PieceStyle, SquareName


class DrawShape(BaseModel):
    """Annotation drawn on the board (arrow when dest is set, circle otherwise)."""

    model_config = ConfigDict(extra="allow")

    orig: SquareName
    dest: Optional[SquareName] = None
    brush: Optional[str] = None


class DeclaredConfig(BaseModel):
    """
    Keys recognized in the block are camelCase (as users write them). Unknown keys are kept in model_extra,
    so writing the block back never loses them.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[str] = None
    fen: Optional[str] = None
    pgn: Optional[str] = None
    orientation: Optional[Color] = None
    free: Optional[bool] = None
    view_only: Optional[bool] = Field(default=None, alias="viewOnly")
    drawable: Optional[bool] = None
    board_style: Optional[BoardStyle] = Field(default=None, alias="boardStyle")
    piece_style: Optional[PieceStyle] = Field(default=None, alias="pieceStyle")
    shapes: Optional[list[DrawShape]] = None
    current_move_idx: Optional[int] = Field(default=None, alias="currentMoveIdx", ge=-1)
    remember_cursor: Optional[bool] = Field(default=None, alias="rememberCursor")

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, value: object) -> Optional[str]:
        """YAML turns an id like 12345678 into an int. Ids are always used as strings."""
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        raise ValueError(f"Cannot use {value!r} as a board id.")

    @field_validator("fen")
    @classmethod
    def validate_fen(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        parts = value.strip().split(" ")
        if len(parts) != 6:
            raise ValueError("FEN string must contain 6 space-separated parts.")
        return value.strip()

    @classmethod
    def from_record(cls, record: GameStateRecord) -> Self:
        return cls.model_validate(asdict(record))

    def to_record(self) -> GameStateRecord:
        if self.id is None:
            raise ValueError("Cannot create a record for a block without id.")
        return GameStateRecord(
            id=self.id,
            pgn=self.pgn,
            fen=self.fen,
            free=self.free,
            board_style=self.board_style,
            piece_style=self.piece_style,
            orientation=self.orientation,
            shapes=self.shape_dicts(),
            current_move_idx=self.current_move_idx,
        )

    def shape_dicts(self) -> Optional[list[Shape]]:
        if self.shapes is None:
            return None
        return [shape.model_dump(exclude_none=True) for shape in self.shapes]

    def block_fields(self) -> dict[str, object]:
        """Mapping as written in the block: aliases, plain YAML types, unset keys left out."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# Validates/serializes the transport dataclass directly (used by the stores)
RECORD_ADAPTER: TypeAdapter[GameStateRecord] = TypeAdapter(GameStateRecord)
