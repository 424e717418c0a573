"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGameState(Base):
    __tablename__ = "game_states"
    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    pgn: Mapped[Optional[str]]
    fen: Mapped[Optional[str]]
    free: Mapped[Optional[bool]]
    board_style: Mapped[Optional[str]]
    piece_style: Mapped[Optional[str]]
    orientation: Mapped[Optional[str]]
    shapes: Mapped[Optional[list[dict[str, Any]]]] = mapped_column(JSON)
    current_move_idx: Mapped[Optional[int]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
