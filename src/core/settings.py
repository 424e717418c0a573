"""Plugin-wide settings. Supply the defaults for every key a declarative block leaves out."""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from src.core.exceptions import InvalidConfigError
from src.core.shared_types import BoardStyle, Color, PieceStyle

DEFAULT_DATABASE_URL = "sqlite:///chesser.db"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    board_style: BoardStyle = BoardStyle.BROWN
    piece_style: PieceStyle = PieceStyle.CBURNETT
    orientation: Color = Color.WHITE
    free: bool = False
    view_only: bool = False
    drawable: bool = True
    remember_cursor: bool = False
    database_url: str = DEFAULT_DATABASE_URL


DEFAULT_SETTINGS = Settings()


def load_settings(data: Optional[Mapping[str, Any]] = None) -> Settings:
    """Overlay stored plugin data on top of the defaults."""
    try:
        return Settings.model_validate(dict(data or {}))
    except ValidationError as e:
        raise InvalidConfigError(f"Invalid plugin settings: {e}") from e
