"""
Effective configuration of a board at load time.
----
Precedence per field: persisted record > declarative block > plugin settings.
The id is the exception: the block owns it (it is the key the record was stored under).
"""

import logging
from typing import Optional, TypeVar
from uuid import uuid4

from src.config.models import DeclaredConfig
from src.core.models import MERGEABLE_FIELDS, EffectiveConfig, GameStateRecord
from src.core.settings import DEFAULT_SETTINGS, Settings

logger = logging.getLogger(__name__)

ID_LENGTH = 8

T = TypeVar("T")


def generate_id() -> str:
    return uuid4().hex[:ID_LENGTH]


def merge(
    declared: DeclaredConfig,
    persisted: Optional[GameStateRecord] = None,
    settings: Settings = DEFAULT_SETTINGS,
) -> EffectiveConfig:
    id_generated = declared.id is None
    board_id = generate_id() if id_generated else declared.id
    if id_generated:
        logger.info("Board without id, generated %s", board_id)

    declared_values = {
        "pgn": declared.pgn,
        "fen": declared.fen,
        "free": declared.free,
        "board_style": declared.board_style,
        "piece_style": declared.piece_style,
        "orientation": declared.orientation,
        "shapes": declared.shape_dicts(),
        "current_move_idx": declared.current_move_idx,
    }
    values = {
        name: _pick(getattr(persisted, name, None), declared_values[name])
        for name in MERGEABLE_FIELDS
    }

    return EffectiveConfig(
        id=board_id,
        board_style=_pick(values["board_style"], settings.board_style),
        piece_style=_pick(values["piece_style"], settings.piece_style),
        orientation=_pick(values["orientation"], settings.orientation),
        free=_pick(values["free"], settings.free),
        view_only=_pick(declared.view_only, settings.view_only),
        drawable=_pick(declared.drawable, settings.drawable),
        remember_cursor=_pick(declared.remember_cursor, settings.remember_cursor),
        pgn=values["pgn"],
        fen=values["fen"],
        shapes=values["shapes"] or [],
        current_move_idx=values["current_move_idx"],
        id_generated=id_generated,
    )


def _pick(preferred: Optional[T], fallback: T) -> T:
    return fallback if preferred is None else preferred
