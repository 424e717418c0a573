"""
Creating a board from its declarative block.

load -> parse block -> read persisted record -> merge -> rules engine -> renderer -> controller
"""

import logging
from typing import Callable, Optional

from src.board.headless import HeadlessBoard
from src.board.renderer import BoardUpdate, RendererFactory
from src.chess.engine import LegalityEngine, PythonChessEngine
from src.config.merge import merge
from src.config.models import DeclaredConfig
from src.config.source import parse_declared_config, update_block
from src.core.exceptions import InvalidConfigError, InvalidPositionError, PersistenceError
from src.core.models import EffectiveConfig, GameStateRecord
from src.core.settings import DEFAULT_SETTINGS, Settings
from src.db.blocks import BlockSource
from src.db.store import GameStateStore
from src.services.sync_controller import Notifier, SyncController, log_notice

logger = logging.getLogger(__name__)

INVALID_CONFIG_NOTICE = "Chesser error: Invalid config"

# Runs a callback once the host is ready to accept edits of the document
WhenReady = Callable[[Callable[[], None]], None]


def call_now(callback: Callable[[], None]) -> None:
    callback()


def load_board(
    source: str,
    store: GameStateStore,
    *,
    settings: Settings = DEFAULT_SETTINGS,
    block: Optional[BlockSource] = None,
    renderer_factory: RendererFactory = HeadlessBoard,
    engine_factory: Callable[[], LegalityEngine] = PythonChessEngine,
    when_ready: WhenReady = call_now,
    notify: Notifier = log_notice,
) -> SyncController | None:
    """
    Build a synchronized board from the text of its block.
    ----
    Returns None (after notifying the user) when the block, its position or the board config is invalid.
    A board without id gets one, which is written back into 'block' once the host is ready.
    """
    try:
        declared = parse_declared_config(source)
        persisted = store.read(declared.id) if declared.id else None
        config, engine = configure(declared, persisted, settings, engine_factory)
        board = renderer_factory(initial_board_config(config, engine))
    except InvalidConfigError as e:
        logger.warning("Board not created: %s", e)
        notify(INVALID_CONFIG_NOTICE)
        return None

    if config.id_generated and block is not None:
        when_ready(lambda: write_back_identity(block, config.id, notify))

    return SyncController(engine, board, store, config, notify=notify)


def configure(
    declared: DeclaredConfig,
    persisted: Optional[GameStateRecord],
    settings: Settings = DEFAULT_SETTINGS,
    engine_factory: Callable[[], LegalityEngine] = PythonChessEngine,
) -> tuple[EffectiveConfig, LegalityEngine]:
    """
    Merge the config and load its position.
    A stored game that cannot be loaded is treated as absent: the board starts from what the block declares.
    """
    config = merge(declared, persisted, settings)
    try:
        return config, build_engine(config, engine_factory)
    except InvalidPositionError as e:
        if persisted is None:
            raise
        logger.warning("Ignoring stored state of board %s: %s", config.id, e)

    config = merge(declared, None, settings)
    return config, build_engine(config, engine_factory)


def build_engine(
    config: EffectiveConfig,
    engine_factory: Callable[[], LegalityEngine] = PythonChessEngine,
) -> LegalityEngine:
    """The game notation wins over the diagram when a block has both."""
    engine = engine_factory()
    if config.pgn:
        engine.load_game_notation(config.pgn)
    elif config.fen:
        engine.load_diagram(config.fen)
    return engine


def initial_board_config(config: EffectiveConfig, engine: LegalityEngine) -> BoardUpdate:
    return BoardUpdate(
        fen=engine.serialize_diagram(),
        orientation=config.orientation,
        view_only=config.view_only,
        drawable=config.drawable,
        shapes=list(config.shapes),
    )


def container_classes(config: EffectiveConfig) -> list[str]:
    """CSS classes of the element the board is drawn in (selects piece set and board theme)."""
    return [config.piece_style.value, f"{config.board_style.value}-board", "chesser-container"]


def write_back_identity(block: BlockSource, board_id: str, notify: Notifier = log_notice) -> None:
    """Store a generated id in the block, so the next load finds the same record."""
    try:
        updated = update_block(block.read_text(), {"id": board_id})
        block.replace_text(updated)
    except (PersistenceError, InvalidConfigError) as e:
        logger.warning("Could not write id %s back into its block: %s", board_id, e)
        notify(f"Chesser: could not save board id ({e})")
        return
    logger.info("Wrote id %s back into its block", board_id)
