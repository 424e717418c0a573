"""Unit tests for src/services/menu.py"""

import pytest

from src.board.headless import HeadlessBoard
from src.chess.engine import PythonChessEngine
from src.core.exceptions import InvalidConfigError
from src.core.models import EffectiveConfig
from src.core.shared_types import STARTING_FEN, BoardStyle, Color, PieceStyle
from src.db.kv_store import KeyValueGameStateStore
from src.services.menu import (
    STARTING_POSITIONS,
    MoveListEntry,
    ToolbarAction,
    menu_state,
    run_toolbar_action,
    select_starting_position,
)
from src.services.sync_controller import SyncController


@pytest.fixture
def controller() -> SyncController:
    config = EffectiveConfig(
        id="abc",
        board_style=BoardStyle.BROWN,
        piece_style=PieceStyle.CBURNETT,
        orientation=Color.WHITE,
        free=False,
        view_only=False,
        drawable=True,
        remember_cursor=False,
    )
    return SyncController(PythonChessEngine(), HeadlessBoard(), KeyValueGameStateStore({}), config)


def test_menu_state_of_new_game(controller: SyncController) -> None:
    state = menu_state(controller)
    assert state.turn_text == "White's turn"
    assert state.moves == []
    assert not state.free_move


def test_move_list_marks_displayed_move(controller: SyncController) -> None:
    controller.apply_move("e2", "e4")
    controller.apply_move("e7", "e5")
    assert menu_state(controller).turn_text == "White's turn"

    run_toolbar_action(controller, ToolbarAction.UNDO)
    state = menu_state(controller)
    assert state.turn_text == "Black's turn"
    assert state.moves == [
        MoveListEntry(index=0, san="e4", active=True),
        MoveListEntry(index=1, san="e5", active=False),
    ]


def test_toolbar_actions(controller: SyncController) -> None:
    controller.apply_move("e2", "e4")

    run_toolbar_action(controller, ToolbarAction.RESET)
    assert controller.fen() == STARTING_FEN
    run_toolbar_action(controller, ToolbarAction.REDO)
    assert controller.is_live

    assert run_toolbar_action(controller, ToolbarAction.FLIP) is None
    assert controller.board_state().orientation == Color.BLACK

    assert run_toolbar_action(controller, ToolbarAction.COPY_FEN) == controller.fen()


def test_free_move_shown_in_menu(controller: SyncController) -> None:
    controller.toggle_free_move(True)
    assert menu_state(controller).free_move


def test_select_starting_position(controller: SyncController) -> None:
    controller.apply_move("d2", "d4")
    select_starting_position(controller, "b00")

    assert controller.fen() == STARTING_POSITIONS["b00"].fen
    assert controller.history() == []
    assert menu_state(controller).turn_text == "Black's turn"


def test_unknown_starting_position(controller: SyncController) -> None:
    with pytest.raises(InvalidConfigError):
        select_starting_position(controller, "z99")
