"""What the menu next to a board shows, and what its buttons do (without building any UI)."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

from src.core.exceptions import InvalidConfigError
from src.core.shared_types import STARTING_FEN, Color
from src.services.sync_controller import SyncController


class ToolbarAction(StrEnum):
    FLIP = "flip"
    RESET = "reset"
    UNDO = "undo"
    REDO = "redo"
    COPY_FEN = "copy-fen"


@dataclass(frozen=True)
class StartingPosition:
    label: str
    fen: str


# Options of the starting position dropdown
STARTING_POSITIONS: dict[str, StartingPosition] = {
    "starting-position": StartingPosition("Starting Position", STARTING_FEN),
    "b00": StartingPosition(
        "B00 King's Pawn",
        "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1",
    ),
}


@dataclass(frozen=True)
class MoveListEntry:
    index: int
    san: str
    active: bool


@dataclass(frozen=True)
class MenuState:
    turn_text: str
    moves: list[MoveListEntry]
    free_move: bool


def menu_state(controller: SyncController) -> MenuState:
    turn_text = "Black's turn" if controller.turn() == Color.BLACK else "White's turn"
    moves = [
        MoveListEntry(index=index, san=move.san, active=index == controller.current_move_idx)
        for index, move in enumerate(controller.history())
    ]
    return MenuState(turn_text=turn_text, moves=moves, free_move=controller.free)


def run_toolbar_action(controller: SyncController, action: ToolbarAction) -> Optional[str]:
    """Returns the text to put on the clipboard for COPY_FEN, None otherwise."""
    if action == ToolbarAction.COPY_FEN:
        return controller.fen()

    handlers = {
        ToolbarAction.FLIP: controller.flip,
        ToolbarAction.RESET: controller.reset,
        ToolbarAction.UNDO: controller.undo,
        ToolbarAction.REDO: controller.redo,
    }
    handlers[action]()
    return None


def select_starting_position(controller: SyncController, key: str) -> None:
    if key not in STARTING_POSITIONS:
        raise InvalidConfigError(
            f"Unknown starting position {key!r}. Pick one from {', '.join(STARTING_POSITIONS)}"
        )
    controller.new_game(STARTING_POSITIONS[key].fen)
