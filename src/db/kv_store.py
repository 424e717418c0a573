"""GameStateStore on top of any string -> string mapping (browser-style local storage, a dbm file, a plain dict...)"""

import logging
from typing import MutableMapping

from pydantic import ValidationError

from src.config.models import RECORD_ADAPTER
from src.core.exceptions import PersistenceError
from src.core.models import GameStateRecord

logger = logging.getLogger(__name__)

KEY_PREFIX = "chesser:"


class KeyValueGameStateStore:
    """Every record is a JSON document stored under 'chesser:<board id>'."""

    def __init__(self, storage: MutableMapping[str, str], prefix: str = KEY_PREFIX) -> None:
        self.storage = storage
        self.prefix = prefix

    def read(self, board_id: str) -> GameStateRecord | None:
        try:
            raw = self.storage.get(self._key(board_id))
        except (OSError, KeyError) as e:
            logger.warning("Could not read state of board %s: %s", board_id, e)
            return None
        if raw is None:
            return None
        try:
            return RECORD_ADAPTER.validate_json(raw)
        except ValidationError as e:
            logger.warning("Ignoring malformed state of board %s: %s", board_id, e)
            return None

    def write(self, board_id: str, record: GameStateRecord) -> None:
        try:
            self.storage[self._key(board_id)] = RECORD_ADAPTER.dump_json(record).decode()
        except (OSError, KeyError) as e:
            raise PersistenceError(f"Could not store state of board {board_id}: {e}") from e

    def _key(self, board_id: str) -> str:
        return f"{self.prefix}{board_id}"
