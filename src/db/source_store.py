"""GameStateStore that keeps the record inside the declarative block the board was created from."""

import logging

from src.config.models import DeclaredConfig
from src.config.source import parse_declared_config, update_block
from src.core.exceptions import HostUnavailableError, InvalidConfigError, SourceParseError
from src.core.models import GameStateRecord
from src.db.blocks import BlockSource

logger = logging.getLogger(__name__)


class SourceBlockStore:
    def __init__(self, block: BlockSource) -> None:
        self.block = block

    def read(self, board_id: str) -> GameStateRecord | None:
        try:
            config = parse_declared_config(self.block.read_text())
        except (HostUnavailableError, InvalidConfigError) as e:
            logger.warning("Could not read block of board %s: %s", board_id, e)
            return None

        if config.id != board_id:
            return None
        return config.to_record()

    def write(self, board_id: str, record: GameStateRecord) -> None:
        """
        Re-serialize the record into the block.
        Keys of the block the record does not define (viewOnly, unknown keys, ...) are kept.
        """
        current_text = self.block.read_text()
        changes = DeclaredConfig.from_record(record).block_fields()
        changes["id"] = board_id
        try:
            updated_text = update_block(current_text, changes)
        except InvalidConfigError as e:
            logger.warning("Block of board %s cannot be parsed, not saved: %s", board_id, e)
            raise SourceParseError(str(e)) from e
        self.block.replace_text(updated_text)
