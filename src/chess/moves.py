"""A single move as recorded in the move history."""

from dataclasses import dataclass
from typing import Optional

from src.core.shared_types import PieceType, SquareName


@dataclass(frozen=True)
class Move:
    """
    Produced by the rules engine, stored by the ledger.
    ----
    fen: diagram of the position *after* the move. Lets the history be checked/rendered without asking the engine.
    """

    origin: SquareName
    destination: SquareName
    san: str
    fen: str
    promotion: Optional[PieceType] = None

    def to_uci(self) -> str:
        promotion = PROMOTION_TO_UCI[self.promotion] if self.promotion else ""
        return f"{self.origin}{self.destination}{promotion}"


PROMOTION_TO_UCI: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}
