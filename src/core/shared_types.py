"""
Type definitions used across layers
"""

from enum import StrEnum

# Squares are exchanged in algebraic notation between all layers ('e2', 'h8', ...)
SquareName = str

# Legal destinations per origin square, as the board renderer expects them.
Dests = dict[SquareName, list[SquareName]]

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

FILES = "abcdefgh"
RANKS = "12345678"
SQUARE_NAMES: tuple[SquareName, ...] = tuple(f + r for r in RANKS for f in FILES)


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opposite(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class MovableColor(StrEnum):
    """Which side the user may drag. NONE while an earlier position is being replayed."""

    WHITE = "white"
    BLACK = "black"
    BOTH = "both"
    NONE = "none"


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class BoardStyle(StrEnum):
    BROWN = "brown"
    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"
    IC = "ic"


class PieceStyle(StrEnum):
    ALPHA = "alpha"
    CALIFORNIA = "california"
    CARDINAL = "cardinal"
    CBURNETT = "cburnett"
    CHESS7 = "chess7"
    CHESSNUT = "chessnut"
    COMPANION = "companion"
    DUBROVNY = "dubrovny"
    FANTASY = "fantasy"
    FRESCA = "fresca"
    GIOCO = "gioco"
    GOVERNOR = "governor"
    HORSEY = "horsey"
    ICPIECES = "icpieces"
    KOSAL = "kosal"
    LEIPZIG = "leipzig"
    LETTER = "letter"
    LIBRA = "libra"
    MAESTRO = "maestro"
    MERIDA = "merida"
    PIROUETTI = "pirouetti"
    PIXEL = "pixel"
    REILLYCRAIG = "reillycraig"
    RIOHACHA = "riohacha"
    SHAPES = "shapes"
    SPATIAL = "spatial"
    STAUNTY = "staunty"
    TATIANA = "tatiana"
