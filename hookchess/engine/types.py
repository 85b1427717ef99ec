from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum, IntFlag
from typing import Dict, Optional, Tuple


class Color(IntEnum):
    WHITE = 0
    BLACK = 1

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def pawn_direction(self) -> int:
        """Rank delta of a pawn advance: +1 for white, -1 for black."""
        return 1 if self is Color.WHITE else -1

    @property
    def pawn_home_rank(self) -> int:
        return 1 if self is Color.WHITE else 6

    @property
    def symbol(self) -> str:
        return "w" if self is Color.WHITE else "b"


def as_color(value: object) -> Optional[Color]:
    """Coerce ``value`` to a Color, returning None for anything else."""
    if isinstance(value, Color):
        return value
    if isinstance(value, int) and not isinstance(value, bool) and value in (0, 1):
        return Color(value)
    return None


class PieceKind(IntEnum):
    PAWN = 0
    KNIGHT = 1
    BISHOP = 2
    ROOK = 3
    QUEEN = 4
    KING = 5


PIECE_VALUES: Dict[PieceKind, int] = {
    PieceKind.PAWN: 1,
    PieceKind.KNIGHT: 3,
    PieceKind.BISHOP: 3,
    PieceKind.ROOK: 5,
    PieceKind.QUEEN: 9,
    PieceKind.KING: 0,
}

PIECE_SYMBOLS: Dict[PieceKind, str] = {
    PieceKind.PAWN: "p",
    PieceKind.KNIGHT: "n",
    PieceKind.BISHOP: "b",
    PieceKind.ROOK: "r",
    PieceKind.QUEEN: "q",
    PieceKind.KING: "k",
}
SYMBOL_TO_KIND = {v: k for k, v in PIECE_SYMBOLS.items()}


class Promotion(IntEnum):
    """Promotion code carried on a Move. Never consulted by the rules."""

    NONE = 0
    QUEEN = 1
    ROOK = 2
    BISHOP = 3
    KNIGHT = 4


PROMOTION_TO_CHAR = {
    Promotion.QUEEN: "q",
    Promotion.ROOK: "r",
    Promotion.BISHOP: "b",
    Promotion.KNIGHT: "n",
}
CHAR_TO_PROMOTION = {v: k for k, v in PROMOTION_TO_CHAR.items()}


class CastlingRights(IntFlag):
    NONE = 0
    WHITE_KINGSIDE = 1
    WHITE_QUEENSIDE = 2
    BLACK_KINGSIDE = 4
    BLACK_QUEENSIDE = 8
    ALL = 15

    @classmethod
    def for_color(cls, color: Color) -> "CastlingRights":
        if color is Color.WHITE:
            return cls.WHITE_KINGSIDE | cls.WHITE_QUEENSIDE
        return cls.BLACK_KINGSIDE | cls.BLACK_QUEENSIDE


# FEN letter for each right, in canonical KQkq order
CASTLING_CHARS: Tuple[Tuple[CastlingRights, str], ...] = (
    (CastlingRights.WHITE_KINGSIDE, "K"),
    (CastlingRights.WHITE_QUEENSIDE, "Q"),
    (CastlingRights.BLACK_KINGSIDE, "k"),
    (CastlingRights.BLACK_QUEENSIDE, "q"),
)


@dataclass(frozen=True)
class Castle:
    """Geometry of one castling move.

    Attributes:
        color (Color): Side that castles.
        right (CastlingRights): Right that must still be held.
        king_from (int): King's home square.
        king_to (int): King's destination, two files away.
        rook_from (int): Rook's original corner square.
        rook_to (int): Square adjacent to the king's destination.
        between (Tuple[int, ...]): Squares between king and rook; all must be empty.
        passes (int): Square the king crosses; must not be attacked.
    """

    color: Color
    right: CastlingRights
    king_from: int
    king_to: int
    rook_from: int
    rook_to: int
    between: Tuple[int, ...]
    passes: int


CASTLES: Tuple[Castle, ...] = (
    Castle(Color.WHITE, CastlingRights.WHITE_KINGSIDE, 4, 6, 7, 5, (5, 6), 5),
    Castle(Color.WHITE, CastlingRights.WHITE_QUEENSIDE, 4, 2, 0, 3, (1, 2, 3), 3),
    Castle(Color.BLACK, CastlingRights.BLACK_KINGSIDE, 60, 62, 63, 61, (61, 62), 61),
    Castle(Color.BLACK, CastlingRights.BLACK_QUEENSIDE, 60, 58, 56, 59, (57, 58, 59), 59),
)

# Original rook corners and the single right each one guards
ROOK_HOMES: Dict[int, CastlingRights] = {c.rook_from: c.right for c in CASTLES}


def find_castle(color: Color, from_sq: int, to_sq: int) -> Optional[Castle]:
    for castle in CASTLES:
        if castle.color is color and castle.king_from == from_sq and castle.king_to == to_sq:
            return castle
    return None


class Outcome(str, Enum):
    ONGOING = "ongoing"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    FIFTY_MOVE_RULE = "fifty_move_rule"
    INSUFFICIENT_MATERIAL = "insufficient_material"

    @property
    def is_draw(self) -> bool:
        return self in (
            Outcome.STALEMATE,
            Outcome.FIFTY_MOVE_RULE,
            Outcome.INSUFFICIENT_MATERIAL,
        )
