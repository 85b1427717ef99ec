from __future__ import annotations

from typing import Tuple

from .bitboard import file_of, is_valid_square, on_board, rank_of, square_of
from .board import BoardState
from .types import Color, PieceKind, as_color


KNIGHT_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, 2), (1, 2), (-2, 1), (2, 1), (-2, -1), (2, -1), (-1, -2), (1, -2),
)
KING_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (0, -1), (1, -1), (-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1),
)
DIAGONALS: Tuple[Tuple[int, int], ...] = ((-1, -1), (1, -1), (-1, 1), (1, 1))
ORTHOGONALS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def is_square_attacked(board: BoardState, square: int, attacker: Color) -> bool:
    """Return True if ``attacker`` attacks ``square`` on ``board``.

    Covers pawns, knights, the king, and slider rays for bishops, rooks and
    queens. Steps are taken in file/rank coordinates, so no offset can wrap
    around a board edge. The board is never mutated. Invalid arguments
    resolve to False.
    """
    if board is None or not is_valid_square(square):
        return False
    side = as_color(attacker)
    if side is None:
        return False

    own = board.colors[side]
    f = file_of(square)
    r = rank_of(square)

    # Pawn attacks: an attacking pawn sits one rank behind, on an adjacent file
    pawns = board.kinds[PieceKind.PAWN] & own
    pr = r - side.pawn_direction
    for df in (-1, 1):
        if on_board(f + df, pr) and pawns.test(square_of(f + df, pr)):
            return True

    knights = board.kinds[PieceKind.KNIGHT] & own
    for df, dr in KNIGHT_OFFSETS:
        if on_board(f + df, r + dr) and knights.test(square_of(f + df, r + dr)):
            return True

    kings = board.kinds[PieceKind.KING] & own
    for df, dr in KING_OFFSETS:
        if on_board(f + df, r + dr) and kings.test(square_of(f + df, r + dr)):
            return True

    occ = board.occupied()
    queens = board.kinds[PieceKind.QUEEN]
    bishop_like = (board.kinds[PieceKind.BISHOP] | queens) & own
    rook_like = (board.kinds[PieceKind.ROOK] | queens) & own
    for directions, sliders in ((DIAGONALS, bishop_like), (ORTHOGONALS, rook_like)):
        if not sliders:
            continue
        for df, dr in directions:
            tf, tr = f, r
            while True:
                tf += df
                tr += dr
                if not on_board(tf, tr):
                    break
                o = square_of(tf, tr)
                if occ.test(o):
                    # First blocker decides the ray
                    if sliders.test(o):
                        return True
                    break
    return False


def is_in_check(board: BoardState, color: Color) -> bool:
    """Return True if ``color``'s king is attacked. No king means no check."""
    if board is None:
        return False
    side = as_color(color)
    if side is None:
        return False
    king = board.king_square(side)
    if king is None:
        return False
    return is_square_attacked(board, king, side.opponent)
