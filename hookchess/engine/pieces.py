"""Movement pattern and clear-path rules, one class per piece kind.

Each rule answers whether a move is pseudo-legal: consistent with the
piece's movement pattern and the board occupancy, ignoring king safety.
Callers have already checked that ``from_sq`` holds a piece of the side to
move and that ``to_sq`` does not hold one of its own pieces.
"""

from __future__ import annotations

from typing import Dict, Optional

from .bitboard import file_of, rank_of
from .board import BoardState
from .types import Color, PieceKind, find_castle


def _sign(x: int) -> int:
    return (x > 0) - (x < 0)


class PieceRule:
    kind: PieceKind

    def is_pseudo_legal(self, board: BoardState, from_sq: int, to_sq: int) -> bool:
        raise NotImplementedError


class PawnRule(PieceRule):
    kind = PieceKind.PAWN

    def is_pseudo_legal(self, board: BoardState, from_sq: int, to_sq: int) -> bool:
        us = board.to_move
        direction = us.pawn_direction
        df = file_of(to_sq) - file_of(from_sq)
        dr = rank_of(to_sq) - rank_of(from_sq)
        occ = board.occupied()

        if df == 0 and dr == direction:
            return not occ.test(to_sq)
        if df == 0 and dr == 2 * direction:
            if rank_of(from_sq) != us.pawn_home_rank:
                return False
            mid = from_sq + 8 * direction
            return not occ.test(mid) and not occ.test(to_sq)
        if abs(df) == 1 and dr == direction:
            if board.colors[us.opponent].test(to_sq):
                return True
            victim = board.en_passant_victim(to_sq, us)
            if victim is None:
                return False
            return board.pieces(PieceKind.PAWN, us.opponent).test(victim)
        return False


class KnightRule(PieceRule):
    kind = PieceKind.KNIGHT

    def is_pseudo_legal(self, board: BoardState, from_sq: int, to_sq: int) -> bool:
        adf = abs(file_of(to_sq) - file_of(from_sq))
        adr = abs(rank_of(to_sq) - rank_of(from_sq))
        return (adf, adr) in ((1, 2), (2, 1))


class SliderRule(PieceRule):
    """Shared ray logic for bishops, rooks and queens."""

    diagonal = False
    orthogonal = False

    def is_pseudo_legal(self, board: BoardState, from_sq: int, to_sq: int) -> bool:
        step = self._ray_step(from_sq, to_sq)
        if step is None:
            return False
        occ = board.occupied()
        sq = from_sq + step
        while sq != to_sq:
            if occ.test(sq):
                return False
            sq += step
        return True

    def _ray_step(self, from_sq: int, to_sq: int) -> Optional[int]:
        """Square delta of one step along the ray, or None if off-pattern."""
        df = file_of(to_sq) - file_of(from_sq)
        dr = rank_of(to_sq) - rank_of(from_sq)
        if df == 0 and dr == 0:
            return None
        if self.diagonal and abs(df) == abs(dr):
            return 8 * _sign(dr) + _sign(df)
        if self.orthogonal and (df == 0 or dr == 0):
            return 8 * _sign(dr) + _sign(df)
        return None


class BishopRule(SliderRule):
    kind = PieceKind.BISHOP
    diagonal = True


class RookRule(SliderRule):
    kind = PieceKind.ROOK
    orthogonal = True


class QueenRule(SliderRule):
    kind = PieceKind.QUEEN
    diagonal = True
    orthogonal = True


class KingRule(PieceRule):
    kind = PieceKind.KING

    def is_pseudo_legal(self, board: BoardState, from_sq: int, to_sq: int) -> bool:
        adf = abs(file_of(to_sq) - file_of(from_sq))
        adr = abs(rank_of(to_sq) - rank_of(from_sq))
        if max(adf, adr) == 1:
            return True
        return self.castle_is_available(board, from_sq, to_sq)

    @staticmethod
    def castle_is_available(board: BoardState, from_sq: int, to_sq: int) -> bool:
        """Occupancy and rights gate for castling; attack checks come later."""
        us: Color = board.to_move
        castle = find_castle(us, from_sq, to_sq)
        if castle is None:
            return False
        if not board.castling & castle.right:
            return False
        occ = board.occupied()
        if any(occ.test(sq) for sq in castle.between):
            return False
        return board.pieces(PieceKind.ROOK, us).test(castle.rook_from)


RULES: Dict[PieceKind, PieceRule] = {
    rule.kind: rule
    for rule in (PawnRule(), KnightRule(), BishopRule(), RookRule(), QueenRule(), KingRule())
}

if set(RULES) != set(PieceKind):  # pragma: no cover
    raise RuntimeError("every piece kind needs a movement rule")
