from __future__ import annotations

from typing import List

from .attacks import is_in_check, is_square_attacked
from .bitboard import is_valid_square
from .board import BoardState
from .make import make_move
from .move import Move
from .pieces import RULES
from .types import PieceKind, as_color, find_castle


def is_legal_move(board: BoardState, move: Move) -> bool:
    """Return True if ``move`` is legal for the side to move on ``board``.

    Checks, in order: square range and ownership, the piece's movement
    pattern and clear path, castling safety (not in check, not passing
    through or landing on an attacked square), then king safety by playing
    the move on a private copy of ``board``. Never raises; malformed input
    is simply illegal.
    """
    if board is None or move is None:
        return False
    from_sq = getattr(move, "from_sq", None)
    to_sq = getattr(move, "to_sq", None)
    if not (is_valid_square(from_sq) and is_valid_square(to_sq)) or from_sq == to_sq:
        return False

    us = as_color(board.to_move)
    if us is None:
        return False
    if not board.colors[us].test(from_sq) or board.colors[us].test(to_sq):
        return False
    kind = board.piece_at(from_sq)
    if kind is None:
        return False
    if not RULES[kind].is_pseudo_legal(board, from_sq, to_sq):
        return False

    if kind is PieceKind.KING:
        castle = find_castle(us, from_sq, to_sq)
        if castle is not None:
            them = us.opponent
            if is_in_check(board, us):
                return False
            if is_square_attacked(board, castle.passes, them):
                return False
            if is_square_attacked(board, castle.king_to, them):
                return False

    scratch = board.copy()
    make_move(scratch, move)
    return not is_in_check(scratch, us)


def legal_moves(board: BoardState) -> List[Move]:
    """Return every legal move for the side to move, ordered by (from, to)."""
    if board is None:
        return []
    moves: List[Move] = []
    for from_sq in board.colors[board.to_move].squares():
        for to_sq in range(64):
            move = Move(from_sq, to_sq)
            if is_legal_move(board, move):
                moves.append(move)
    return moves
