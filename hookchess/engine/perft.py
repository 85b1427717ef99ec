from __future__ import annotations

from typing import Dict

from .board import BoardState
from .legality import legal_moves
from .make import make_move


def perft(board: BoardState, depth: int) -> int:
    """Compute perft node count for ``board`` at ``depth``.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1).

    Promotions are not expanded, so counts match published tables only for
    trees without a pawn reaching the last rank.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    moves = legal_moves(board)
    if depth == 1:
        return len(moves)
    nodes = 0
    for m in moves:
        child = board.copy()
        make_move(child, m)
        nodes += perft(child, depth - 1)
    return nodes


def perft_divide(board: BoardState, depth: int) -> Dict[str, int]:
    """Split ``perft(board, depth)`` by root move, keyed by UCI text.

    Used to localise a perft mismatch to the first move that disagrees with a
    reference count.
    """
    if depth < 1:
        raise ValueError("depth must be >= 1")
    counts: Dict[str, int] = {}
    for m in legal_moves(board):
        child = board.copy()
        make_move(child, m)
        counts[m.to_uci()] = perft(child, depth - 1)
    return counts
