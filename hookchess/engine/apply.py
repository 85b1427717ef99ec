from __future__ import annotations

from .board import BoardState
from .legality import is_legal_move
from .make import make_move
from .move import Move


def apply_move(board: BoardState, move: Move) -> bool:
    """Apply ``move`` to ``board`` in place if it is legal.

    Fail-closed: an illegal or malformed move leaves ``board`` untouched.

    Returns:
        bool: True if the move was applied.
    """
    if not is_legal_move(board, move):
        return False
    make_move(board, move)
    return True
