"""Deterministic chess rules engine.

The surface consumed by the match layer:

- ``init_standard_position() -> BoardState``
- ``is_legal_move(board, move) -> bool``
- ``apply_move(board, move) -> bool``: mutates ``board``; False and no change if illegal
- ``is_in_check(board, color) -> bool``
- ``is_checkmate(board) -> bool``
- ``is_forced_draw(board) -> bool``
- ``count_material(board, color) -> int``

Every function is total: invalid input yields False, 0, or no change.
"""

from .apply import apply_move
from .attacks import is_in_check, is_square_attacked
from .board import BoardState, init_standard_position
from .legality import is_legal_move, legal_moves
from .move import Move
from .terminal import (
    classify,
    count_material,
    has_insufficient_material,
    is_checkmate,
    is_forced_draw,
    is_stalemate,
)
from .types import Color, Outcome, PieceKind, Promotion

__all__ = [
    "BoardState",
    "Color",
    "Move",
    "Outcome",
    "PieceKind",
    "Promotion",
    "apply_move",
    "classify",
    "count_material",
    "has_insufficient_material",
    "init_standard_position",
    "is_checkmate",
    "is_forced_draw",
    "is_in_check",
    "is_legal_move",
    "is_square_attacked",
    "is_stalemate",
    "legal_moves",
]
