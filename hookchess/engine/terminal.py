from __future__ import annotations

from .attacks import is_in_check
from .bitboard import square_color
from .board import BoardState
from .legality import is_legal_move
from .move import Move
from .types import PIECE_VALUES, Color, Outcome, PieceKind, as_color


FIFTY_MOVE_HALF_MOVES = 100


def has_legal_move(board: BoardState) -> bool:
    """Return True if the side to move has at least one legal move.

    Brute force: every own square as origin against every square as target,
    stopping at the first legal move.
    """
    if board is None:
        return False
    side = as_color(board.to_move)
    if side is None:
        return False
    for from_sq in board.colors[side].squares():
        for to_sq in range(64):
            if to_sq != from_sq and is_legal_move(board, Move(from_sq, to_sq)):
                return True
    return False


def is_checkmate(board: BoardState) -> bool:
    if board is None:
        return False
    return is_in_check(board, board.to_move) and not has_legal_move(board)


def is_stalemate(board: BoardState) -> bool:
    if board is None:
        return False
    return not is_in_check(board, board.to_move) and not has_legal_move(board)


def has_insufficient_material(board: BoardState) -> bool:
    """Return True for K v K, K+minor v K, and K+B v K+B with same-colored bishops.

    No other material combination counts, even ones that cannot force mate
    (two knights, bishop against knight).
    """
    if board is None:
        return False
    heavy = (
        board.kinds[PieceKind.PAWN] | board.kinds[PieceKind.ROOK] | board.kinds[PieceKind.QUEEN]
    )
    if heavy:
        return False

    wn = board.pieces(PieceKind.KNIGHT, Color.WHITE).popcount()
    bn = board.pieces(PieceKind.KNIGHT, Color.BLACK).popcount()
    wb_mask = board.pieces(PieceKind.BISHOP, Color.WHITE)
    bb_mask = board.pieces(PieceKind.BISHOP, Color.BLACK)
    wb = wb_mask.popcount()
    bb = bb_mask.popcount()

    if wn + bn + wb + bb == 0:
        return True
    if wn + wb == 1 and bn + bb == 0:
        return True
    if bn + bb == 1 and wn + wb == 0:
        return True
    if wn == 0 and bn == 0 and wb == 1 and bb == 1:
        w_sq = wb_mask.first_set()
        b_sq = bb_mask.first_set()
        return square_color(w_sq) == square_color(b_sq)
    return False


def is_forced_draw(board: BoardState) -> bool:
    """Return True on the 50-move rule, stalemate, or insufficient material."""
    if board is None:
        return False
    if board.half_move >= FIFTY_MOVE_HALF_MOVES:
        return True
    if is_stalemate(board):
        return True
    return has_insufficient_material(board)


def count_material(board: BoardState, color: Color) -> int:
    """Sum of piece values (P=1, N=3, B=3, R=5, Q=9, K=0) for ``color``."""
    if board is None:
        return 0
    side = as_color(color)
    if side is None:
        return 0
    return sum(board.pieces(kind, side).popcount() * PIECE_VALUES[kind] for kind in PieceKind)


def classify(board: BoardState) -> Outcome:
    """Classify the position for the side to move.

    Precedence: checkmate, the 50-move rule, stalemate, insufficient
    material. Computed on demand; nothing is cached.
    """
    if board is None:
        return Outcome.ONGOING
    in_check = is_in_check(board, board.to_move)
    can_move = has_legal_move(board)
    if in_check and not can_move:
        return Outcome.CHECKMATE
    if board.half_move >= FIFTY_MOVE_HALF_MOVES:
        return Outcome.FIFTY_MOVE_RULE
    if not can_move:
        return Outcome.STALEMATE
    if has_insufficient_material(board):
        return Outcome.INSUFFICIENT_MATERIAL
    return Outcome.ONGOING
