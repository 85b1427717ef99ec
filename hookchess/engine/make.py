from __future__ import annotations

from .bitboard import is_valid_square, rank_of
from .board import HALF_MOVE_MAX, BoardState
from .move import Move
from .types import ROOK_HOMES, CastlingRights, PieceKind, find_castle


def make_move(board: BoardState, move: Move) -> None:
    """Apply ``move`` to ``board`` in place without checking legality.

    Handles captures (including en passant), the rook hop on castling,
    castling-rights updates, the en-passant target, the half-move clock and
    the side to move. Promotion is not applied. Does nothing if ``from_sq``
    does not hold a piece of the side to move.

    This is the shared mechanics behind ``apply_move`` and the king-safety
    simulation in ``is_legal_move``.
    """
    from_sq, to_sq = move.from_sq, move.to_sq
    if not (is_valid_square(from_sq) and is_valid_square(to_sq)):
        return
    us = board.to_move
    them = us.opponent
    if not board.colors[us].test(from_sq):
        return
    kind = board.piece_at(from_sq)
    if kind is None:
        return

    # Determine capture (including en passant)
    captured_sq = to_sq
    if kind is PieceKind.PAWN:
        victim = board.en_passant_victim(to_sq, us)
        if victim is not None:
            captured_sq = victim
    captured = None
    if board.colors[them].test(captured_sq):
        captured = board.remove(captured_sq)

    board.remove(from_sq)
    board.put(to_sq, kind, us)

    rights = board.castling
    if kind is PieceKind.KING:
        castle = find_castle(us, from_sq, to_sq)
        if castle is not None and board.pieces(PieceKind.ROOK, us).test(castle.rook_from):
            board.remove(castle.rook_from)
            board.put(castle.rook_to, PieceKind.ROOK, us)
        rights &= ~CastlingRights.for_color(us)
    if kind is PieceKind.ROOK and from_sq in ROOK_HOMES:
        rights &= ~ROOK_HOMES[from_sq]
    if captured is not None and captured_sq in ROOK_HOMES:
        rights &= ~ROOK_HOMES[captured_sq]
    board.castling = rights

    # En passant target only survives a double push
    board.en_passant = None
    if kind is PieceKind.PAWN and abs(rank_of(to_sq) - rank_of(from_sq)) == 2:
        board.en_passant = from_sq + 8 * us.pawn_direction

    if kind is PieceKind.PAWN or captured is not None:
        board.half_move = 0
    else:
        board.half_move = min(board.half_move + 1, HALF_MOVE_MAX)

    board.to_move = them
