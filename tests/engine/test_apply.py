from __future__ import annotations

import pytest

from hookchess.engine.apply import apply_move
from hookchess.engine.board import STARTPOS_FEN, BoardState
from hookchess.engine.move import Move, parse_uci
from hookchess.engine.types import Color, PieceKind, Promotion


def test_apply_moves_piece_and_flips_side() -> None:
    b = BoardState.from_fen(STARTPOS_FEN)
    assert apply_move(b, parse_uci("e2e4")) is True
    assert b.to_fen() == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
    assert b.to_move is Color.BLACK
    assert b.is_consistent()


@pytest.mark.parametrize(
    "move",
    [
        Move(12, 36),  # e2e5
        Move(52, 36),  # black pawn, white to move
        Move(4, 4),
        Move(4, 64),
        Move(-3, 10),
        Move(6, 12),  # knight onto own pawn
        Move(0, 16),  # rook through own pawn
    ],
)
def test_illegal_move_leaves_board_byte_identical(move: Move) -> None:
    b = BoardState.startpos()
    before = b.to_bytes()
    snapshot = b.copy()
    assert apply_move(b, move) is False
    assert b.to_bytes() == before
    assert b == snapshot


def test_apply_is_total_on_missing_inputs() -> None:
    assert apply_move(None, Move(12, 28)) is False  # type: ignore[arg-type]
    b = BoardState.startpos()
    assert apply_move(b, None) is False  # type: ignore[arg-type]
    assert b == BoardState.startpos()


def test_capture_removes_victim_from_kind_and_color_masks() -> None:
    b = BoardState.from_fen("4k3/8/8/3q4/8/8/8/3QK3 w - - 7 1")
    assert apply_move(b, parse_uci("d1d5"))
    assert b.pieces(PieceKind.QUEEN, Color.BLACK).popcount() == 0
    assert b.pieces(PieceKind.QUEEN, Color.WHITE).first_set() == 35
    assert b.colors[Color.BLACK].popcount() == 1
    assert b.half_move == 0
    assert b.is_consistent()


def test_promotion_field_is_ignored() -> None:
    # A pawn reaching the last rank stays a pawn whatever promotion is requested
    b = BoardState.from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
    assert apply_move(b, Move(48, 56, Promotion.QUEEN))
    assert b.piece_at(56) is PieceKind.PAWN
    assert b.pieces(PieceKind.QUEEN, Color.WHITE).popcount() == 0


def test_pawn_on_last_rank_has_no_moves() -> None:
    b = BoardState.from_fen("P3k3/8/8/8/8/8/8/4K3 w - - 0 1")
    for to_sq in range(64):
        assert apply_move(b.copy(), Move(56, to_sq)) is False
