from __future__ import annotations

import pytest

from hookchess.engine.board import STARTPOS_FEN, BoardState
from hookchess.engine.perft import perft, perft_divide


def test_perft_startpos_depths_0_2() -> None:
    b = BoardState.from_fen(STARTPOS_FEN)
    assert perft(b, 0) == 1
    assert perft(b, 1) == 20
    assert perft(b, 2) == 400


def test_perft_kiwipete_depth_1() -> None:
    # Classic Kiwipete position: castling both ways, pins, en-passant-free
    fen = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
    assert perft(BoardState.from_fen(fen), 1) == 48


def test_perft_position_3_depth_2() -> None:
    # Rook-and-pawn endgame with en passant and discovered checks
    fen = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"
    b = BoardState.from_fen(fen)
    assert perft(b, 1) == 14
    assert perft(b, 2) == 191


def test_perft_does_not_mutate_root() -> None:
    b = BoardState.startpos()
    perft(b, 2)
    assert b == BoardState.startpos()


def test_perft_rejects_negative_depth() -> None:
    with pytest.raises(ValueError):
        perft(BoardState.startpos(), -1)


def test_perft_divide_splits_by_root_move() -> None:
    split = perft_divide(BoardState.startpos(), 2)
    assert len(split) == 20
    assert all(n == 20 for n in split.values())
    assert sum(split.values()) == 400
    assert "g1f3" in split


def test_perft_divide_rejects_depth_zero() -> None:
    with pytest.raises(ValueError):
        perft_divide(BoardState.startpos(), 0)
