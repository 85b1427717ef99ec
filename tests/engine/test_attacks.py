from __future__ import annotations

from hookchess.engine.attacks import is_in_check, is_square_attacked
from hookchess.engine.board import BoardState
from hookchess.engine.move import str_to_square as sq
from hookchess.engine.types import Color


def test_pawn_attacks_respect_direction_and_edges() -> None:
    b = BoardState.from_fen("4k3/8/8/8/8/8/P6P/4K3 w - - 0 1")
    assert is_square_attacked(b, sq("b3"), Color.WHITE)
    assert is_square_attacked(b, sq("g3"), Color.WHITE)
    # No wraparound from h2 onto a3, and nothing attacks h3
    assert not is_square_attacked(b, sq("a3"), Color.WHITE)
    assert not is_square_attacked(b, sq("h3"), Color.WHITE)
    # Pawns never attack straight ahead or backwards
    assert not is_square_attacked(b, sq("a3"), Color.BLACK)
    assert not is_square_attacked(b, sq("b1"), Color.WHITE)


def test_black_pawn_attacks_downwards() -> None:
    b = BoardState.from_fen("4k3/8/8/8/3p4/8/8/4K3 w - - 0 1")
    assert is_square_attacked(b, sq("c3"), Color.BLACK)
    assert is_square_attacked(b, sq("e3"), Color.BLACK)
    assert not is_square_attacked(b, sq("c5"), Color.BLACK)


def test_knight_offsets_do_not_wrap() -> None:
    b = BoardState.from_fen("4k3/8/8/8/8/8/8/N3K3 w - - 0 1")
    assert is_square_attacked(b, sq("b3"), Color.WHITE)
    assert is_square_attacked(b, sq("c2"), Color.WHITE)
    # a1 + 6 would be g1 and a1 + 15 would be h2 on a naive offset table
    assert not is_square_attacked(b, sq("g1"), Color.WHITE)
    assert not is_square_attacked(b, sq("h2"), Color.WHITE)


def test_sliders_stop_at_first_blocker() -> None:
    b = BoardState.from_fen("4k3/8/8/8/8/8/8/R2nK3 w - - 0 1")
    assert is_square_attacked(b, sq("d1"), Color.WHITE)
    assert is_square_attacked(b, sq("a8"), Color.WHITE)
    b2 = BoardState.from_fen("4k3/8/8/8/8/8/8/R1n4K w - - 0 1")
    assert not is_square_attacked(b2, sq("d1"), Color.WHITE)


def test_rook_ray_does_not_wrap_across_files() -> None:
    b = BoardState.from_fen("4k3/8/8/8/8/8/8/4K2R w - - 0 1")
    # h1 + 1 is a2 numerically; must not count as attacked along the rank
    assert not is_square_attacked(b, sq("a2"), Color.WHITE)
    assert is_square_attacked(b, sq("h8"), Color.WHITE)


def test_bishop_and_queen_diagonals() -> None:
    b = BoardState.from_fen("4k3/8/8/8/8/8/8/2B1K2q w - - 0 1")
    assert is_square_attacked(b, sq("h6"), Color.WHITE)
    assert is_square_attacked(b, sq("a3"), Color.WHITE)
    # Black queen on h1 sees along the first rank up to the king
    assert is_square_attacked(b, sq("e1"), Color.BLACK)
    assert is_square_attacked(b, sq("a8"), Color.BLACK)
    # Bishops never attack orthogonally
    assert not is_square_attacked(b, sq("c4"), Color.WHITE)


def test_king_adjacency() -> None:
    b = BoardState.from_fen("8/8/8/8/8/8/8/K6k w - - 0 1")
    assert is_square_attacked(b, sq("b2"), Color.WHITE)
    assert not is_square_attacked(b, sq("c3"), Color.WHITE)
    assert not is_square_attacked(b, sq("a2"), Color.BLACK)


def test_invalid_inputs_return_false() -> None:
    b = BoardState.startpos()
    assert is_square_attacked(b, 64, Color.WHITE) is False
    assert is_square_attacked(b, -1, Color.WHITE) is False
    assert is_square_attacked(b, 20, 2) is False
    assert is_square_attacked(None, 20, Color.WHITE) is False  # type: ignore[arg-type]
    assert is_in_check(b, 5) is False  # type: ignore[arg-type]


def test_attack_detection_does_not_mutate() -> None:
    b = BoardState.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    before = b.to_bytes()
    for s in range(64):
        is_square_attacked(b, s, Color.WHITE)
        is_square_attacked(b, s, Color.BLACK)
    assert b.to_bytes() == before


def test_is_in_check_and_missing_king() -> None:
    b = BoardState.from_fen("4r1k1/8/8/8/8/8/8/4K3 w - - 0 1")
    assert is_in_check(b, Color.WHITE)
    assert not is_in_check(b, Color.BLACK)
    no_king = BoardState.from_fen("4r1k1/8/8/8/8/8/8/8 w - - 0 1")
    assert is_in_check(no_king, Color.WHITE) is False
