from __future__ import annotations

import pytest

from hookchess.engine.board import STARTPOS_FEN, BoardState
from hookchess.engine.game import IllegalMoveError, Match, MatchOverError, draw_tiebreak
from hookchess.engine.move import parse_uci
from hookchess.engine.types import Color, Outcome


def test_new_match_tracks_history_and_fullmove() -> None:
    m = Match.new()
    assert m.to_fen() == STARTPOS_FEN
    m.apply_move(parse_uci("e2e4"))
    m.apply_move(parse_uci("e7e5"))
    m.apply_move(parse_uci("g1f3"))
    assert m.move_history_uci() == ["e2e4", "e7e5", "g1f3"]
    assert m.to_fen() == "rnbqkbnr/pppp1ppp/8/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R b KQkq - 1 2"


def test_fullmove_when_black_starts() -> None:
    m = Match.from_fen("4k3/8/8/8/8/8/8/4K3 b - - 0 10")
    m.apply_move(parse_uci("e8e7"))
    assert m.to_fen().endswith(" 11")


def test_illegal_move_raises_and_keeps_board() -> None:
    m = Match.new()
    before = m.board.to_bytes()
    with pytest.raises(IllegalMoveError):
        m.apply_move(parse_uci("e2e5"))
    assert m.board.to_bytes() == before
    assert m.move_history_uci() == []


def test_fools_mate_result() -> None:
    m = Match.new()
    for uci in ("f2f3", "e7e5", "g2g4", "d8h4"):
        m.apply_move(parse_uci(uci))
    assert m.in_check()
    assert m.checkmate()
    assert m.outcome() is Outcome.CHECKMATE
    result = m.result()
    assert result.winner is Color.BLACK
    with pytest.raises(MatchOverError):
        m.apply_move(parse_uci("e1f2"))


def test_draw_tiebreak_prefers_lower_material() -> None:
    # Stalemate with white up a queen: the lower-material side wins the tiebreak
    m = Match.from_fen("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1")
    assert m.stalemate()
    assert m.is_draw()
    assert m.result().winner is Color.BLACK
    assert m.material(Color.WHITE) == 9


def test_draw_tiebreak_level_material() -> None:
    assert draw_tiebreak(BoardState.from_fen("8/8/8/8/8/8/8/4K2k w - - 0 1")) is None


def test_ongoing_result_has_no_winner() -> None:
    r = Match.new().result()
    assert r.outcome is Outcome.ONGOING
    assert r.winner is None
