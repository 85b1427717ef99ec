from __future__ import annotations

import pytest

from hookchess.engine.move import Move, parse_uci, square_to_str, str_to_square
from hookchess.engine.types import Promotion


def test_parse_uci_basic_and_promotion() -> None:
    m = parse_uci("e2e4")
    assert (m.from_sq, m.to_sq, m.promotion) == (12, 28, Promotion.NONE)
    p = parse_uci("e7e8Q")
    assert p.promotion is Promotion.QUEEN
    assert p.to_uci() == "e7e8q"


@pytest.mark.parametrize("text", ["", "e2", "e2e4qq", "i2e4", "e9e4", "e7e8k"])
def test_parse_uci_rejects_malformed(text: str) -> None:
    with pytest.raises(ValueError):
        parse_uci(text)


def test_square_names() -> None:
    assert str_to_square("a1") == 0
    assert str_to_square("h8") == 63
    assert square_to_str(36) == "e5"
    with pytest.raises(ValueError):
        square_to_str(64)


def test_move_record_is_four_bytes() -> None:
    m = Move(12, 28, Promotion.KNIGHT, 0)
    data = m.to_bytes()
    assert data == bytes([12, 28, 4, 0])
    assert Move.from_bytes(data) == m


def test_move_record_rejects_bad_input() -> None:
    with pytest.raises(ValueError):
        Move.from_bytes(b"\x00\x01\x02")
    with pytest.raises(ValueError):
        Move.from_bytes(bytes([0, 1, 9, 0]))
    with pytest.raises(ValueError):
        Move(300, 1).to_bytes()
