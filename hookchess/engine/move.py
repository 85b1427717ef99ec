from __future__ import annotations

import struct
from dataclasses import dataclass

from .types import CHAR_TO_PROMOTION, PROMOTION_TO_CHAR, Promotion


MOVE_RECORD = struct.Struct("<4B")


@dataclass(frozen=True)
class Move:
    """Engine move record.

    Attributes:
        from_sq (int): Origin square index (a1=0 .. h8=63).
        to_sq (int): Destination square index.
        promotion (Promotion): Promotion code. Carried through the codecs but
            not consulted by legality checking or move application.
        flags (int): Reserved, currently unused.
    """

    from_sq: int
    to_sq: int
    promotion: Promotion = Promotion.NONE
    flags: int = 0

    def to_uci(self) -> str:
        """Serialize the move into long algebraic UCI form.

        Returns:
            str: Move encoded like ``"e2e4"`` or ``"e7e8q"``.
        """
        return (
            square_to_str(self.from_sq)
            + square_to_str(self.to_sq)
            + PROMOTION_TO_CHAR.get(self.promotion, "")
        )

    def to_bytes(self) -> bytes:
        """Encode the move as its fixed 4-byte record.

        Raises:
            ValueError: If a field does not fit in one byte.
        """
        try:
            return MOVE_RECORD.pack(self.from_sq, self.to_sq, int(self.promotion), self.flags)
        except struct.error as e:
            raise ValueError(f"move does not fit the 4-byte record: {self!r}") from e

    @classmethod
    def from_bytes(cls, data: bytes) -> "Move":
        """Decode a 4-byte move record.

        Squares are not range-checked here; out-of-range squares simply make
        the move illegal.

        Raises:
            ValueError: If ``data`` has the wrong length or an unknown
                promotion code.
        """
        if len(data) != MOVE_RECORD.size:
            raise ValueError(f"move record must be {MOVE_RECORD.size} bytes, got {len(data)}")
        from_sq, to_sq, promo, flags = MOVE_RECORD.unpack(data)
        try:
            promotion = Promotion(promo)
        except ValueError as e:
            raise ValueError(f"invalid promotion code: {promo}") from e
        return cls(from_sq, to_sq, promotion, flags)


def parse_uci(uci: str) -> Move:
    """Parse a UCI move string.

    Args:
        uci (str): Move encoded in long algebraic notation (e.g. ``"e2e4"``).

    Returns:
        Move: Parsed move.

    Raises:
        ValueError: If the string has an invalid length, squares, or promotion
            piece.
    """
    if not isinstance(uci, str) or len(uci) not in (4, 5):
        raise ValueError(f"invalid UCI move length: {uci!r}")
    from_sq = str_to_square(uci[0:2])
    to_sq = str_to_square(uci[2:4])
    promotion = Promotion.NONE
    if len(uci) == 5:
        ch = uci[4].lower()
        if ch not in CHAR_TO_PROMOTION:
            raise ValueError(f"invalid promotion piece: {ch!r}")
        promotion = CHAR_TO_PROMOTION[ch]
    return Move(from_sq, to_sq, promotion)


def str_to_square(s: str) -> int:
    """Convert algebraic notation into a 0-based square index.

    Raises:
        ValueError: If ``s`` is not a valid square.
    """
    if len(s) != 2 or s[0] < "a" or s[0] > "h" or s[1] < "1" or s[1] > "8":
        raise ValueError(f"invalid square: {s!r}")
    file = ord(s[0]) - ord("a")
    rank = int(s[1]) - 1
    return rank * 8 + file


def square_to_str(idx: int) -> str:
    """Convert a 0-based square index into algebraic notation.

    Raises:
        ValueError: If ``idx`` is outside the valid square range.
    """
    if not isinstance(idx, int) or idx < 0 or idx > 63:
        raise ValueError(f"invalid square index: {idx}")
    file = idx % 8
    rank = idx // 8
    return chr(ord("a") + file) + str(rank + 1)
