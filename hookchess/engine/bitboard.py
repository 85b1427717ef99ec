from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional


MASK64 = 0xFFFFFFFFFFFFFFFF


def is_valid_square(sq: object) -> bool:
    """Return True if ``sq`` is an integer square index in 0..63."""
    return isinstance(sq, int) and not isinstance(sq, bool) and 0 <= sq < 64


def file_of(sq: int) -> int:
    return sq % 8


def rank_of(sq: int) -> int:
    return sq // 8


def on_board(file_idx: int, rank_idx: int) -> bool:
    return 0 <= file_idx < 8 and 0 <= rank_idx < 8


def square_of(file_idx: int, rank_idx: int) -> int:
    return rank_idx * 8 + file_idx


def square_color(sq: int) -> int:
    """Return 0 for dark squares and 1 for light squares (a1 is dark)."""
    return (file_of(sq) + rank_of(sq)) % 2


@dataclass(frozen=True)
class Bitboard:
    """Immutable 64-bit square set.

    Bit ``i`` set means square ``i`` (a1=0 .. h8=63) is a member. All
    operations are range-checked: out-of-range squares are never members,
    and setting or clearing one returns the bitboard unchanged.
    """

    value: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", self.value & MASK64)

    @classmethod
    def from_squares(cls, squares: Iterable[int]) -> "Bitboard":
        value = 0
        for sq in squares:
            if is_valid_square(sq):
                value |= 1 << sq
        return cls(value)

    def test(self, sq: int) -> bool:
        if not is_valid_square(sq):
            return False
        return (self.value >> sq) & 1 == 1

    def set(self, sq: int) -> "Bitboard":
        if not is_valid_square(sq):
            return self
        return Bitboard(self.value | (1 << sq))

    def clear(self, sq: int) -> "Bitboard":
        if not is_valid_square(sq):
            return self
        return Bitboard(self.value & ~(1 << sq))

    def first_set(self) -> Optional[int]:
        """Lowest member square, or None when empty."""
        if self.value == 0:
            return None
        return (self.value & -self.value).bit_length() - 1

    def popcount(self) -> int:
        return bin(self.value).count("1")

    def squares(self) -> Iterator[int]:
        # Ascending order keeps every scan deterministic
        v = self.value
        while v:
            lsb = v & -v
            yield lsb.bit_length() - 1
            v ^= lsb

    def __or__(self, other: "Bitboard") -> "Bitboard":
        return Bitboard(self.value | other.value)

    def __and__(self, other: "Bitboard") -> "Bitboard":
        return Bitboard(self.value & other.value)

    def __invert__(self) -> "Bitboard":
        return Bitboard(~self.value)

    def __bool__(self) -> bool:
        return self.value != 0

    def __len__(self) -> int:
        return self.popcount()


EMPTY = Bitboard(0)
