from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .bitboard import EMPTY, Bitboard, is_valid_square
from .move import square_to_str, str_to_square
from .types import (
    CASTLING_CHARS,
    PIECE_SYMBOLS,
    SYMBOL_TO_KIND,
    CastlingRights,
    Color,
    PieceKind,
)


STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

HALF_MOVE_MAX = 255
NO_EN_PASSANT = 0xFF

# 6 kind masks, 2 color masks, en_passant, castling, to_move, half_move
BOARD_RECORD = struct.Struct("<8Q4B")


def _empty_kinds() -> List[Bitboard]:
    return [EMPTY] * len(PieceKind)


def _empty_colors() -> List[Bitboard]:
    return [EMPTY] * len(Color)


@dataclass
class BoardState:
    """Complete position as bitboards.

    Notes:
    - Squares are 0..63 (a1=0 .. h8=63), rank-major from white's perspective.
    - ``kinds`` holds one mask per PieceKind (any color); ``colors`` holds one
      mask per Color (any kind). Every occupied square is in exactly one of
      each.
    - The engine never keeps a BoardState of its own; callers own it and
      mutate it only through ``apply_move``.
    """

    kinds: List[Bitboard] = field(default_factory=_empty_kinds)
    colors: List[Bitboard] = field(default_factory=_empty_colors)
    en_passant: Optional[int] = None
    castling: CastlingRights = CastlingRights.NONE
    to_move: Color = Color.WHITE
    half_move: int = 0

    def __post_init__(self) -> None:
        self.to_move = Color(self.to_move)
        self.castling = CastlingRights(self.castling)

    @classmethod
    def startpos(cls) -> "BoardState":
        """Create a board initialized to the standard chess starting position."""
        board = cls(castling=CastlingRights.ALL)
        back_rank = (
            PieceKind.ROOK,
            PieceKind.KNIGHT,
            PieceKind.BISHOP,
            PieceKind.QUEEN,
            PieceKind.KING,
            PieceKind.BISHOP,
            PieceKind.KNIGHT,
            PieceKind.ROOK,
        )
        for file_idx, kind in enumerate(back_rank):
            board.put(file_idx, kind, Color.WHITE)
            board.put(8 + file_idx, PieceKind.PAWN, Color.WHITE)
            board.put(48 + file_idx, PieceKind.PAWN, Color.BLACK)
            board.put(56 + file_idx, kind, Color.BLACK)
        return board

    def copy(self) -> "BoardState":
        """Return an independent value copy (bitboards are immutable)."""
        return BoardState(
            kinds=list(self.kinds),
            colors=list(self.colors),
            en_passant=self.en_passant,
            castling=self.castling,
            to_move=self.to_move,
            half_move=self.half_move,
        )

    # --- Queries ---
    def occupied(self) -> Bitboard:
        return self.colors[Color.WHITE] | self.colors[Color.BLACK]

    def pieces(self, kind: PieceKind, color: Color) -> Bitboard:
        return self.kinds[kind] & self.colors[color]

    def piece_at(self, sq: int) -> Optional[PieceKind]:
        if not is_valid_square(sq):
            return None
        for kind in PieceKind:
            if self.kinds[kind].test(sq):
                return kind
        return None

    def color_at(self, sq: int) -> Optional[Color]:
        for color in Color:
            if self.colors[color].test(sq):
                return color
        return None

    def king_square(self, color: Color) -> Optional[int]:
        return self.pieces(PieceKind.KING, color).first_set()

    def en_passant_victim(self, to_sq: int, color: Color) -> Optional[int]:
        """Square of the pawn taken when ``color`` plays a pawn onto ``to_sq`` en passant.

        Returns None unless ``to_sq`` is the recorded en-passant target and is
        empty. The victim sits one rank behind the target, opposite the
        mover's advance direction.
        """
        if self.en_passant is None or to_sq != self.en_passant:
            return None
        if self.occupied().test(to_sq):
            return None
        victim = to_sq - 8 * color.pawn_direction
        return victim if is_valid_square(victim) else None

    def is_consistent(self) -> bool:
        """Check the occupancy invariants: disjoint colors, one kind per square."""
        white, black = self.colors
        if white & black:
            return False
        union = EMPTY
        seen = 0
        for mask in self.kinds:
            if mask.value & seen:
                return False
            seen |= mask.value
            union = union | mask
        return union == self.occupied()

    # --- Mutation helpers (used by the move applier and parsers) ---
    def put(self, sq: int, kind: PieceKind, color: Color) -> None:
        self.kinds[kind] = self.kinds[kind].set(sq)
        self.colors[color] = self.colors[color].set(sq)

    def remove(self, sq: int) -> Optional[Tuple[PieceKind, Color]]:
        """Clear ``sq`` from every mask; return what stood there, if anything."""
        kind = self.piece_at(sq)
        color = self.color_at(sq)
        if kind is None or color is None:
            return None
        self.kinds[kind] = self.kinds[kind].clear(sq)
        self.colors[color] = self.colors[color].clear(sq)
        return kind, color

    # --- FEN I/O ---
    @classmethod
    def from_fen(cls, fen: str) -> "BoardState":
        """Create a board from a Forsyth–Edwards Notation (FEN) string.

        Args:
            fen (str): FEN string describing the position to load.

        Returns:
            BoardState: Board initialized with the state encoded in ``fen``.

        Raises:
            ValueError: If ``fen`` is empty, has the wrong number of fields, or
                contains invalid piece placement, castling rights, en passant
                square, or move counters.

        Notes:
            The fullmove field is validated but not stored. A halfmove clock
            above 255 saturates, matching the clock's in-game behaviour.
        """
        if not fen or not isinstance(fen, str):
            raise ValueError("FEN must be a non-empty string")
        parts = fen.strip().split()
        if len(parts) != 6:
            raise ValueError("FEN must have 6 fields")
        placement, stm, castling, ep, halfmove, fullmove = parts

        ranks = placement.split("/")
        if len(ranks) != 8:
            raise ValueError("FEN board must have 8 ranks")
        board = cls()
        for rank_idx, rank in enumerate(ranks[::-1]):  # start from rank 1 (bottom)
            file_idx = 0
            for ch in rank:
                if ch.isdigit():
                    n = int(ch)
                    if n < 1 or n > 8:
                        raise ValueError("invalid empty count in FEN rank")
                    file_idx += n
                else:
                    kind = SYMBOL_TO_KIND.get(ch.lower())
                    if kind is None:
                        raise ValueError(f"invalid piece in FEN: {ch!r}")
                    if file_idx >= 8:
                        raise ValueError("too many squares in FEN rank")
                    color = Color.WHITE if ch.isupper() else Color.BLACK
                    board.put(rank_idx * 8 + file_idx, kind, color)
                    file_idx += 1
            if file_idx != 8:
                raise ValueError("rank does not sum to 8 squares in FEN")

        if stm not in ("w", "b"):
            raise ValueError("side to move must be 'w' or 'b'")
        board.to_move = Color.WHITE if stm == "w" else Color.BLACK

        rights = CastlingRights.NONE
        if castling != "-":
            letters = {ch: right for right, ch in CASTLING_CHARS}
            for ch in castling:
                if ch not in letters:
                    raise ValueError("invalid castling rights")
                rights |= letters[ch]
        board.castling = rights

        if ep != "-":
            try:
                ep_square = str_to_square(ep)
            except ValueError as e:
                raise ValueError("invalid en passant square") from e
            if ep_square // 8 not in (2, 5):
                raise ValueError("invalid en passant square rank")
            board.en_passant = ep_square

        try:
            halfmove_clock = int(halfmove)
            fullmove_number = int(fullmove)
        except ValueError as e:
            raise ValueError("invalid move counters in FEN") from e
        if halfmove_clock < 0 or fullmove_number <= 0:
            raise ValueError("invalid move counters in FEN")
        board.half_move = min(halfmove_clock, HALF_MOVE_MAX)
        return board

    def to_fen(self, fullmove: int = 1) -> str:
        """Serialize the position into a normalized FEN string.

        Args:
            fullmove (int): Fullmove number to write; the board does not track it.
        """
        ranks_str: List[str] = []
        for rank_idx in range(7, -1, -1):
            run = 0
            row = []
            for file_idx in range(8):
                ch = self._piece_char_at(rank_idx * 8 + file_idx)
                if ch is None:
                    run += 1
                else:
                    if run > 0:
                        row.append(str(run))
                        run = 0
                    row.append(ch)
            if run > 0:
                row.append(str(run))
            ranks_str.append("".join(row))
        placement = "/".join(ranks_str)

        castling = "".join(ch for right, ch in CASTLING_CHARS if self.castling & right) or "-"
        ep = square_to_str(self.en_passant) if self.en_passant is not None else "-"
        return f"{placement} {self.to_move.symbol} {castling} {ep} {self.half_move} {fullmove}"

    def _piece_char_at(self, sq: int) -> Optional[str]:
        kind = self.piece_at(sq)
        color = self.color_at(sq)
        if kind is None or color is None:
            return None
        ch = PIECE_SYMBOLS[kind]
        return ch.upper() if color is Color.WHITE else ch

    # --- Binary record ---
    def to_bytes(self) -> bytes:
        """Encode the board as its fixed-size little-endian record."""
        return BOARD_RECORD.pack(
            *(mask.value for mask in self.kinds),
            *(mask.value for mask in self.colors),
            NO_EN_PASSANT if self.en_passant is None else self.en_passant,
            int(self.castling),
            int(self.to_move),
            self.half_move,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "BoardState":
        """Decode a record produced by ``to_bytes``.

        Raises:
            ValueError: On a wrong length, an out-of-range field, or masks that
                break the occupancy invariants.
        """
        if len(data) != BOARD_RECORD.size:
            raise ValueError(f"board record must be {BOARD_RECORD.size} bytes, got {len(data)}")
        fields = BOARD_RECORD.unpack(data)
        kinds = [Bitboard(v) for v in fields[0:6]]
        colors = [Bitboard(v) for v in fields[6:8]]
        ep, castling, to_move, half_move = fields[8:12]
        if ep != NO_EN_PASSANT and not is_valid_square(ep):
            raise ValueError(f"invalid en passant square: {ep}")
        if castling > CastlingRights.ALL:
            raise ValueError(f"invalid castling bits: {castling:#x}")
        if to_move not in (Color.WHITE, Color.BLACK):
            raise ValueError(f"invalid side to move: {to_move}")
        board = cls(
            kinds=kinds,
            colors=colors,
            en_passant=None if ep == NO_EN_PASSANT else ep,
            castling=CastlingRights(castling),
            to_move=Color(to_move),
            half_move=half_move,
        )
        if not board.is_consistent():
            raise ValueError("board record violates occupancy invariants")
        return board


def init_standard_position() -> BoardState:
    return BoardState.startpos()
