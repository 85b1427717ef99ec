from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .apply import apply_move
from .attacks import is_in_check
from .board import BoardState
from .legality import legal_moves
from .move import Move
from .terminal import classify, count_material, is_checkmate, is_stalemate
from .types import Color, Outcome


class IllegalMoveError(ValueError):
    pass


class MatchOverError(ValueError):
    pass


@dataclass(frozen=True)
class MatchResult:
    outcome: Outcome
    winner: Optional[Color]


def draw_tiebreak(board: BoardState) -> Optional[Color]:
    """Winner of a drawn match: the side with LOWER material, None if level."""
    white = count_material(board, Color.WHITE)
    black = count_material(board, Color.BLACK)
    if white < black:
        return Color.WHITE
    if black < white:
        return Color.BLACK
    return None


@dataclass
class Match:
    """Match wrapper around a board with helper operations.

    Responsibility: own the board for one match, reject illegal moves loudly,
    record history, and report the result the payout layer acts on.
    """

    board: BoardState
    move_stack: List[Move] = field(default_factory=list)
    start_fullmove: int = 1
    starting_side: Color = Color.WHITE

    @classmethod
    def new(cls) -> "Match":
        return cls(board=BoardState.startpos())

    @classmethod
    def from_fen(cls, fen: str) -> "Match":
        board = BoardState.from_fen(fen)
        return cls(board=board, start_fullmove=int(fen.split()[5]), starting_side=board.to_move)

    @property
    def fullmove_number(self) -> int:
        plies = len(self.move_stack) + (1 if self.starting_side is Color.BLACK else 0)
        return self.start_fullmove + plies // 2

    def to_fen(self) -> str:
        return self.board.to_fen(fullmove=self.fullmove_number)

    def legal_moves(self) -> List[Move]:
        return legal_moves(self.board)

    def apply_move(self, move: Move) -> None:
        if self.outcome() is not Outcome.ONGOING:
            raise MatchOverError("match is over")
        if not apply_move(self.board, move):
            raise IllegalMoveError("illegal move")
        self.move_stack.append(move)

    # --- State flags for protocol ---
    def in_check(self) -> bool:
        return is_in_check(self.board, self.board.to_move)

    def checkmate(self) -> bool:
        return is_checkmate(self.board)

    def stalemate(self) -> bool:
        return is_stalemate(self.board)

    def outcome(self) -> Outcome:
        return classify(self.board)

    def is_draw(self) -> bool:
        return self.outcome().is_draw

    def material(self, color: Color) -> int:
        return count_material(self.board, color)

    def result(self) -> MatchResult:
        outcome = self.outcome()
        if outcome is Outcome.CHECKMATE:
            return MatchResult(outcome, self.board.to_move.opponent)
        if outcome.is_draw:
            return MatchResult(outcome, draw_tiebreak(self.board))
        return MatchResult(outcome, None)

    def move_history_uci(self) -> List[str]:
        return [m.to_uci() for m in self.move_stack]
