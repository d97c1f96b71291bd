"""
Game basics: board representation, winning lines, outcome evaluation.
Teaching notes:
- A board is a tuple of 9 cells, row-major (index = row*3 + col). None = empty.
- Marks are opaque hashable symbols; "X" and "O" are only defaults.
- The outcome is always recomputed from the board, never tracked separately.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Hashable, List, Optional, Sequence, Tuple

Mark = Hashable
Cell = Optional[Mark]
Board = Tuple[Cell, ...]

BOARD_SIZE = 9
CENTER = 4
CORNERS = (0, 2, 6, 8)
EDGES = (1, 3, 5, 7)
DEFAULT_MARKS: Tuple[Mark, Mark] = ("X", "O")

# rows top-to-bottom, columns left-to-right, then the two diagonals
LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


class OutcomeKind(enum.Enum):
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    winner: Optional[Mark] = None

    @classmethod
    def win(cls, mark: Mark) -> "Outcome":
        return cls(OutcomeKind.WIN, mark)

    @property
    def is_terminal(self) -> bool:
        return self.kind is not OutcomeKind.IN_PROGRESS


IN_PROGRESS = Outcome(OutcomeKind.IN_PROGRESS)
DRAW = Outcome(OutcomeKind.DRAW)


def empty_board() -> Board:
    return (None,) * BOARD_SIZE


def empty_cells(board: Sequence[Cell]) -> List[int]:
    return [i for i, v in enumerate(board) if v is None]


def winning_line(board: Sequence[Cell]) -> Optional[Tuple[int, int, int]]:
    """Return the first completed line in enumeration order, if any."""
    for line in LINES:
        a, b, c = line
        v = board[a]
        if v is not None and v == board[b] and v == board[c]:
            return line
    return None


def evaluate_outcome(board: Sequence[Cell]) -> Outcome:
    line = winning_line(board)
    if line is not None:
        return Outcome.win(board[line[0]])
    if None not in board:
        return DRAW
    return IN_PROGRESS


def status_text(outcome: Outcome, turn: Mark) -> str:
    if outcome.kind is OutcomeKind.WIN:
        return f"winner: {outcome.winner}"
    if outcome.kind is OutcomeKind.DRAW:
        return "draw"
    return f"current turn: {turn}"
