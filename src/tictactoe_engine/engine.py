"""
Rules engine: game creation and the single move entry point.

States are immutable values. ``apply_move`` returns a new GameState and
leaves the one passed in untouched, so callers keep the previous state if
they need it.
"""
from __future__ import annotations

import operator
from dataclasses import dataclass, replace
from typing import Sequence, Tuple

from .game_basics import (
    BOARD_SIZE,
    DEFAULT_MARKS,
    IN_PROGRESS,
    Board,
    Mark,
    Outcome,
    empty_board,
    evaluate_outcome,
    status_text,
)


class MoveError(ValueError):
    """Base class for rejected moves."""


class OutOfRange(MoveError, IndexError):
    """Cell index outside [0, 8]; a caller bug rather than a user mistake."""


class InvalidMove(MoveError):
    """Occupied cell, or the game is already over."""


@dataclass(frozen=True)
class GameState:
    board: Board
    turn: Mark
    outcome: Outcome
    marks: Tuple[Mark, Mark] = DEFAULT_MARKS

    @property
    def is_over(self) -> bool:
        return self.outcome.is_terminal

    def other(self, mark: Mark) -> Mark:
        first, second = self.marks
        return second if mark == first else first

    def status(self) -> str:
        return status_text(self.outcome, self.turn)


def create_game(marks: Sequence[Mark] = DEFAULT_MARKS) -> GameState:
    pair = tuple(marks)
    if len(pair) != 2 or None in pair or pair[0] == pair[1]:
        raise ValueError(f"Need two distinct non-empty marks, got {marks!r}")
    return GameState(board=empty_board(), turn=pair[0], outcome=IN_PROGRESS, marks=pair)


def apply_move(state: GameState, cell: int) -> GameState:
    try:
        index = operator.index(cell)
    except TypeError:
        index = None
    if isinstance(cell, bool) or index is None or not 0 <= index < BOARD_SIZE:
        raise OutOfRange(f"Cell index must be 0-8, got {cell!r}")
    cell = index
    if state.outcome.is_terminal:
        raise InvalidMove(f"Game is already over ({state.status()})")
    if state.board[cell] is not None:
        raise InvalidMove(f"Cell {cell} is already occupied by {state.board[cell]}")
    board = list(state.board)
    board[cell] = state.turn
    new_board = tuple(board)
    # turn flips even on a terminal result; no further moves are accepted anyway
    return replace(
        state,
        board=new_board,
        turn=state.other(state.turn),
        outcome=evaluate_outcome(new_board),
    )
