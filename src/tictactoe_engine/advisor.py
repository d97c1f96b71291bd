"""
Heuristic opponent: one-ply move selection.

Policy, first matching rule wins:
  1. complete own line      2. block opponent line
  3. take the center        4. random empty corner
  5. random empty cell      6. None on a full board

Randomness is confined to rules 4-5 and goes through an injected ``Chooser``
so tests can pin it down with a stub or a fixed seed.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

import numpy as np

from .game_basics import CENTER, CORNERS, Cell, Mark, empty_cells
from .tactics import completing_cell

log = logging.getLogger(__name__)

Chooser = Callable[[Sequence[int]], int]


def make_chooser(seed: Optional[int] = None) -> Chooser:
    """Uniform chooser backed by a numpy Generator; same seed, same picks."""
    rng = np.random.default_rng(seed)

    def choose(cells: Sequence[int]) -> int:
        return cells[int(rng.integers(len(cells)))]

    return choose


def choose_move(
    board: Sequence[Cell],
    own_mark: Mark,
    opponent_mark: Mark,
    chooser: Optional[Chooser] = None,
) -> Optional[int]:
    win = completing_cell(board, own_mark)
    if win is not None:
        log.debug("advisor: win at %d", win)
        return win
    block = completing_cell(board, opponent_mark)
    if block is not None:
        log.debug("advisor: block at %d", block)
        return block
    if board[CENTER] is None:
        return CENTER
    empty = empty_cells(board)
    if not empty:
        return None
    pick = chooser if chooser is not None else make_chooser()
    corners = [i for i in CORNERS if board[i] is None]
    if corners:
        return pick(corners)
    return pick(empty)
