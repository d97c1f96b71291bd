"""
Tactics and simple motifs: immediate wins/blocks, forks.
Teaching notes:
- A line "threatens" when it holds two of one mark and a single empty cell.
- Local motifs are all the opponent looks at; there is no deeper search.
"""
from typing import List, Optional, Sequence

from .game_basics import LINES, Cell, Mark


def completing_cell(board: Sequence[Cell], mark: Mark) -> Optional[int]:
    """Empty cell of the first line (enumeration order) holding two ``mark``s."""
    for line in LINES:
        cells = [board[i] for i in line]
        if cells.count(mark) == 2 and cells.count(None) == 1:
            return line[cells.index(None)]
    return None


def immediate_winning_moves(board: Sequence[Cell], mark: Mark) -> List[int]:
    wins: List[int] = []
    for i, v in enumerate(board):
        if v is not None:
            continue
        b = list(board)
        b[i] = mark
        if any(i in line and all(b[j] == mark for j in line) for line in LINES):
            wins.append(i)
    return wins


def fork_moves(board: Sequence[Cell], mark: Mark) -> List[int]:
    """Cells that would leave ``mark`` with two winning cells at once.

    Used for the CLI tactics report only; the opponent never looks this far.
    """
    forks: List[int] = []
    for i, v in enumerate(board):
        if v is not None:
            continue
        b = list(board)
        b[i] = mark
        if len(immediate_winning_moves(b, mark)) >= 2:
            forks.append(i)
    return forks
