"""
Board notations used at the edges: CLI board strings and the chat snapshot.
Teaching notes:
- CLI strings are 9 characters: 0/./- empty, 1/X for X, 2/O for O.
- The chat notation is rows joined by ", ", cells by "/", empties as "--".
"""
from typing import Dict, List, Sequence

from .game_basics import BOARD_SIZE, Board, Cell

_CELL_CODES: Dict[str, Cell] = {
    "0": None, ".": None, "-": None,
    "1": "X", "X": "X",
    "2": "O", "O": "O",
}


def parse_board(raw: str) -> Board:
    s = raw.strip().upper()
    if len(s) != BOARD_SIZE or any(c not in _CELL_CODES for c in s):
        raise ValueError(f"Invalid board string {raw!r}. Must be 9 chars of 0/1/2 or ./X/O.")
    return tuple(_CELL_CODES[c] for c in s)


def format_board(board: Sequence[Cell]) -> str:
    return "".join("." if v is None else str(v) for v in board)


def chat_notation(board: Sequence[Cell]) -> str:
    rows: List[str] = []
    for r in range(3):
        row = board[r * 3:r * 3 + 3]
        rows.append("/".join("--" if v is None else str(v) for v in row))
    return ", ".join(rows)


def render_grid(board: Sequence[Cell]) -> str:
    """Plain-text grid for the terminal; empty cells show their index."""
    lines = []
    for r in range(3):
        cells = [str(board[i]) if board[i] is not None else str(i) for i in range(r * 3, r * 3 + 3)]
        lines.append(" " + " | ".join(cells))
    return "\n---+---+---\n".join(lines)
