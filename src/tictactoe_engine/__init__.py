"""tictactoe_engine package.

Rules engine, heuristic opponent, session driver, and a simple CLI.

Convenience imports are exposed for common workflows.
"""

from .advisor import choose_move, make_chooser
from .engine import GameState, InvalidMove, MoveError, OutOfRange, apply_move, create_game
from .game_basics import DRAW, IN_PROGRESS, LINES, Outcome, OutcomeKind, evaluate_outcome
from .session import GameSession, Mode

__all__ = [
    "create_game",
    "apply_move",
    "evaluate_outcome",
    "choose_move",
    "make_chooser",
    "GameState",
    "GameSession",
    "Mode",
    "Outcome",
    "OutcomeKind",
    "IN_PROGRESS",
    "DRAW",
    "LINES",
    "MoveError",
    "InvalidMove",
    "OutOfRange",
]
