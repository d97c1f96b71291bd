"""
Self-play baselines: the heuristic opponent against itself or a random player.

Nothing is written to disk; a run only yields outcome tallies.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import numpy as np

from .advisor import Chooser, choose_move, make_chooser
from .engine import apply_move, create_game
from .game_basics import DEFAULT_MARKS, Outcome, OutcomeKind, empty_cells

log = logging.getLogger(__name__)

OPPONENTS = ("advisor", "random")


@dataclass
class SimulationResult:
    games: int
    x_wins: int
    o_wins: int
    draws: int
    mean_length: float

    def as_metrics(self) -> Dict[str, float]:
        n = max(1, self.games)
        return {
            "x_win_rate": self.x_wins / n,
            "o_win_rate": self.o_wins / n,
            "draw_rate": self.draws / n,
            "mean_length": self.mean_length,
        }


def play_game(opponent: str, chooser: Chooser) -> Tuple[Outcome, int]:
    """Advisor plays X; ``opponent`` plays O. Returns (outcome, plies)."""
    if opponent not in OPPONENTS:
        raise ValueError(f"Unknown opponent: {opponent}")
    x, o = DEFAULT_MARKS
    state = create_game()
    plies = 0
    while not state.is_over:
        if state.turn == x or opponent == "advisor":
            cell = choose_move(state.board, state.turn, state.other(state.turn), chooser)
        else:
            cell = chooser(empty_cells(state.board))
        state = apply_move(state, cell)
        plies += 1
    return state.outcome, plies


def run_simulation(games: int, opponent: str = "advisor", seed: Optional[int] = None) -> SimulationResult:
    if games < 1:
        raise ValueError(f"games must be >= 1, got {games}")
    chooser = make_chooser(seed)
    # 0 = X win, 1 = O win, 2 = draw
    codes = np.empty(games, dtype=np.int64)
    lengths = np.empty(games, dtype=np.int64)
    for g in range(games):
        outcome, plies = play_game(opponent, chooser)
        if outcome.kind is OutcomeKind.DRAW:
            codes[g] = 2
        else:
            codes[g] = 0 if outcome.winner == DEFAULT_MARKS[0] else 1
        lengths[g] = plies
    counts = np.bincount(codes, minlength=3)
    result = SimulationResult(
        games=games,
        x_wins=int(counts[0]),
        o_wins=int(counts[1]),
        draws=int(counts[2]),
        mean_length=float(lengths.mean()),
    )
    log.debug("simulation %s: %s", opponent, result)
    return result
