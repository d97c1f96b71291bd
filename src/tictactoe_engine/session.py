"""
Game session: the driver-owned state layered over the engine.

The session tracks the mode, the "opponent is thinking" flag and a
generation counter. Every restart or mode change bumps the generation, and
an opponent request made under an older generation is dropped on resolve
instead of being applied to the new game.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from .advisor import Chooser, choose_move
from .engine import GameState, InvalidMove, apply_move, create_game
from .game_basics import Board, Mark, OutcomeKind
from .notation import chat_notation

log = logging.getLogger(__name__)


class Mode(enum.Enum):
    PVP = "pvp"
    PVAI = "pvai"


@dataclass(frozen=True)
class PendingMove:
    generation: int
    board: Board
    mark: Mark


class GameSession:
    def __init__(
        self,
        mode: Mode = Mode.PVP,
        human_mark: Mark = "X",
        ai_mark: Mark = "O",
        chooser: Optional[Chooser] = None,
    ) -> None:
        self.human_mark = human_mark
        self.ai_mark = ai_mark
        self.chooser = chooser
        self.mode = mode
        self.generation = 0
        self.pending: Optional[PendingMove] = None
        self.state: GameState = create_game((human_mark, ai_mark))

    @property
    def thinking(self) -> bool:
        return self.pending is not None

    def _reset(self) -> None:
        self.generation += 1
        self.pending = None
        self.state = create_game((self.human_mark, self.ai_mark))
        log.debug("session reset: generation=%d mode=%s", self.generation, self.mode.value)

    def restart(self) -> None:
        self._reset()

    def set_mode(self, mode: Mode) -> None:
        self.mode = mode
        self._reset()

    def play(self, cell: int) -> GameState:
        """Apply a human move. Rejected while the opponent is due or thinking."""
        ai_turn = self.state.turn == self.ai_mark and not self.state.is_over
        if self.mode is Mode.PVAI and (self.pending is not None or ai_turn):
            raise InvalidMove("Not your turn: waiting for the opponent")
        self.state = apply_move(self.state, cell)
        return self.state

    def opponent_due(self) -> bool:
        return (
            self.mode is Mode.PVAI
            and not self.state.is_over
            and self.state.turn == self.ai_mark
            and self.pending is None
        )

    def request_opponent_move(self) -> PendingMove:
        if not self.opponent_due():
            raise InvalidMove("Opponent move is not due")
        self.pending = PendingMove(self.generation, self.state.board, self.ai_mark)
        return self.pending

    def resolve(self, pending: PendingMove, chooser: Optional[Chooser] = None) -> Optional[GameState]:
        """Compute and apply the opponent move for ``pending``.

        Returns None without touching the game when the request is stale,
        i.e. it belongs to an earlier generation or is no longer the
        outstanding request.
        """
        if pending.generation != self.generation or pending is not self.pending:
            log.debug("dropping stale opponent request (generation %d, current %d)",
                      pending.generation, self.generation)
            return None
        self.pending = None
        cell = choose_move(
            pending.board,
            pending.mark,
            self.human_mark,
            chooser if chooser is not None else self.chooser,
        )
        if cell is None:
            return None
        self.state = apply_move(self.state, cell)
        log.debug("opponent played %d", cell)
        return self.state

    def status(self) -> str:
        outcome = self.state.outcome
        ai = self.mode is Mode.PVAI
        if outcome.kind is OutcomeKind.DRAW:
            return "Draw!"
        if outcome.kind is OutcomeKind.WIN:
            suffix = " (AI)" if ai and outcome.winner == self.ai_mark else ""
            return f"Winner: {outcome.winner}{suffix}"
        if ai:
            if self.thinking:
                return "AI is thinking..."
            return f"Your turn ({self.state.turn})"
        return f"Current turn: {self.state.turn}"

    def snapshot(self) -> Dict[str, object]:
        """Read-only view for the chat assistant."""
        return {
            "board": chat_notation(self.state.board),
            "status": self.status(),
            "mode": self.mode.value,
            "roles": {"user": self.human_mark, "ai": self.ai_mark},
        }
