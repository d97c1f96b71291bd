from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional, TextIO

from . import config
from .advisor import choose_move, make_chooser
from .engine import MoveError
from .game_basics import Board, evaluate_outcome, status_text, winning_line
from .notation import chat_notation, format_board, parse_board, render_grid
from .session import GameSession, Mode
from .simulate import OPPONENTS, run_simulation
from .tactics import fork_moves, immediate_winning_moves
from .tracking import log_metrics, log_params, maybe_mlflow_run

DETERMINISTIC_SEED = 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt", description="Tic-tac-toe engine CLI")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )
    p.add_argument("--seed", type=int, default=None, help="Seed for the opponent's random choices")
    p.add_argument(
        "--deterministic",
        action="store_true",
        help="Fix the opponent seed (0 unless --seed or TTT_SEED is given)",
    )

    board_help = "Board string, e.g. X...O.... or 100020000 (0/. empty, 1/X, 2/O)"

    p_status = sub.add_parser("status", help="Show outcome and status for a board")
    p_status.add_argument("--board", required=True, help=board_help)

    p_adv = sub.add_parser("advise", help="Ask the heuristic opponent for a move")
    p_adv.add_argument("--board", required=True, help=board_help)
    p_adv.add_argument(
        "--mark", choices=["X", "O"], default=None, help="Mark to move (default: side to move)"
    )

    p_tac = sub.add_parser("tactics", help="List immediate wins and forks for both marks")
    p_tac.add_argument("--board", required=True, help=board_help)

    p_play = sub.add_parser("play", help="Play in the terminal (cells 0-8, r=restart, m=mode, q=quit)")
    p_play.add_argument("--mode", choices=list(config.MODES), default=None, help="pvp or pvai")
    p_play.add_argument(
        "--delay-ms", type=int, default=None, help="Pause before the opponent moves (default: 400)"
    )

    p_sim = sub.add_parser("simulate", help="Self-play tallies for the heuristic opponent")
    p_sim.add_argument("--games", type=int, default=100, help="Number of games (default: 100)")
    p_sim.add_argument(
        "--opponent", choices=list(OPPONENTS), default="advisor", help="Who plays O"
    )
    p_sim.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p_sim.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs (for mlflow local backend)",
    )

    return p


def _resolve_seed(seed: Optional[int], deterministic: bool) -> Optional[int]:
    """Seed handed to every chooser; --deterministic pins it when none is given."""
    if seed is None and deterministic:
        seed = DETERMINISTIC_SEED
    if seed is not None:
        import os

        os.environ.setdefault("PYTHONHASHSEED", str(seed))
    return seed


def _print_info() -> None:
    import importlib.util
    import platform

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy", "mlflow"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _load_board(raw: str) -> Optional[Board]:
    try:
        board = parse_board(raw)
    except ValueError as exc:
        logging.error("%s", exc)
        return None
    x, o = board.count("X"), board.count("O")
    if not (x == o or x == o + 1):
        logging.error("Board is not reachable: X=%d O=%d", x, o)
        return None
    return board


def _side_to_move(board: Board) -> str:
    return "X" if board.count("X") == board.count("O") else "O"


def _play_loop(session: GameSession, delay_s: float, stream: TextIO) -> int:
    print(f"Mode: {session.mode.value}")
    print(render_grid(session.state.board))
    print(session.status())
    for line in stream:
        cmd = line.strip().lower()
        if not cmd:
            continue
        if cmd == "q":
            return 0
        if cmd == "r":
            session.restart()
        elif cmd == "m":
            session.set_mode(Mode.PVAI if session.mode is Mode.PVP else Mode.PVP)
            print(f"Mode: {session.mode.value}")
        else:
            if not cmd.isdigit():
                logging.warning("Unknown command %r (cells 0-8, r, m, q)", cmd)
                continue
            try:
                session.play(int(cmd))
            except MoveError as exc:
                logging.warning("%s", exc)
                continue
            if session.opponent_due():
                pending = session.request_opponent_move()
                print(session.status())
                if delay_s > 0:
                    time.sleep(delay_s)
                session.resolve(pending)
        print(render_grid(session.state.board))
        print(session.status())
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    # Early exits
    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("tictactoe-engine"))
        except Exception:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    seed = _resolve_seed(
        ns.seed if ns.seed is not None else config.default_seed(),
        getattr(ns, "deterministic", False),
    )

    if ns.cmd == "status":
        board = _load_board(ns.board)
        if board is None:
            return 2
        outcome = evaluate_outcome(board)
        logging.info(
            "board=%s status=%r line=%s chat=%r",
            format_board(board),
            status_text(outcome, _side_to_move(board)),
            winning_line(board),
            chat_notation(board),
        )
        return 0

    if ns.cmd == "advise":
        board = _load_board(ns.board)
        if board is None:
            return 2
        own = ns.mark or _side_to_move(board)
        outcome = evaluate_outcome(board)
        if outcome.is_terminal:
            logging.error("Game is already over: %s", status_text(outcome, own))
            return 2
        opp = "O" if own == "X" else "X"
        move = choose_move(board, own, opp, make_chooser(seed))
        logging.info("mark=%s move=%s", own, move)
        return 0

    if ns.cmd == "tactics":
        board = _load_board(ns.board)
        if board is None:
            return 2
        logging.info(
            "to_move=%s wins_x=%s wins_o=%s forks_x=%s forks_o=%s",
            _side_to_move(board),
            immediate_winning_moves(board, "X"),
            immediate_winning_moves(board, "O"),
            fork_moves(board, "X"),
            fork_moves(board, "O"),
        )
        return 0

    if ns.cmd == "play":
        mode = Mode(ns.mode or config.default_mode())
        delay_ms = ns.delay_ms if ns.delay_ms is not None else config.opponent_delay_ms()
        if delay_ms < 0:
            logging.error("Delay must be non-negative: %s", delay_ms)
            return 2
        session = GameSession(mode=mode, chooser=make_chooser(seed))
        return _play_loop(session, delay_ms / 1000.0, sys.stdin)

    if ns.cmd == "simulate":
        if ns.games < 1:
            logging.error("Number of games must be positive: %s", ns.games)
            return 2
        with maybe_mlflow_run(ns.tracking == "mlflow", run_name="simulate", log_dir=ns.log_dir) as tracked:
            result = run_simulation(ns.games, opponent=ns.opponent, seed=seed)
            if tracked:
                log_params({"games": ns.games, "opponent": ns.opponent, "seed": seed})
                log_metrics(result.as_metrics())
        logging.info(
            "games=%d x_wins=%d o_wins=%d draws=%d mean_length=%.2f",
            result.games,
            result.x_wins,
            result.o_wins,
            result.draws,
            result.mean_length,
        )
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
