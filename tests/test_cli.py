import io
import os
import subprocess
import sys
from pathlib import Path

import pytest

from tictactoe_engine import cli
from tictactoe_engine.session import GameSession, Mode

SRC = Path(__file__).resolve().parents[1] / "src"


def _run_cli(args: list[str], cwd: Path, stdin: str = "") -> subprocess.CompletedProcess:
    exe = [sys.executable, "-m", "tictactoe_engine.cli"]
    env = dict(os.environ)
    env.pop("TTT_SEED", None)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC), env.get("PYTHONPATH")]))
    return subprocess.run(exe + args, cwd=cwd, input=stdin, capture_output=True, text=True, env=env)


def test_cli_status_and_advise(tmp_path: Path):
    r = _run_cli(["status", "--board", "112212001"], cwd=tmp_path)
    assert r.returncode == 0
    s = r.stdout + r.stderr
    assert "winner: X" in s
    assert "(0, 4, 8)" in s

    r = _run_cli(["advise", "--board", "110020000"], cwd=tmp_path)
    assert r.returncode == 0
    s = r.stdout + r.stderr
    assert "mark=O" in s and "move=2" in s


def test_cli_tactics_and_simulate(tmp_path: Path):
    r = _run_cli(["tactics", "--board", "100020001"], cwd=tmp_path)
    assert r.returncode == 0
    assert "forks_x=[2, 6]" in r.stdout + r.stderr
    r = _run_cli(["--seed", "5", "simulate", "--games", "20", "--opponent", "random"], cwd=tmp_path)
    assert r.returncode == 0
    assert "games=20" in r.stdout + r.stderr


@pytest.mark.parametrize("bad", ["abc", "0123456789", "12345678x", "111000000"])
def test_cli_error_invalid_boards(tmp_path: Path, bad: str):
    r = _run_cli(["status", "--board", bad], cwd=tmp_path)
    assert r.returncode != 0
    r = _run_cli(["advise", "--board", bad], cwd=tmp_path)
    assert r.returncode != 0


def test_deterministic_advise_repeats(tmp_path: Path):
    # center taken, so the pick is a random corner
    moves = set()
    for _ in range(3):
        r = _run_cli(["--deterministic", "advise", "--board", "000010000"], cwd=tmp_path)
        assert r.returncode == 0
        out = r.stdout + r.stderr
        moves.add(out[out.index("move="):].split()[0])
    assert len(moves) == 1
    assert moves.pop() in {"move=0", "move=2", "move=6", "move=8"}


def test_deterministic_uses_fixed_seed(monkeypatch):
    monkeypatch.delenv("PYTHONHASHSEED", raising=False)
    assert cli._resolve_seed(None, True) == cli.DETERMINISTIC_SEED
    assert cli._resolve_seed(7, True) == 7
    assert cli._resolve_seed(None, False) is None


def test_advise_on_finished_game_fails():
    assert cli.main(["advise", "--board", "111220200"]) == 2


def test_play_pvp_via_stdin(tmp_path: Path):
    r = _run_cli(["play", "--mode", "pvp"], cwd=tmp_path, stdin="0\n3\n1\n4\n2\nq\n")
    assert r.returncode == 0
    assert "Winner: X" in r.stdout


def test_play_loop_pvai_and_bad_input(capsys):
    session = GameSession(mode=Mode.PVAI, chooser=lambda cells: cells[0])
    rc = cli._play_loop(session, 0.0, io.StringIO("hello\n9\n0\n0\n8\n1\nq\n"))
    assert rc == 0
    out = capsys.readouterr().out
    assert "Winner: O (AI)" in out
    assert session.generation == 0


def test_play_loop_restart_and_mode_toggle(capsys):
    session = GameSession(mode=Mode.PVP)
    cli._play_loop(session, 0.0, io.StringIO("4\nr\nm\n"))
    assert session.mode is Mode.PVAI
    assert session.generation == 2
    assert session.state.board == (None,) * 9
    assert "Mode: pvai" in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    assert cli.main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()
