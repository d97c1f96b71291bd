from tictactoe_engine import config


def test_delay_defaults(monkeypatch):
    monkeypatch.delenv("TTT_OPPONENT_DELAY_MS", raising=False)
    assert config.opponent_delay_ms() == 400


def test_delay_from_env(monkeypatch):
    monkeypatch.setenv("TTT_OPPONENT_DELAY_MS", "0")
    assert config.opponent_delay_ms() == 0
    monkeypatch.setenv("TTT_OPPONENT_DELAY_MS", "250")
    assert config.opponent_delay_ms() == 250


def test_delay_bad_env_falls_back(monkeypatch):
    monkeypatch.setenv("TTT_OPPONENT_DELAY_MS", "-5")
    assert config.opponent_delay_ms() == 400
    monkeypatch.setenv("TTT_OPPONENT_DELAY_MS", "soon")
    assert config.opponent_delay_ms() == 400


def test_seed_and_mode(monkeypatch):
    monkeypatch.delenv("TTT_SEED", raising=False)
    monkeypatch.delenv("TTT_MODE", raising=False)
    assert config.default_seed() is None
    assert config.default_mode() == "pvp"
    monkeypatch.setenv("TTT_SEED", "42")
    monkeypatch.setenv("TTT_MODE", "PVAI")
    assert config.default_seed() == 42
    assert config.default_mode() == "pvai"
    monkeypatch.setenv("TTT_MODE", "online")
    assert config.default_mode() == "pvp"
