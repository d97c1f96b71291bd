"""Runtime settings for the game driver.

Environment-first, with fallbacks that work from any CWD. Command-line
flags override whatever is returned here.
"""

from __future__ import annotations

import logging
import os

log = logging.getLogger(__name__)

DEFAULT_OPPONENT_DELAY_MS = 400
MODES = ("pvp", "pvai")


def _env_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        log.warning("Ignoring non-integer %s=%r", name, raw)
        return None


def opponent_delay_ms() -> int:
    """Pacing delay before the opponent moves. TTT_OPPONENT_DELAY_MS -> 400."""
    v = _env_int("TTT_OPPONENT_DELAY_MS")
    if v is None or v < 0:
        return DEFAULT_OPPONENT_DELAY_MS
    return v


def default_seed() -> int | None:
    return _env_int("TTT_SEED")


def default_mode() -> str:
    m = (os.getenv("TTT_MODE") or "").strip().lower()
    return m if m in MODES else "pvp"
