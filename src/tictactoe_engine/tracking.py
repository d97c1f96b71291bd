"""
Optional MLflow tracking for simulation runs.

MLflow is imported only when tracking is requested, so it stays an extra
rather than a hard dependency. A tracking backend that cannot start a run
never aborts it; errors raised by the run itself propagate.
"""
from __future__ import annotations

import logging
from contextlib import ExitStack, contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional

log = logging.getLogger(__name__)


@contextmanager
def maybe_mlflow_run(enabled: bool, run_name: str, log_dir: Optional[Path] = None) -> Iterator[bool]:
    """Yield True inside an active MLflow run, False when tracking is off or unavailable."""
    if not enabled:
        yield False
        return
    try:
        import mlflow  # type: ignore
    except ImportError:
        log.warning("mlflow is not installed; continuing without tracking")
        yield False
        return
    with ExitStack() as stack:
        started = False
        try:
            if log_dir is not None:
                mlflow.set_tracking_uri((log_dir.resolve() / "mlruns").as_uri())
            stack.enter_context(mlflow.start_run(run_name=run_name))
            started = True
        except Exception as exc:
            log.warning("mlflow tracking unavailable (%s); continuing without tracking", exc)
        yield started


def log_params(params: Dict[str, object]) -> None:
    try:
        import mlflow  # type: ignore

        mlflow.log_params(params)
    except Exception as exc:
        log.debug("mlflow log_params skipped: %s", exc)


def log_metrics(metrics: Dict[str, float]) -> None:
    try:
        import mlflow  # type: ignore

        mlflow.log_metrics(metrics)
    except Exception as exc:
        log.debug("mlflow log_metrics skipped: %s", exc)
