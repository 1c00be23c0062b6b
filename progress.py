from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import Any, Dict, Optional

# ------------------------------
# Thread-safe global progress state
# ------------------------------

PROGRESS_LOCK = threading.Lock()


def _init_logger() -> logging.Logger:
    logger = logging.getLogger("solver.attempt_log")
    if logger.handlers:
        return logger

    log_path = Path(__file__).resolve().parent / "logs" / "solver_attempts.log"
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    except OSError:
        # If the log file cannot be opened we continue without it; progress
        # tracking must not break the solver.
        logger.handlers.clear()
    return logger


ATTEMPT_LOGGER = _init_logger()


def _log_enabled() -> bool:
    return bool(ATTEMPT_LOGGER.handlers)


def _fmt_seconds(seconds: Optional[float]) -> Optional[str]:
    if seconds is None:
        return None
    try:
        return f"{float(seconds):.2f}s"
    except (TypeError, ValueError):
        return None


def _emit_log(event: str, level: int = logging.INFO, **fields: Any) -> None:
    if not _log_enabled():
        return
    extras = [
        f"{key}={value}"
        for key, value in fields.items()
        if value is not None and value != ""
    ]
    try:
        if extras:
            ATTEMPT_LOGGER.log(level, "%s | %s", event, " ".join(extras))
        else:
            ATTEMPT_LOGGER.log(level, "%s", event)
    except Exception:
        # Logging failures must never bubble back to callers.
        pass


def log_attempt_detail(event: str, **fields: Any) -> None:
    _emit_log(event, **fields)


def log_error(event: str, **fields: Any) -> None:
    _emit_log(event, level=logging.ERROR, **fields)


# Single source of truth for the result page / progress poller
PROGRESS: Dict[str, Any] = {
    "status": "Idle",          # Idle | Solving | Solved | Error
    "attempt": 0,              # current 1-based attempt
    "max_attempts": 0,         # attempt cap for this run
    "iterations": 0,           # solver steps used by the last attempt
    "percent": 0.0,            # 0..100 float
    "tile_count": 0,           # tiles in the requested shape
    "elapsed_start": None,     # t0 (float) when solving started
    "elapsed": 0.0,            # seconds snapshot
    "message": "",             # optional note
    "done": False,             # run completed
    "ok": None,                # success flag if known
    "result_url": "",          # optional navigation target
    "run_id": 0,               # monotonically increasing identifier
}

# ------------------------------
# Helpers
# ------------------------------

def _now() -> float:
    return time.time()

def _fmt_elapsed(seconds: float) -> str:
    seconds = max(0.0, float(seconds))
    if seconds < 60:
        return f"{int(seconds)}s"
    m, s = divmod(int(seconds), 60)
    if m < 60:
        return f"{m}m {s}s"
    h, m = divmod(m, 60)
    return f"{h}h {m}m"

def reset() -> None:
    with PROGRESS_LOCK:
        new_run_id = int(PROGRESS.get("run_id") or 0) + 1
        PROGRESS.update({
            "status": "Idle",
            "attempt": 0,
            "max_attempts": 0,
            "iterations": 0,
            "percent": 0.0,
            "tile_count": 0,
            "elapsed_start": None,
            "elapsed": 0.0,
            "message": "",
            "done": False,
            "ok": None,
            "result_url": "",
            "run_id": new_run_id,
        })
    _emit_log("Progress reset", run_id=new_run_id)

def start_timer() -> None:
    with PROGRESS_LOCK:
        PROGRESS["elapsed_start"] = _now()
        PROGRESS["elapsed"] = 0.0

def _touch_elapsed_locked() -> None:
    t0 = PROGRESS.get("elapsed_start")
    if t0 is not None:
        PROGRESS["elapsed"] = _now() - float(t0)

# ------------------------------
# Setters (tolerant)
# ------------------------------

def _as_int(v: Any) -> int:
    try:
        return max(0, int(v))
    except (TypeError, ValueError):
        return 0

def set_status(v: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["status"] = str(v)

def set_tile_count(n: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["tile_count"] = _as_int(n)

def set_attempt(attempt: Any, max_attempts: Any = None, iterations: Any = None) -> None:
    with PROGRESS_LOCK:
        PROGRESS["attempt"] = _as_int(attempt)
        if max_attempts is not None:
            PROGRESS["max_attempts"] = _as_int(max_attempts)
        if iterations is not None:
            PROGRESS["iterations"] = _as_int(iterations)
        cap = PROGRESS["max_attempts"]
        if cap:
            PROGRESS["percent"] = min(100.0, 100.0 * PROGRESS["attempt"] / cap)
        _touch_elapsed_locked()

def set_result_url(url: Any) -> None:
    with PROGRESS_LOCK:
        PROGRESS["result_url"] = "" if url is None else str(url)

def set_done(ok: Any = None, *, reason: Any = None) -> None:
    """Mark the run complete.

    ``ok`` picks the final status (``"Solved"`` or ``"Error"``); when it is
    omitted the status defaults to solved. ``reason`` lands in ``message``.
    """
    ok_flag = True if ok is None else bool(ok)
    with PROGRESS_LOCK:
        _touch_elapsed_locked()
        PROGRESS["status"] = "Solved" if ok_flag else "Error"
        PROGRESS["ok"] = ok_flag
        PROGRESS["percent"] = 100.0
        PROGRESS["done"] = True
        if reason is not None:
            PROGRESS["message"] = str(reason)
        elapsed = PROGRESS["elapsed"]
        attempt = PROGRESS["attempt"]
        message = PROGRESS["message"]
    _emit_log(
        "Run finished",
        status="Solved" if ok_flag else "Error",
        ok=ok_flag,
        attempts=attempt,
        duration=_fmt_seconds(elapsed),
        message=message,
    )

# ------------------------------
# Snapshots for the UI
# ------------------------------

def snapshot() -> Dict[str, Any]:
    with PROGRESS_LOCK:
        _touch_elapsed_locked()
        out = {k: v for k, v in PROGRESS.items() if k != "elapsed_start"}
        out["elapsed_str"] = _fmt_elapsed(PROGRESS["elapsed"])
        return out

def as_json() -> Dict[str, Any]:
    # Alias used by /progress3
    return snapshot()
