from __future__ import annotations

import datetime as dt
import os
from pathlib import Path
from threading import Lock

DEFAULT_BASE_DIR = Path("artifacts") / "runtime"

_TRACE_LOCK = Lock()
_TRACE_PATH: Path | None = None
_TRACE_OVERRIDE: bool | None = None


def set_trace_enabled(enabled: bool | None) -> None:
    global _TRACE_OVERRIDE
    _TRACE_OVERRIDE = None if enabled is None else bool(enabled)


def trace_enabled() -> bool:
    if _TRACE_OVERRIDE is not None:
        return bool(_TRACE_OVERRIDE)
    return os.environ.get("PCG32_TRACE") == "1"


def trace_base_dir() -> Path:
    env_dir = os.environ.get("PCG32_TRACE_DIR", "").strip()
    if env_dir:
        return Path(env_dir)
    return DEFAULT_BASE_DIR


def _escape(value: object) -> str:
    return str(value).replace("\n", "\\n")


def _format_line(event: str, fields: dict[str, object]) -> str:
    stamp = dt.datetime.now(dt.timezone.utc).isoformat(timespec="milliseconds")
    words = [stamp, f"event={str(event).strip()}"]
    words.extend(f"{key}={_escape(fields[key])}" for key in sorted(fields))
    return " ".join(words) + "\n"


def trace_log_path() -> Path | None:
    with _TRACE_LOCK:
        return _TRACE_PATH


def init_trace_log(*, base_dir: Path | None = None, command: str = "") -> Path:
    """Start a fresh per-process trace file and route `trace_event` to it."""
    root = trace_base_dir() if base_dir is None else Path(base_dir)
    timestamp = dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%S.%fZ")
    path = root / "logs" / "pcg32" / f"pcg32-pid{os.getpid()}-{timestamp}.log"
    path.parent.mkdir(parents=True, exist_ok=True)

    with _TRACE_LOCK:
        global _TRACE_PATH
        _TRACE_PATH = path

    trace_event("init", command=str(command).strip() or "api", pid=int(os.getpid()))
    return path


def close_trace_log() -> None:
    with _TRACE_LOCK:
        global _TRACE_PATH
        _TRACE_PATH = None


def trace_event(event: str, **fields: object) -> None:
    with _TRACE_LOCK:
        if _TRACE_PATH is None:
            return
        with _TRACE_PATH.open("a", encoding="utf-8") as handle:
            handle.write(_format_line(event, fields))
