from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure(config: pytest.Config) -> None:
    # Ensure the local `src/` tree wins over any other editable install that may exist.
    src_dir = Path(__file__).resolve().parents[1] / "src"
    src_str = str(src_dir)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


@pytest.fixture(autouse=True)
def _isolated_trace(monkeypatch: pytest.MonkeyPatch):
    from pcg32.trace import close_trace_log, set_trace_enabled

    monkeypatch.delenv("PCG32_TRACE", raising=False)
    monkeypatch.delenv("PCG32_TRACE_DIR", raising=False)
    set_trace_enabled(None)
    close_trace_log()
    yield
    set_trace_enabled(None)
    close_trace_log()
