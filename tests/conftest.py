from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Import from local source instead of installed package.
def _project_root(start: Path) -> Path:
    current = start.resolve()
    for candidate in current.parents:
        if (candidate / "src" / "vivify").exists():
            return candidate
    raise RuntimeError("Unable to locate vivify project root from test path")

sys.path.insert(0, str(_project_root(Path(__file__)) / "src"))

from vivify import reset_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("VIVIFY_STRICT", raising=False)
    monkeypatch.delenv("VIVIFY_LOG_LEVEL", raising=False)
    reset_settings()
    yield
    reset_settings()
