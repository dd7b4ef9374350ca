import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from fzf_mcp.config import get_settings

_ENV_VARS = [
    "FZF_PATH",
    "FZF_MCP_BIN_DIR",
    "FZF_MCP_FZF_VERSION",
    "FZF_MCP_MAX_RESULTS",
    "FZF_MCP_TIMEOUT",
    "FZF_MCP_AUTO_INSTALL",
    "LOG_DIR",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Isolate every test from the caller's environment and the settings cache."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("FZF_MCP_BIN_DIR", str(tmp_path / "bin"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_proc():
    """Build a fake asyncio process with canned output and exit code."""

    def _make(stdout=b"", stderr=b"", returncode=0):
        proc = MagicMock()
        proc.returncode = returncode
        proc.communicate = AsyncMock(return_value=(stdout, stderr))
        proc.wait = AsyncMock(return_value=returncode)
        return proc

    return _make


@pytest.fixture
def hanging_proc():
    proc = MagicMock()
    proc.returncode = None
    proc.communicate = AsyncMock(side_effect=asyncio.TimeoutError)
    proc.wait = AsyncMock(return_value=-9)
    return proc
