"""Environment-driven configuration for fzf-mcp."""

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from fzf_mcp.constants import DEFAULT_MAX_RESULTS, DEFAULT_TIMEOUT, FZF_VERSION

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def _default_bin_dir() -> Path:
    return Path.home() / ".fzf-mcp" / "bin"


def _default_log_dir() -> Path:
    return Path.home() / ".fzf-mcp" / "logs"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Invalid {name}={raw!r}, using {default}")
        return default
    if value < 1:
        logger.warning(f"{name} must be positive, using {default}")
        return default
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Invalid {name}={raw!r}, using {default}")
        return default
    if value <= 0:
        logger.warning(f"{name} must be positive, using {default}")
        return default
    return value


@dataclass
class Settings:
    """Runtime settings for the server, the CLI and the installer."""

    fzf_path: Optional[str] = None
    bin_dir: Path = field(default_factory=_default_bin_dir)
    fzf_version: str = FZF_VERSION
    max_results: int = DEFAULT_MAX_RESULTS
    timeout: float = DEFAULT_TIMEOUT
    auto_install: bool = False
    log_dir: Path = field(default_factory=_default_log_dir)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment (after loading .env)."""
        load_dotenv()
        bin_dir = os.getenv("FZF_MCP_BIN_DIR")
        log_dir = os.getenv("LOG_DIR")
        return cls(
            fzf_path=os.getenv("FZF_PATH") or None,
            bin_dir=Path(bin_dir).expanduser() if bin_dir else _default_bin_dir(),
            fzf_version=os.getenv("FZF_MCP_FZF_VERSION") or FZF_VERSION,
            max_results=_env_int("FZF_MCP_MAX_RESULTS", DEFAULT_MAX_RESULTS),
            timeout=_env_float("FZF_MCP_TIMEOUT", DEFAULT_TIMEOUT),
            auto_install=os.getenv("FZF_MCP_AUTO_INSTALL", "").strip().lower()
            in _TRUTHY,
            log_dir=Path(log_dir).expanduser() if log_dir else _default_log_dir(),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""
    return Settings.from_env()
