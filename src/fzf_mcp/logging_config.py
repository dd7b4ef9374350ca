"""Logging setup for the fzf MCP server and CLI."""

import logging
import logging.config
import sys
from typing import Any, Dict, Optional

from rich.console import Console

from fzf_mcp.config import Settings, get_settings

LOG_FILE_NAME = "fzf-mcp.log"

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _rich_handler(level: str) -> Dict[str, Any]:
    # stdout is the MCP stdio transport; console logs go to stderr only
    return {
        "class": "rich.logging.RichHandler",
        "rich_tracebacks": True,
        "formatter": "default",
        "console": Console(file=sys.stderr),
        "level": level,
    }


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from ``settings`` (``LOG_DIR`` / ``LOG_LEVEL``).

    Logs go to a RichHandler on stderr and to a rotating file in
    ``settings.log_dir``. When the log directory cannot be created, only
    the stderr handler is installed.
    """
    settings = settings or get_settings()

    level = settings.log_level
    if level not in _LEVELS:
        print(
            f"Warning: Invalid LOG_LEVEL '{level}'. "
            f"Valid values: {', '.join(_LEVELS)}. Using INFO.",
            file=sys.stderr,
        )
        level = "INFO"

    handlers: Dict[str, Dict[str, Any]] = {"rich": _rich_handler(level)}
    log_dir_error = None
    try:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        log_dir_error = e
    else:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(settings.log_dir / LOG_FILE_NAME),
            "maxBytes": 1024 * 1024 * 5,  # 5 MB
            "backupCount": 5,
            "formatter": "detailed",
            "level": level,
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": "%(message)s"},
                "detailed": {
                    "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                },
            },
            "handlers": handlers,
            "root": {"level": level, "handlers": list(handlers)},
        }
    )

    logger = logging.getLogger(__name__)
    if log_dir_error is not None:
        logger.warning(
            f"Cannot write logs to {settings.log_dir} ({log_dir_error}); logging to stderr only"
        )
    logger.debug(f"Logging configured. Level: {level}")
