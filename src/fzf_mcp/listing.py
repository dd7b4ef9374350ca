"""Recursive file listing through the platform's own utilities."""

import logging
import os
import sys
from typing import List, Optional

from fzf_mcp.exceptions import ListingError
from fzf_mcp.process import run_process

logger = logging.getLogger(__name__)


def is_windows(platform: Optional[str] = None) -> bool:
    return (platform or sys.platform).startswith("win")


def _ps_quote(value: str) -> str:
    """Quote a value as a PowerShell single-quoted string."""
    return "'" + value.replace("'", "''") + "'"


def build_listing_command(
    directory: str, max_depth: Optional[int] = None, platform: Optional[str] = None
) -> List[str]:
    """Build the argv that prints every file under ``directory``, one per line.

    ``max_depth`` counts directory levels below ``directory``; ``None`` means
    unlimited.
    """
    if is_windows(platform):
        script = f"Get-ChildItem -Path {_ps_quote(directory)} -Recurse -File"
        if max_depth is not None:
            # Get-ChildItem -Depth 0 lists the directory itself only
            script += f" -Depth {max(max_depth - 1, 0)}"
        script += (
            " -ErrorAction SilentlyContinue"
            " | Select-Object -ExpandProperty FullName"
        )
        return ["powershell", "-NoProfile", "-NonInteractive", "-Command", script]

    command = ["find", posix_path_arg(directory)]
    if max_depth is not None:
        command += ["-maxdepth", str(max_depth)]
    command += ["-type", "f"]
    return command


def posix_path_arg(path: str) -> str:
    """Keep a relative path starting with "-" from being read as an option."""
    return "./" + path if path.startswith("-") else path


def validate_directory(directory: str) -> None:
    if not os.path.exists(directory):
        raise ListingError(f"Directory not found: {directory}")
    if not os.path.isdir(directory):
        raise ListingError(f"Not a directory: {directory}")


async def list_files(
    directory: str = ".",
    max_depth: Optional[int] = None,
    timeout: Optional[float] = None,
    platform: Optional[str] = None,
) -> str:
    """Return the newline-separated file listing of ``directory``.

    Unreadable subdirectories make ``find`` exit non-zero while still printing
    everything it could reach, so any output is kept. A listing utility that
    cannot be spawned yields an empty listing.
    """
    validate_directory(directory)
    command = build_listing_command(directory, max_depth, platform)

    try:
        proc = await run_process(command, timeout=timeout)
    except (FileNotFoundError, PermissionError) as e:
        logger.warning(f"File listing command {command[0]} unavailable: {e}")
        return ""

    stdout = proc.stdout_text
    if proc.exit_code != 0:
        logger.warning(
            f"{command[0]} exited with {proc.exit_code} listing {directory}: "
            f"{proc.stderr_text.strip()}"
        )
    if not stdout.strip():
        logger.info(f"No files listed under {directory}")
        return ""
    return stdout
