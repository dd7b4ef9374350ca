"""Line-level content search with grep (POSIX) or findstr (Windows)."""

import logging
from typing import List, Optional

from fzf_mcp.constants import DEFAULT_FILE_PATTERN
from fzf_mcp.exceptions import ContentSearchError
from fzf_mcp.listing import is_windows, posix_path_arg, validate_directory
from fzf_mcp.process import run_process

logger = logging.getLogger(__name__)


def build_grep_command(
    query: str,
    directory: str = ".",
    file_pattern: str = DEFAULT_FILE_PATTERN,
    case_sensitive: bool = False,
    platform: Optional[str] = None,
) -> List[str]:
    """Build the argv printing ``path:line:text`` for every line containing ``query``."""
    if is_windows(platform):
        command = ["findstr", "/s", "/n", "/p"]
        if not case_sensitive:
            command.append("/i")
        command.append(f"/c:{query}")
        command.append(directory.rstrip("\\/") + "\\" + (file_pattern or "*"))
        return command

    # -F literal like findstr /c:, -I skips binary files
    command = ["grep", "-r", "-n", "-F", "-I"]
    if not case_sensitive:
        command.append("-i")
    if file_pattern and file_pattern != DEFAULT_FILE_PATTERN:
        command.append(f"--include={file_pattern}")
    command += ["-e", query, posix_path_arg(directory)]
    return command


async def search_content(
    query: str,
    directory: str = ".",
    file_pattern: str = DEFAULT_FILE_PATTERN,
    case_sensitive: bool = False,
    timeout: Optional[float] = None,
    platform: Optional[str] = None,
) -> str:
    """Return matching lines as text, or an empty string when nothing matched.

    grep and findstr both exit 1 for "no lines selected". Exit codes of 2 and
    above signal read errors; output produced alongside them is kept, and
    only an error with no output at all raises ``ContentSearchError``.
    """
    validate_directory(directory)
    command = build_grep_command(query, directory, file_pattern, case_sensitive, platform)

    try:
        proc = await run_process(command, timeout=timeout)
    except (FileNotFoundError, PermissionError) as e:
        raise ContentSearchError(
            f"Content search utility {command[0]} is unavailable: {e}"
        ) from e

    stdout = proc.stdout_text
    if proc.exit_code == 1:
        return ""
    if proc.exit_code != 0:
        if not stdout.strip():
            stderr = proc.stderr_text.strip() or f"exit code {proc.exit_code}"
            raise ContentSearchError(f"{command[0]} failed: {stderr}")
        logger.warning(
            f"{command[0]} reported errors searching {directory}: "
            f"{proc.stderr_text.strip()}"
        )
    return stdout
