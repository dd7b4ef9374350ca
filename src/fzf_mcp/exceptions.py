"""Exceptions raised by the fzf bridge."""

from typing import Optional


class FzfMcpError(Exception):
    """Base exception for all fzf-mcp errors."""


class FzfNotFoundError(FzfMcpError):
    """The fzf binary could not be spawned."""

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        message = f"fzf binary not found or not executable: {path}"
        if reason:
            message += f" ({reason})"
        message += ". Run 'fzf-mcp install-fzf' or set FZF_PATH."
        super().__init__(message)


class FzfExecutionError(FzfMcpError):
    """fzf exited with an error status."""

    def __init__(self, exit_code: Optional[int], stderr: str = ""):
        self.exit_code = exit_code
        self.stderr = stderr
        detail = stderr.strip()
        message = f"fzf exited with code {exit_code}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class FzfTimeoutError(FzfMcpError):
    """An external process did not finish in time."""

    def __init__(self, command: str, timeout: float):
        self.command = command
        self.timeout = timeout
        super().__init__(f"{command} timed out after {timeout:g}s")


class ListingError(FzfMcpError):
    """The directory to list is missing or unreadable."""


class ContentSearchError(FzfMcpError):
    """The content search utility failed without producing output."""


class InstallError(FzfMcpError):
    """Downloading or unpacking the fzf release failed."""


class UnsupportedPlatformError(InstallError):
    """No fzf release asset exists for this OS/architecture."""
