"""Non-interactive fzf invocation (``--filter`` mode)."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from fzf_mcp.constants import FZF_EXIT_MATCH, FZF_EXIT_NO_MATCH
from fzf_mcp.exceptions import FzfExecutionError, FzfNotFoundError
from fzf_mcp.process import run_process

logger = logging.getLogger(__name__)


@dataclass
class FzfResult:
    """Output of a single fzf run."""

    stdout: str
    stderr: str
    exit_code: int

    @property
    def has_matches(self) -> bool:
        return self.exit_code == FZF_EXIT_MATCH


def build_filter_args(
    query: str, case_sensitive: bool = False, exact: bool = False
) -> List[str]:
    """Translate tool options into fzf arguments.

    fzf defaults to smart-case, which turns case-sensitive as soon as the
    query has an uppercase letter, so the case mode is always explicit:
    ``+i`` respects case, ``-i`` ignores it. ``-e`` switches from fuzzy to
    exact matching.
    """
    args = ["--filter", query, "+i" if case_sensitive else "-i"]
    if exact:
        args.append("-e")
    return args


def split_matches(
    stdout: str, max_results: int, separator: str = "\n"
) -> tuple[List[str], bool]:
    """Drop blank entries and cap the list at ``max_results``.

    Returns the kept matches and whether anything was cut off.
    """
    matches = [line for line in stdout.split(separator) if line.strip()]
    return matches[:max_results], len(matches) > max_results


async def run_fzf(
    args: Sequence[str],
    input_text: str = "",
    *,
    fzf_path: str = "fzf",
    timeout: Optional[float] = None,
    read0: bool = False,
) -> FzfResult:
    """Feed ``input_text`` to fzf and map its exit status.

    Exit 0 means matches, exit 1 means none; both return a ``FzfResult``.
    Exit 2 (error), 130 (interrupted) or anything else raises
    ``FzfExecutionError``. With ``read0`` the input and output are
    NUL-delimited and stdout is returned untrimmed.
    """
    argv = [fzf_path, *args]
    if read0:
        argv += ["--read0", "--print0"]

    try:
        proc = await run_process(
            argv, input_data=input_text.encode("utf-8"), timeout=timeout
        )
    except (FileNotFoundError, PermissionError) as e:
        raise FzfNotFoundError(fzf_path, str(e)) from e

    if proc.exit_code not in (FZF_EXIT_MATCH, FZF_EXIT_NO_MATCH):
        logger.error(f"fzf failed with code {proc.exit_code}: {proc.stderr_text.strip()}")
        raise FzfExecutionError(proc.exit_code, proc.stderr_text)

    stdout = proc.stdout_text
    return FzfResult(
        stdout=stdout if read0 else stdout.strip(),
        stderr=proc.stderr_text,
        exit_code=proc.exit_code,
    )


async def fzf_version(fzf_path: str = "fzf", timeout: Optional[float] = 10) -> str:
    """Return the output of ``fzf --version``."""
    try:
        proc = await run_process([fzf_path, "--version"], timeout=timeout)
    except (FileNotFoundError, PermissionError) as e:
        raise FzfNotFoundError(fzf_path, str(e)) from e
    if proc.exit_code != 0:
        raise FzfExecutionError(proc.exit_code, proc.stderr_text)
    return proc.stdout_text.strip()
