"""Async subprocess helper shared by the fzf, listing and content-search bridges."""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional, Sequence

from fzf_mcp.exceptions import FzfTimeoutError

logger = logging.getLogger(__name__)


@dataclass
class ProcessResult:
    """Raw outcome of a finished external process."""

    argv: list[str]
    exit_code: Optional[int]
    stdout: bytes
    stderr: bytes
    duration_ms: int

    @property
    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")


async def run_process(
    argv: Sequence[str],
    input_data: Optional[bytes] = None,
    timeout: Optional[float] = None,
) -> ProcessResult:
    """Run ``argv`` without a shell and capture its output.

    ``input_data`` is written to stdin, which is then closed. Spawn failures
    (``FileNotFoundError``, ``PermissionError``) propagate to the caller, which
    knows what the missing executable means. A process that outlives
    ``timeout`` is killed and ``FzfTimeoutError`` is raised.
    """
    argv = list(argv)
    logger.debug("Running %s", argv)
    start = time.time()

    proc = await asyncio.create_subprocess_exec(
        *argv,
        stdin=asyncio.subprocess.PIPE if input_data is not None else asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await asyncio.wait_for(
            proc.communicate(input=input_data), timeout=timeout
        )
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()
        logger.warning("%s killed after %ss", argv[0], timeout)
        raise FzfTimeoutError(argv[0], timeout)

    duration_ms = int((time.time() - start) * 1000)
    logger.debug("%s exited with %s in %dms", argv[0], proc.returncode, duration_ms)
    return ProcessResult(
        argv=argv,
        exit_code=proc.returncode,
        stdout=stdout or b"",
        stderr=stderr or b"",
        duration_ms=duration_ms,
    )
