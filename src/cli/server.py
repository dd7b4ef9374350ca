"""Server command for the fzf-mcp CLI."""

import os
from typing import Optional

import typer

from cli.common import logger
from fzf_mcp.config import get_settings

server = typer.Typer(name="server", help="Server commands")


@server.command("serve")
def serve(
    fzf_path: Optional[str] = typer.Option(
        None, "--fzf-path", help="Path to the fzf binary (overrides FZF_PATH)."
    ),
    auto_install: bool = typer.Option(
        False, "--auto-install", help="Download fzf first if it cannot be found."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Seconds before an external process is killed."
    ),
):
    """Run the fzf MCP server on stdio."""
    if fzf_path:
        os.environ["FZF_PATH"] = fzf_path
    if auto_install:
        os.environ["FZF_MCP_AUTO_INSTALL"] = "true"
    if timeout is not None:
        os.environ["FZF_MCP_TIMEOUT"] = str(timeout)
    get_settings.cache_clear()

    from tools.fuzzy.server import main as run_server

    try:
        run_server()
    except KeyboardInterrupt:
        logger.info("Server stopped by user.")
