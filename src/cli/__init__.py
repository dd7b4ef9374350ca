"""fzf-mcp CLI."""

import typer

from cli.server import server
from cli.utils import app as utils_app
from fzf_mcp.logging_config import setup_logging

app = typer.Typer(
    name="fzf-mcp",
    help="Fuzzy search tools for agents, backed by fzf, over MCP",
    add_completion=False,
)

app.command("serve", help="Run the MCP server on stdio")(
    server.registered_commands[0].callback
)
app.command("install-fzf", help="Download and cache the fzf binary")(
    utils_app.registered_commands[0].callback
)
app.command("doctor", help="Check the fzf installation")(
    utils_app.registered_commands[1].callback
)


def main():
    """Entry point for the CLI."""
    setup_logging()
    app()


if __name__ == "__main__":
    main()
