"""Utility commands for the fzf-mcp CLI."""

import asyncio
from pathlib import Path
from typing import Optional

import typer

from cli.common import console, logger
from fzf_mcp.config import get_settings
from fzf_mcp.exceptions import FzfMcpError, InstallError
from fzf_mcp.fzf import fzf_version
from fzf_mcp.installer import MANUAL_INSTALL_HINTS, install_fzf, resolve_fzf_path

app = typer.Typer(name="utils", help="Utility commands")


@app.command("install-fzf")
def install(
    bin_dir: Optional[Path] = typer.Option(
        None, "--bin-dir", help="Directory to cache the fzf binary in."
    ),
    version: Optional[str] = typer.Option(
        None, "--version", help="fzf release to download."
    ),
    force: bool = typer.Option(
        False, "--force", help="Download again even if a cached binary exists."
    ),
):
    """Download the fzf binary for this platform and cache it."""
    settings = get_settings()
    target_dir = bin_dir or settings.bin_dir
    release = version or settings.fzf_version

    console.print(f"Installing fzf {release} into {target_dir}...")
    try:
        binary_path = install_fzf(target_dir, release, force=force)
    except InstallError as e:
        logger.error(f"Failed to install fzf: {e}")
        console.print("\nYou can manually install fzf using:")
        for hint in MANUAL_INSTALL_HINTS:
            console.print(f"  {hint}")
        console.print("\nThe MCP server will still work if fzf is in your PATH.")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] fzf ready at {binary_path}")


@app.command("doctor")
def doctor():
    """Check that fzf can be found and run."""
    settings = get_settings()
    fzf_path = resolve_fzf_path(settings)
    console.print(f"fzf path:  {fzf_path}")

    try:
        version = asyncio.run(fzf_version(fzf_path))
    except FzfMcpError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] fzf {version}")
    console.print(f"bin dir:   {settings.bin_dir}")
    console.print(f"timeout:   {settings.timeout:g}s")
    console.print(f"max results: {settings.max_results}")
