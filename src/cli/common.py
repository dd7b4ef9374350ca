"""Shared utilities and helpers for the fzf-mcp CLI."""

import logging

from rich.console import Console

# Console on stderr: stdout belongs to the MCP transport when serving
console = Console(stderr=True)
logger = logging.getLogger(__name__)
