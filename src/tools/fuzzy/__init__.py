"""fzf-backed fuzzy search MCP server."""
