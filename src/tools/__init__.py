"""MCP tool servers."""
