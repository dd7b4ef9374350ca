"""fzf-mcp - fuzzy finding for agents over the Model Context Protocol."""

__version__ = "1.0.0"

__all__ = ["__version__"]
