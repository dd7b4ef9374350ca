"""Centralized Pydantic models for fzf-mcp."""

from models.enums import ResponseStatus
from models.mcp import MCPResponse

__all__ = [
    "ResponseStatus",
    "MCPResponse",
]
