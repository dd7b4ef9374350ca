"""Standard response format for MCP tools to ensure consistent serialization."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from models.enums import ResponseStatus


class MCPResponse(BaseModel):
    """Standardized response format for the fuzzy-finder tools.

    Every tool maps the outcome of its external process onto one of three
    statuses: matches were produced (success), the process ran but matched
    nothing (empty), or the request could not be served (error).

    Attributes:
        status: Response status (success, error, or empty)
        message: Optional human-readable message
        result: The actual result data (can be any JSON-serializable type)
        content_type: Optional content type hint for the caller. Defaults to 'text'.
    """

    status: ResponseStatus = Field(..., description="Response status")
    message: Optional[str] = Field(None, description="Optional human-readable message")
    result: Any = Field(default=None, description="The actual result data")
    content_type: Optional[str] = Field(
        None, description="Content type hint (e.g. 'json', 'text'). Defaults to 'text' if not specified."
    )

    @classmethod
    def success(
        cls,
        result: Any = None,
        message: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> "MCPResponse":
        """Create a success response."""
        return cls(
            status=ResponseStatus.SUCCESS,
            result=result,
            message=message,
            content_type=content_type,
        )

    @classmethod
    def error(cls, message: str, result: Any = None) -> "MCPResponse":
        """Create an error response."""
        return cls(status=ResponseStatus.ERROR, message=message, result=result)

    @classmethod
    def empty(cls, message: Optional[str] = None) -> "MCPResponse":
        """Create an empty response."""
        return cls(status=ResponseStatus.EMPTY, message=message, result=None)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary.

        Returns a plain dict with enum values converted to strings.
        """
        status_str = (
            self.status.value if hasattr(self.status, "value") else str(self.status)
        )
        return {
            "status": status_str,
            "message": self.message,
            "result": self.result,
            "content_type": self.content_type or "text",
        }
