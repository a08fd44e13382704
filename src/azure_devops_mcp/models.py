"""Response model shared by all MCP tools."""

from typing import Any, Literal

import httpx
from pydantic import BaseModel, Field

from .exceptions import AdoMCPError


class Response(BaseModel):
    """Unified response type for all MCP tools."""

    status: Literal["success", "error"] = Field(
        ..., description="Response status indicating outcome"
    )
    message: str = Field(..., description="Human-readable summary of the response")
    data: Any | None = Field(
        None,
        description="Response payload - can be dict, list, or any serializable type",
    )
    errors: list[str] = Field(
        default_factory=list, description="List of error messages"
    )
    suggestions: list[str] = Field(
        default_factory=list, description="Actionable suggestions for the user"
    )
    metadata: dict[str, Any] | None = Field(
        None, description="Additional context and domain-specific information"
    )

    @classmethod
    def from_error(cls, error: Exception) -> "Response":
        """Create Response from any Exception, with potentially helpful info for recovery.

        Args:
            error: Any Exception instance

        Returns:
            Response object with error details
        """
        if isinstance(error, AdoMCPError):
            return cls(
                status="error",
                message=error.message,
                errors=error.errors,
                suggestions=error.suggestions,
                metadata={**error.context, "exception_type": type(error).__name__},
            )

        if isinstance(error, httpx.HTTPStatusError):
            status_code = error.response.status_code
            if status_code >= 500:
                message = f"Azure DevOps server error ({status_code}): {str(error)}"
                suggestions = []
            elif status_code in (401, 403):
                message = f"Authentication failed ({status_code}): {str(error)}"
                suggestions = [
                    "Check that the token is valid and not expired",
                    "Check that the token has the scopes this operation needs",
                ]
            elif status_code == 404:
                message = f"Resource not found ({status_code}): {str(error)}"
                suggestions = [
                    "Check the organization, project and resource names",
                ]
            else:
                message = f"HTTP error ({status_code}): {str(error)}"
                suggestions = ["Check the request and try again"]

            return cls(
                status="error",
                message=message,
                errors=[str(error)],
                suggestions=suggestions,
                metadata={
                    "exception_type": type(error).__name__,
                    "status_code": status_code,
                    "url": str(error.response.url),
                },
            )

        if isinstance(error, httpx.RequestError):
            metadata = {"exception_type": type(error).__name__}
            try:
                metadata["url"] = str(error.request.url)
            except RuntimeError:
                # .request raises when the error was built without one
                pass

            return cls(
                status="error",
                message=f"Network error: {str(error)}",
                errors=[str(error)],
                suggestions=[
                    "Check your internet connection",
                    "Verify the organization name is correct",
                    "Try again - this may be a temporary network issue",
                ],
                metadata=metadata,
            )

        return cls(
            status="error",
            message=f"Unexpected error: {str(error)}",
            errors=[str(error)],
            suggestions=[
                "Check server logs for detailed information",
                "Try again - this may be a temporary issue",
            ],
            metadata={"exception_type": type(error).__name__},
        )
