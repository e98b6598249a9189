"""
Error taxonomy for the chat gateway.

Routing mismatches never reach this module: they are answered directly
with 404/405 by the router. Everything else collapses into the generic
500 response at the mediator boundary.
"""

from typing import Any

GENERIC_ERROR_MESSAGE = "Failed to process request"


class GatewayError(Exception):
    """Base exception for the chat gateway."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class MalformedRequestError(GatewayError):
    """Raised when the body is not valid JSON or the transcript is unusable."""


class UpstreamFailureError(GatewayError):
    """Raised when the retrieval backend rejects or fails a search."""

    def __init__(self, backend: str, message: str, status_code: int | None = None):
        self.backend = backend
        self.status_code = status_code
        details: dict[str, Any] = {"backend": backend}
        if status_code:
            details["status_code"] = status_code
        super().__init__(message, details)
