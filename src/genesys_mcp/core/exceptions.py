"""Custom exceptions for Genesys Cloud MCP."""

from __future__ import annotations

from typing import Any


class GenesysMCPError(Exception):
    """Base exception for Genesys Cloud MCP."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def item_index(self) -> int | None:
        """Index of the input item that produced this error, if known."""
        return self.details.get("item_index")

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for JSON serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            **self.details,
        }


class AuthenticationError(GenesysMCPError):
    """Raised when Genesys Cloud authentication fails."""

    def __init__(self, message: str, region: str | None = None, suggestion: str | None = None):
        details = {}
        if region:
            details["region"] = region
        if suggestion:
            details["suggestion"] = suggestion
        super().__init__(message, details)


class APIError(GenesysMCPError):
    """Raised when a request to the Genesys Cloud API fails.

    Wraps the underlying transport error. The original exception is kept as
    ``cause`` (and ``__cause__`` when raised with ``from``).
    """

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        status: int | None = None,
        error_code: str | None = None,
        method: str | None = None,
        path: str | None = None,
        item_index: int | None = None,
    ):
        details: dict[str, Any] = {}
        if status:
            details["http_status"] = status
        if error_code:
            details["error_code"] = error_code
        if method:
            details["method"] = method
        if path:
            details["path"] = path
        if item_index is not None:
            details["item_index"] = item_index
        if cause is not None:
            details["cause"] = str(cause)
        super().__init__(message, details)
        self.cause = cause
        self.status = status


class ValidationError(GenesysMCPError):
    """Raised when operation parameters fail validation."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        expected: str | None = None,
        received: str | None = None,
        item_index: int | None = None,
    ):
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
        if expected:
            details["expected"] = expected
        if received:
            details["received"] = received
        if item_index is not None:
            details["item_index"] = item_index
        super().__init__(message, details)


class RemoteJobError(GenesysMCPError):
    """Raised when a server-side asynchronous job fails or cannot be submitted."""

    def __init__(
        self,
        message: str,
        job_id: str | None = None,
        status: str | None = None,
        item_index: int | None = None,
    ):
        details: dict[str, Any] = {}
        if job_id:
            details["job_id"] = job_id
        if status:
            details["job_status"] = status
        if item_index is not None:
            details["item_index"] = item_index
        super().__init__(message, details)


class JobTimeoutError(GenesysMCPError):
    """Raised when polling a server-side job exhausts its attempt budget."""

    def __init__(
        self,
        message: str,
        job_id: str | None = None,
        attempts: int | None = None,
        item_index: int | None = None,
    ):
        details: dict[str, Any] = {}
        if job_id:
            details["job_id"] = job_id
        if attempts:
            details["attempts"] = attempts
        if item_index is not None:
            details["item_index"] = item_index
        super().__init__(message, details)


class OperationError(GenesysMCPError):
    """Raised by the execution engine when an item's operation fails."""

    def __init__(
        self,
        message: str,
        resource: str | None = None,
        operation: str | None = None,
        item_index: int | None = None,
    ):
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if operation:
            details["operation"] = operation
        if item_index is not None:
            details["item_index"] = item_index
        super().__init__(message, details)
