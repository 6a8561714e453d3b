"""
Centralized error types for the TalentHub listing stack.

Server side: AppError and subclasses carry an HTTP status and an optional
machine-readable code, rendered by the API's exception handlers as
{"status": "error", "message": ..., "code": ...}.

Client side: ListFetchFailed is the single error kind raised when a
paginated request fails. Callers catch it, log it, and surface a
notification; FetchErrorCollector keeps a short history for diagnostics.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Deque, Dict, Optional


class AppError(Exception):
    """Base class for errors that map to an HTTP error response."""

    status_code: int = 500
    code: Optional[str] = None

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code

    def to_dict(self) -> Dict[str, Any]:
        """Error envelope for JSON responses."""
        body: Dict[str, Any] = {"status": "error", "message": self.message}
        if self.code:
            body["code"] = self.code
        return body


class InvalidIdentifierError(AppError):
    """A path or query identifier is not a valid ObjectId."""

    status_code = 400
    code = "INVALID_ID"

    def __init__(self, field_name: str, value: Any):
        super().__init__(f"Invalid {field_name}: {value!r}")
        self.field_name = field_name
        self.value = value


class DatabaseUnavailableError(AppError):
    """MongoDB is not configured or not reachable."""

    status_code = 503
    code = "DATABASE_UNAVAILABLE"

    def __init__(self, message: str = "Database is not available. Please try again later."):
        super().__init__(message)


class ListFetchFailed(Exception):
    """
    A paginated list request failed (transport, server or payload error).

    Attributes:
        resource: Resource path that was requested (e.g., "/jobs")
        status_code: HTTP status if the server answered, None otherwise
        server_message: Message from the error envelope, if any
    """

    def __init__(
        self,
        message: str,
        resource: Optional[str] = None,
        status_code: Optional[int] = None,
        server_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.resource = resource
        self.status_code = status_code
        self.server_message = server_message

    @property
    def user_message(self) -> str:
        """Message suitable for a notification."""
        return self.server_message or self.message

    def __str__(self) -> str:
        parts = [self.message]
        if self.resource:
            parts.append(f"resource={self.resource}")
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        return " ".join(parts)


@dataclass
class FetchError:
    """Record of one failed list fetch."""

    resource: str
    page: int
    message: str
    status_code: Optional[int] = None
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def to_dict(self) -> dict:
        return {
            "resource": self.resource,
            "page": self.page,
            "message": self.message,
            "status_code": self.status_code,
            "timestamp": self.timestamp,
        }


class FetchErrorCollector:
    """
    Bounded history of list fetch failures.

    Oldest entries are dropped once max_entries is reached.
    """

    def __init__(self, max_entries: int = 50):
        self.max_entries = max_entries
        self.errors: Deque[FetchError] = deque(maxlen=max_entries)

    def add(self, error: FetchError) -> None:
        self.errors.append(error)

    def add_failure(self, exc: ListFetchFailed, page: int) -> FetchError:
        """Record a ListFetchFailed and return the stored entry."""
        error = FetchError(
            resource=exc.resource or "unknown",
            page=page,
            message=exc.user_message,
            status_code=exc.status_code,
        )
        self.add(error)
        return error

    @property
    def latest(self) -> Optional[FetchError]:
        return self.errors[-1] if self.errors else None

    def summary(self) -> dict:
        """Failure counts per resource."""
        by_resource: Dict[str, int] = {}
        for error in self.errors:
            by_resource[error.resource] = by_resource.get(error.resource, 0) + 1
        return {"total": len(self.errors), "by_resource": by_resource}


def log_on_exception(
    logger: logging.Logger,
    operation: str,
    level: int = logging.WARNING,
    include_traceback: bool = False,
):
    """
    Context manager for logging exceptions without swallowing them.

    Usage:
        with log_on_exception(logger, "count jobs", level=logging.ERROR):
            collection.count_documents(...)
    """

    class ExceptionLogger:
        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            if exc_val is not None:
                logger.log(level, f"[{operation}] Failed: {exc_val}", exc_info=include_traceback)
            return False

    return ExceptionLogger()
