"""Error Hierarchy — typed, categorized exceptions for every blog failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Store failures collapse to exactly two kinds: NotFoundError or StoreUnavailableError
    - to_response() produces the REST envelope; no internal details in messages
    - TransportError is raised by the client only, never by the server

Design Decisions:
    - Single hierarchy with BlogError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    TRANSPORT = "transport"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    post_id: int | None = None
    operation: str | None = None


class BlogError(Exception):
    """Base exception for all blog errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "post_id": self.context.post_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class DecodeError(BlogError):
    """Malformed pagination or body input."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "DECODE_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class NotFoundError(BlogError):
    """Requested post does not exist (or was deleted)."""
    def __init__(self, post_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.post_id = post_id
        super().__init__(
            f"Post '{post_id}' not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.post_id = post_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreUnavailableError(BlogError):
    """Any persistence failure: connectivity, constraint, timeout."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_UNAVAILABLE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation


class TransportError(BlogError):
    """Client could not reach the server or read its reply."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Transport failure: {message}",
            "TRANSPORT_ERROR", ErrorCategory.TRANSPORT,
            ErrorSeverity.ERROR, context, 502,
        )
