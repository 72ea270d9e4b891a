"""Error Hierarchy: typed, categorized exceptions for every failure a request can hit.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - ValidationError is always 400, NotFoundError always 404, StoreError always 500
    - to_response() produces the wire envelope {"error": str, "details"?: str}
    - details appear on the wire only when the raiser supplied them
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Context attached to an error for log lines, never rendered to clients."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    post_id: str | None = None
    operation: str | None = None


class InfoShareError(Exception):
    """Base exception for all InfoShare errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
        details: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status
        self.details = details
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        """Convert to the REST error body."""
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationError(InfoShareError):
    """Client input is malformed, missing, or of the wrong type."""
    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400, details, context,
        )
        self.field = field


class NotFoundError(InfoShareError):
    """Identifier is well-formed but matches no record."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.post_id = ctx.post_id or resource_id
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, 404, None, ctx,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(InfoShareError):
    """Data access failed for any reason other than "no record found"."""
    def __init__(
        self,
        message: str,
        operation: str,
        details: str | None = None,
        timed_out: bool = False,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            message, "STORE_ERROR",
            ErrorCategory.TIMEOUT if timed_out else ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 500, details, ctx,
        )
        self.operation = operation
        self.timed_out = timed_out
