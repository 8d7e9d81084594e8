"""Error Hierarchy — typed, categorized exceptions for Saikoron failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Draw boundary conditions (empty candidates, exhausted pool, incompatible drawing,
      range tool without legacy shape) are typed outcomes, never exceptions
    - Exceptions cover broken preconditions (invalid source) and shell failures only
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with SaikoronError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    tool_id: str | None = None
    item_id: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class SaikoronError(Exception):
    """Base exception for all Saikoron errors."""

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
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "tool_id": self.context.tool_id,
                    "item_id": self.context.item_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidSourceError(SaikoronError):
    """Source construction violated a field constraint (weight, bounds, step)."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_SOURCE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class SnapshotError(SaikoronError):
    """Stored snapshot could not be decoded into a tool or roulette."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "SNAPSHOT_INVALID", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 422,
        )


class ResourceNotFoundError(SaikoronError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class LegacyNotRepresentableError(SaikoronError):
    """Range-sourced tool requested in the list-only legacy roulette shape."""
    def __init__(self, tool_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.tool_id = tool_id
        super().__init__(
            f"Tool '{tool_id}' uses a range source and has no roulette equivalent",
            "LEGACY_NOT_REPRESENTABLE", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(SaikoronError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
