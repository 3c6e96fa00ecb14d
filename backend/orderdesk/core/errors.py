"""Error Hierarchy — typed, categorized exceptions for all OrderDesk failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by the global handlers
    - Domain data a caller can act on (rejected field, allowed roles, setting name)
      travels in `details`; infrastructure details stay in logs
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with OrderDeskError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Unsupported comparisons are NOT errors (compare_values returns 0)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from orderdesk.core.domain_types import UserId


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    CONFIGURATION = "configuration"
    DATABASE = "database"
    CACHE = "cache"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: UserId | None = None
    cache_key: str | None = None
    debug_info: dict[str, Any] | None = None


class OrderDeskError(Exception):
    """Base exception for all OrderDesk errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.details = details or {}

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
        }
        if self.details:
            body["details"] = self.details
        return {"error": body}


# ─── Client Errors (400-level) ──────────────────────────────────

class InvalidQueryError(OrderDeskError):
    """Filter, ordering or pagination arguments rejected."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_QUERY", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
            details={"field": field},
        )
        self.field = field


class AuthenticationRequiredError(OrderDeskError):
    """No authenticated request context available."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Authentication required",
            "AUTHENTICATION_REQUIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(OrderDeskError):
    """Authenticated caller lacks every allowed role."""
    def __init__(self, allowed_roles: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Requires one of roles: {', '.join(allowed_roles)}",
            "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
            details={"allowed_roles": list(allowed_roles)},
        )
        self.allowed_roles = allowed_roles


# ─── Infrastructure Errors (500-level) ──────────────────────────

class InvalidConfigurationError(OrderDeskError):
    """A process-wide setting is missing or malformed."""
    def __init__(self, setting: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid configuration for {setting}: {reason}",
            "INVALID_CONFIGURATION", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
            details={"setting": setting},
        )
        self.setting = setting


class DatabaseError(OrderDeskError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class CacheError(OrderDeskError):
    """Result cache operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cache {operation} failed: {message}",
            "CACHE_ERROR", ErrorCategory.CACHE,
            ErrorSeverity.WARNING, context, 503,
        )
        self.operation = operation


class ServiceNotInitializedError(OrderDeskError):
    """A backing service was used before startup initialized it."""
    def __init__(self, service_name: str, context: ErrorContext | None = None):
        super().__init__(
            f"{service_name} is not initialized",
            "SERVICE_NOT_INITIALIZED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 503,
            details={"service": service_name},
        )
        self.service_name = service_name
