"""Error Hierarchy — typed, categorized exceptions for every Folio failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Each failure kind maps to exactly one HTTP status so the boundary can tell them apart
    - to_response() produces the REST envelope used by all error handlers
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with FolioError base: one FastAPI handler renders all of them
    - ErrorContext as dataclass: observability data without coupling to the logging setup
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
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    STORAGE = "storage"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entity: str | None = None
    record_id: int | None = None
    slug: str | None = None
    debug_info: dict[str, Any] | None = None


class FolioError(Exception):
    """Base exception for all Folio errors."""

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
                    "entity": self.context.entity,
                    "record_id": self.context.record_id,
                    "slug": self.context.slug,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class NotFoundError(FolioError):
    """No record of the given kind holds the requested slug or id."""
    def __init__(self, entity: str, key: str | int, context: ErrorContext | None = None):
        ctx = context or ErrorContext(entity=entity)
        super().__init__(
            f"{entity} '{key}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.entity = entity
        self.key = key


class ConflictError(FolioError):
    """Slug already held by another record of the same kind."""
    def __init__(self, entity: str, slug: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext(entity=entity, slug=slug)
        super().__init__(
            f"{entity} slug '{slug}' is already taken",
            "SLUG_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.entity = entity
        self.slug = slug


class UnauthorizedError(FolioError):
    """Supplied admin token does not match the configured secret."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "unauthorized", "UNAUTHORIZED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ContactValidationError(FolioError):
    """Contact submission is missing one or more required fields."""
    def __init__(self, missing: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"missing fields: {', '.join(missing)}",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.missing = missing


class PayloadTooLargeError(FolioError):
    """Uploaded payload exceeds the configured size limit."""
    def __init__(self, size: int, limit: int, context: ErrorContext | None = None):
        super().__init__(
            f"Upload of {size} bytes exceeds limit of {limit} bytes",
            "PAYLOAD_TOO_LARGE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 413,
        )
        self.size = size
        self.limit = limit


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(FolioError):
    """Blob write failed (disk full, permission denied, ...)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Blob storage failed: {message}",
            "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 500,
        )


class DeliveryError(FolioError):
    """Outbound contact message could not be delivered."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Message delivery failed: {message}",
            "DELIVERY_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 502,
        )


class DatabaseError(FolioError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
