"""Error Hierarchy — typed, categorized exceptions for all Golden Noodles failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Business-rule errors (400-level) are recoverable; persistence errors are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with NoodleError base: FastAPI global handler catches all
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
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    sender_id: str | None = None
    recipient_id: str | None = None
    group_id: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class NoodleError(Exception):
    """Base exception for all Golden Noodles errors."""

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

    @property
    def recoverable(self) -> bool:
        return self.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING) or (
            self.category in (ErrorCategory.BUSINESS_RULE, ErrorCategory.VALIDATION)
        )

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "recoverable": self.recoverable,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "sender_id": self.context.sender_id,
                    "recipient_id": self.context.recipient_id,
                    "group_id": self.context.group_id,
                },
            }
        }


# ─── Business-Rule Errors (400-level) ───────────────────────────

class SelfGrantError(NoodleError):
    """Sender tried to recognize themselves."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "You can't send a Golden Noodle to yourself. Recognize someone else's hard work.",
            "SELF_GRANT", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class IneligibleRecipientError(NoodleError):
    """Recipient is not eligible (e.g. an automated account)."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Bots don't eat noodles! Please recognize a human team member.",
            "INELIGIBLE_RECIPIENT", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class QuotaExhaustedError(NoodleError):
    """Sender has no allotment left for the current period."""
    def __init__(self, monthly_limit: int, context: ErrorContext | None = None):
        super().__init__(
            f"You've used all {monthly_limit} Golden Noodles for this month. "
            "Your allocation resets at the beginning of next month.",
            "QUOTA_EXHAUSTED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )
        self.monthly_limit = monthly_limit


class MessageTooLongError(NoodleError):
    """Recognition message exceeds the maximum length."""
    def __init__(
        self, length: int, max_length: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Message is {length} characters; the maximum is {max_length}.",
            "MESSAGE_TOO_LONG", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.length = length
        self.max_length = max_length


class InvalidPeriodError(NoodleError):
    """Requested reporting period does not exist."""
    def __init__(self, year: int, month: int, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid reporting period {year}-{month:02d}",
            "INVALID_PERIOD", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.year = year
        self.month = month


# ─── Infrastructure Errors (500-level) ──────────────────────────

class PersistenceError(NoodleError):
    """Ledger store operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Ledger {operation} failed: {message}",
            "PERSISTENCE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
