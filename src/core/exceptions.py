"""Custom exceptions, error kinds and error codes."""

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Mapping


class ErrorKind(StrEnum):
    """Error categories, each mapped to a single HTTP status."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    RATE_LIMITED = "rate_limited"
    DATABASE = "database"
    CONNECTION = "connection"
    INTERNAL = "internal"


STATUS_BY_KIND: Mapping[ErrorKind, int] = MappingProxyType(
    {
        ErrorKind.VALIDATION: 400,
        ErrorKind.UNAUTHORIZED: 401,
        ErrorKind.FORBIDDEN: 403,
        ErrorKind.NOT_FOUND: 404,
        ErrorKind.CONFLICT: 409,
        ErrorKind.RATE_LIMITED: 429,
        ErrorKind.DATABASE: 500,
        ErrorKind.INTERNAL: 500,
        ErrorKind.CONNECTION: 503,
    }
)


def status_for(kind: ErrorKind) -> int:
    """Look up the HTTP status for an error kind."""
    return STATUS_BY_KIND.get(kind, 500)


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"
    REQUIRED_FIELD_MISSING = "REQUIRED_FIELD_MISSING"
    INVALID_FIELD_FORMAT = "INVALID_FIELD_FORMAT"
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_ROLE = "INVALID_ROLE"

    # Authentication / authorization errors (401, 403)
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"

    # Not found errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"
    GROUP_NOT_FOUND = "GROUP_NOT_FOUND"

    # Conflict errors (409)
    EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"
    MEMBERSHIP_CONFLICT = "MEMBERSHIP_CONFLICT"
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"
    DUPLICATE_MEMBER = "DUPLICATE_MEMBER"
    MEMBER_NOT_FOUND = "MEMBER_NOT_FOUND"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500, 503)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    DATABASE_CONSTRAINT = "DATABASE_CONSTRAINT"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        kind: ErrorKind = ErrorKind.VALIDATION,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.kind = kind
        self.details = details
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return status_for(self.kind)


# --- Domain layer ---


class InvalidFieldError(AppException):
    """A value object or entity field failed validation."""

    def __init__(
        self,
        field: str,
        message: str,
        error_code: ErrorCode = ErrorCode.INVALID_FIELD_FORMAT,
    ) -> None:
        self.field = field
        super().__init__(
            error_code=error_code,
            message=message,
            kind=ErrorKind.VALIDATION,
            details={"field": field},
        )


class BusinessRuleViolationError(AppException):
    """An entity invariant would be broken by the requested mutation."""

    def __init__(
        self,
        rule: str,
        entity: str,
        message: str,
        error_code: ErrorCode = ErrorCode.BUSINESS_RULE_VIOLATION,
    ) -> None:
        self.rule = rule
        self.entity = entity
        super().__init__(
            error_code=error_code,
            message=message,
            kind=ErrorKind.CONFLICT,
            details={"rule": rule, "entity": entity},
        )


class DuplicateMemberError(BusinessRuleViolationError):
    """Membership already present."""

    def __init__(self, entity: str, message: str) -> None:
        super().__init__(
            rule="unique_member",
            entity=entity,
            message=message,
            error_code=ErrorCode.DUPLICATE_MEMBER,
        )


class MemberNotFoundError(BusinessRuleViolationError):
    """Membership absent."""

    def __init__(self, entity: str, message: str) -> None:
        super().__init__(
            rule="member_exists",
            entity=entity,
            message=message,
            error_code=ErrorCode.MEMBER_NOT_FOUND,
        )


# --- Application layer ---


@dataclass(frozen=True)
class FieldError:
    """One failing input field."""

    field: str
    message: str
    code: str = ErrorCode.INVALID_FIELD_FORMAT.value

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message, "code": self.code}


class ValidationFailedError(AppException):
    """One or more input fields are invalid."""

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = list(errors)
        fields = ", ".join(e.field for e in self.errors)
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=f"Validation failed for: {fields}",
            kind=ErrorKind.VALIDATION,
            details=[e.to_dict() for e in self.errors],
        )


class UserNotFoundError(AppException):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message=f"User not found: {user_id}",
            kind=ErrorKind.NOT_FOUND,
            details={"resource_type": "User", "resource_id": user_id},
        )


class GroupNotFoundError(AppException):
    """Group not found."""

    def __init__(self, group_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.GROUP_NOT_FOUND,
            message=f"Group not found: {group_id}",
            kind=ErrorKind.NOT_FOUND,
            details={"resource_type": "Group", "resource_id": group_id},
        )


class ConflictError(AppException):
    """Request conflicts with the current state of a resource."""

    def __init__(
        self,
        resource_type: str,
        identifier: str,
        reason: str,
        error_code: ErrorCode = ErrorCode.MEMBERSHIP_CONFLICT,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=reason,
            kind=ErrorKind.CONFLICT,
            details={
                "resource_type": resource_type,
                "identifier": identifier,
                "reason": reason,
            },
        )


class EmailAlreadyRegisteredError(ConflictError):
    """Another user already holds the email address."""

    def __init__(self, email: str) -> None:
        super().__init__(
            resource_type="User",
            identifier=email,
            reason="Email already registered",
            error_code=ErrorCode.EMAIL_ALREADY_REGISTERED,
        )


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(
            error_code=ErrorCode.UNAUTHORIZED,
            message=message,
            kind=ErrorKind.UNAUTHORIZED,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            kind=ErrorKind.FORBIDDEN,
        )


# --- Infrastructure layer ---


class DatabaseError(AppException):
    """A persistence operation failed.

    The underlying driver error is kept as ``__cause__`` for logging; clients
    only ever see the generic message.
    """

    def __init__(
        self,
        operation: str,
        table: str,
        reason: str = "",
        retryable: bool = False,
        error_code: ErrorCode = ErrorCode.DATABASE_ERROR,
    ) -> None:
        self.operation = operation
        self.table = table
        self.reason = reason
        self.retryable = retryable
        super().__init__(
            error_code=error_code,
            message="Database error occurred",
            kind=ErrorKind.DATABASE,
        )

    def __str__(self) -> str:
        text = f"database error during {self.operation} on table {self.table}"
        if self.reason:
            text = f"{text}: {self.reason}"
        return text


class DatabaseConnectionError(AppException):
    """The database could not be reached."""

    def __init__(self, target: str = "database", reason: str = "") -> None:
        self.target = target
        self.reason = reason
        self.retryable = True
        super().__init__(
            error_code=ErrorCode.SERVICE_UNAVAILABLE,
            message="Service temporarily unavailable",
            kind=ErrorKind.CONNECTION,
        )

    def __str__(self) -> str:
        return f"connection error to {self.target}: {self.reason}"
