"""Domain error codes for the marketplace module."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    INVALID_ID = "INVALID_ID"
    REFERENCE_NOT_FOUND = "REFERENCE_NOT_FOUND"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    DEPENDENTS_EXIST = "DEPENDENTS_EXIST"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    STORE_FAILURE = "STORE_FAILURE"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code, user-safe message and optional details.

    ``details`` is merged into the error response body, so keys must be
    JSON-friendly.
    """

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised when input is missing, malformed or out of range."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_FAILED,
            message=message,
            details=details,
        )


class InvalidIdError(DomainError):
    """Raised when an identifier is not a valid UUID."""

    def __init__(self, entity: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ID,
            message=f"Valid {entity} ID is required",
        )


class ReferenceNotFoundError(DomainError):
    """Raised when a payload references a related record that does not exist.

    This is a client input error, not a missing resource.
    """

    def __init__(self, entity: str) -> None:
        super().__init__(
            code=ErrorCode.REFERENCE_NOT_FOUND,
            message=f"{entity} not found",
        )


class NotFoundError(DomainError):
    """Raised when the addressed record does not exist."""

    def __init__(self, entity: str) -> None:
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message=f"{entity} not found",
        )


class ConflictError(DomainError):
    """Raised when a write would break a uniqueness rule."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(
            code=ErrorCode.CONFLICT,
            message=message,
            details=details,
        )


class DependentsExistError(DomainError):
    """Raised when a delete is blocked by records that reference the target."""

    def __init__(
        self,
        entity: str,
        dependent: str,
        count: int,
        sample: list[dict[str, Any]],
    ) -> None:
        super().__init__(
            code=ErrorCode.DEPENDENTS_EXIST,
            message=f"Cannot delete {entity} with associated {dependent}",
            details={
                f"associated_{dependent}_count": count,
                f"sample_{dependent}": sample,
                "suggestion": (
                    f"Use ?force=true to delete anyway "
                    f"(this will affect associated {dependent})"
                ),
            },
        )


class AuthenticationError(DomainError):
    """Raised when credentials or tokens are rejected."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(
            code=ErrorCode.AUTHENTICATION_FAILED,
            message=message,
        )


class PermissionDeniedError(DomainError):
    """Raised when the caller may not perform the action."""

    def __init__(self, message: str = "Access forbidden") -> None:
        super().__init__(
            code=ErrorCode.PERMISSION_DENIED,
            message=message,
        )


class StoreError(DomainError):
    """Raised when the backing store call itself fails."""

    def __init__(self, message: str, error: str) -> None:
        super().__init__(
            code=ErrorCode.STORE_FAILURE,
            message=message,
            details={"error": error},
        )
