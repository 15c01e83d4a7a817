"""
Base exception classes for application-wide error handling.

This module provides a standardized exception hierarchy that enables:
- Consistent error responses across the application
- A stable, machine-readable error kind for every failure
- Detailed error information for debugging

Every money-moving operation reports its failures through one of a small,
fixed set of kinds. Callers (views, workers, tests) branch on the kind; the
error code may be more specific but always belongs to exactly one kind.

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Malformed or out-of-range input (INVALID_INPUT)
    ├── NotFoundError - Referenced record does not exist (NOT_FOUND)
    ├── InsufficientFundsError - Debit would make a balance negative (INSUFFICIENT_FUNDS)
    ├── AlreadyProcessedError - Staged record was already released (ALREADY_PROCESSED)
    ├── PermissionDeniedError - Account may not perform the operation (PERMISSION_DENIED)
    ├── ConflictError - Operation conflicts with current state (CONFLICT)
    └── StorageError - Persistence fault, safe to retry (STORAGE_ERROR)

Usage:
    from core.exceptions import ValidationError, NotFoundError

    # Raise with message only
    raise ValidationError("Stake must be positive")

    # Raise with a more specific error code (kind stays INVALID_INPUT)
    raise ValidationError("Bet limit exceeded", error_code="BET_LIMIT_EXCEEDED")

    # Raise with additional details
    raise ValidationError(
        "Validation failed",
        details={"number": ["Expected two digits"], "stake": ["Must be positive"]}
    )

    # Convert to dict for API response
    try:
        ...
    except BaseApplicationError as e:
        return Response(e.to_dict(), status=400)

Note:
    These exceptions are for domain/business logic errors.
    DRF handles API-layer exceptions (serialization, authentication, etc.).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class ErrorKind:
    """
    Stable failure kinds shared by every service.

    These strings are part of the public contract of the service layer and
    of the HTTP API. Do not rename them.
    """

    NOT_FOUND = "NOT_FOUND"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    ALREADY_PROCESSED = "ALREADY_PROCESSED"
    INVALID_INPUT = "INVALID_INPUT"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    CONFLICT = "CONFLICT"
    STORAGE_ERROR = "STORAGE_ERROR"

    RETRYABLE = frozenset({STORAGE_ERROR})


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Provides a consistent interface for error handling across the application.
    All custom exceptions should inherit from this class.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, metadata, etc.)
        kind: Stable failure kind (one of ErrorKind)

    Example:
        try:
            account = AccountStore.lock_account(account_id)
        except NotFoundError as e:
            logger.warning(f"Account not found: {e.error_code}")
            return Response(e.to_dict(), status=404)
    """

    default_error_code: str = "APPLICATION_ERROR"
    kind: str = ErrorKind.INVALID_INPUT

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    @property
    def retryable(self) -> bool:
        """True when repeating the same request may succeed."""
        return self.kind in ErrorKind.RETRYABLE

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dict with error, error_code, kind, and details keys

        Example:
            {
                "error": "Account acc_01 not found",
                "error_code": "ACCOUNT_NOT_FOUND",
                "kind": "NOT_FOUND",
                "details": {"account_id": "acc_01"}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
            "kind": self.kind,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input validation fails.

    Use for:
    - Invalid field formats (draw labels, numbers, amounts)
    - Business rule violations (bet limits, transfer role rules)
    - Missing required fields

    Example:
        raise ValidationError(
            "Validation failed",
            details={"number": ["Two-digit games take exactly two digits"]}
        )

    Note:
        For DRF serializer validation, use DRF's built-in validation.
        Use this for service-layer validation logic.
    """

    default_error_code: str = ErrorKind.INVALID_INPUT
    kind = ErrorKind.INVALID_INPUT


class NotFoundError(BaseApplicationError):
    """
    Raised when a requested resource is not found.

    Example:
        account = Account.objects.filter(id=account_id).first()
        if not account:
            raise NotFoundError(
                f"Account {account_id} not found",
                error_code="ACCOUNT_NOT_FOUND",
                details={"account_id": account_id}
            )
    """

    default_error_code: str = ErrorKind.NOT_FOUND
    kind = ErrorKind.NOT_FOUND


class InsufficientFundsError(BaseApplicationError):
    """
    Raised when a debit would take an account balance below zero.

    Details should carry the requested amount and the available balance
    so callers can explain the rejection.
    """

    default_error_code: str = ErrorKind.INSUFFICIENT_FUNDS
    kind = ErrorKind.INSUFFICIENT_FUNDS


class AlreadyProcessedError(BaseApplicationError):
    """
    Raised when a staged record (prize, commission, top-up) has already
    left the pending state.

    Releasing money twice is never possible; the second caller gets this.
    """

    default_error_code: str = ErrorKind.ALREADY_PROCESSED
    kind = ErrorKind.ALREADY_PROCESSED


class PermissionDeniedError(BaseApplicationError):
    """
    Raised when an account lacks permission for an operation.

    Use for:
    - Role-based access control violations
    - Blocked accounts

    Note:
        For authentication failures (missing identity headers), use DRF's
        AuthenticationFailed. Use this for authorization failures.
    """

    default_error_code: str = ErrorKind.PERMISSION_DENIED
    kind = ErrorKind.PERMISSION_DENIED


class ConflictError(BaseApplicationError):
    """
    Raised when operation conflicts with current resource state.

    Use for:
    - Re-declaring a draw component with a different value
    - Wagering on an outcome that is already declared

    Note:
        HTTP 409 Conflict is the appropriate status for these errors.
    """

    default_error_code: str = ErrorKind.CONFLICT
    kind = ErrorKind.CONFLICT


class StorageError(BaseApplicationError):
    """
    Raised when the database rejects or loses a write.

    The enclosing atomic unit has been rolled back when this surfaces, so
    the caller may safely retry the whole operation. Nothing retries
    automatically.

    Note:
        HTTP 503 Service Unavailable is the appropriate status.
    """

    default_error_code: str = ErrorKind.STORAGE_ERROR
    kind = ErrorKind.STORAGE_ERROR
