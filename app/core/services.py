"""
Base service layer patterns for business logic encapsulation.

This module provides foundational patterns for the service layer:
- ServiceResult: Standard result wrapper for consistent success/failure handling
- BaseService: Base class with logging and atomic unit-of-work helpers

Service Layer Philosophy:
    Services encapsulate business logic separate from views and models.
    Views handle HTTP concerns, models handle data, services handle logic.

Pattern Comparison:
    - ServiceResult: What every public operation returns. Expected failures
      (validation, business rules) and storage faults both arrive here.
    - Exceptions: Raised inside a unit of work to abort it. run_atomic()
      rolls the unit back and converts the exception into a ServiceResult.

Usage:
    from core.services import BaseService, ServiceResult

    class TransferService(BaseService):
        @classmethod
        def transfer(cls, from_id, to_id, amount) -> ServiceResult[Receipt]:
            return cls.run_atomic(cls._transfer, from_id, to_id, amount)

        @classmethod
        def _transfer(cls, from_id, to_id, amount) -> Receipt:
            # Raise BaseApplicationError subclasses to abort; everything
            # written so far is rolled back.
            ...

    # In view
    result = TransferService.transfer(from_id, to_id, amount)
    if result.success:
        return Response(ReceiptSerializer(result.data).data, status=201)
    return Response(result.to_response(), status=400)

Related:
    - core.exceptions: Error kinds and the exception hierarchy
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import DatabaseError, transaction

from core.exceptions import BaseApplicationError, ErrorKind, StorageError

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

# Generic type for ServiceResult data
T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Provides consistent success/failure handling without exceptions.

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed)
        error: Error message if failed (None if successful)
        error_code: Machine-readable error code for client handling
        errors: Field-level errors or other failure details
        kind: Stable failure kind (see core.exceptions.ErrorKind)

    Usage:
        # Success case
        return ServiceResult.success(bets)

        # Failure case
        return ServiceResult.failure(
            "Insufficient balance",
            error_code="INSUFFICIENT_FUNDS",
            kind=ErrorKind.INSUFFICIENT_FUNDS,
        )

        # Check result
        result = BetPlacementService.place_bets(user_id, wagers)
        if result.success:
            bets = result.data
        elif result.retryable:
            ...  # storage fault, nothing was written
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, Any] | None = field(default=None)
    kind: str | None = None

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """
        Create a successful result.

        Args:
            data: The result data

        Returns:
            ServiceResult with success=True and data set
        """
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        errors: dict[str, Any] | None = None,
        kind: str | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code for client handling
            errors: Field-level errors (for validation failures)
            kind: Failure kind; defaults to the error code when it is a kind
                itself, otherwise INVALID_INPUT

        Returns:
            ServiceResult with success=False and error details
        """
        if kind is None:
            kind = error_code if _is_kind(error_code) else ErrorKind.INVALID_INPUT
        return cls(
            success=False,
            error=error,
            error_code=error_code or kind,
            errors=errors,
            kind=kind,
        )

    @classmethod
    def from_exception(
        cls, exc: Exception, error_code: str | None = None
    ) -> ServiceResult[T]:
        """
        Create a failed result from an exception.

        Application errors keep their own code, kind and details. Any other
        exception is reported under the given code (or its class name).

        Example:
            try:
                AccountStore.apply_delta(account_id, -amount)
            except InsufficientFunds as e:
                return ServiceResult.from_exception(e)
        """
        if isinstance(exc, BaseApplicationError):
            return cls(
                success=False,
                error=exc.message,
                error_code=error_code or exc.error_code,
                errors=exc.details or None,
                kind=exc.kind,
            )
        return cls(
            success=False,
            error=str(exc),
            error_code=error_code or exc.__class__.__name__.upper(),
            kind=ErrorKind.INVALID_INPUT,
        )

    @property
    def retryable(self) -> bool:
        """True when the failure was a storage fault and nothing was written."""
        return not self.success and self.kind in ErrorKind.RETRYABLE

    def to_response(self) -> dict[str, Any]:
        """
        Convert to API response format.

        Returns a dictionary suitable for returning from a DRF view.
        """
        if self.success:
            return {"success": True, "data": self.data}

        response: dict[str, Any] = {
            "success": False,
            "error": self.error,
        }
        if self.error_code:
            response["error_code"] = self.error_code
        if self.kind:
            response["kind"] = self.kind
        if self.errors:
            response["errors"] = self.errors
        return response

    def __bool__(self) -> bool:
        """Allow using result in boolean context."""
        return self.success


def _is_kind(value: str | None) -> bool:
    return value in {
        ErrorKind.NOT_FOUND,
        ErrorKind.INSUFFICIENT_FUNDS,
        ErrorKind.ALREADY_PROCESSED,
        ErrorKind.INVALID_INPUT,
        ErrorKind.PERMISSION_DENIED,
        ErrorKind.CONFLICT,
        ErrorKind.STORAGE_ERROR,
    }


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transaction management
    - Conversion of aborted units of work into ServiceResult

    Design Notes:
        - Use @staticmethod or @classmethod (no instance state)
        - Services should be stateless
        - Public operations return ServiceResult
        - Private steps raise BaseApplicationError to abort the unit of work
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    def run_atomic(
        cls,
        operation: Callable[..., Any],
        *args: Any,
        **kwargs: Any,
    ) -> ServiceResult:
        """
        Run an operation as one all-or-nothing unit of work.

        The operation may return a plain value (wrapped as success), a
        ServiceResult, or raise. A failed ServiceResult, any
        BaseApplicationError and any DatabaseError roll back every write
        made by the operation.

        Args:
            operation: Callable performing the unit of work
            *args: Positional arguments for the operation
            **kwargs: Keyword arguments for the operation

        Returns:
            ServiceResult; storage faults carry kind STORAGE_ERROR and are
            marked retryable
        """
        try:
            with transaction.atomic():
                outcome = operation(*args, **kwargs)
                if isinstance(outcome, ServiceResult) and not outcome.success:
                    transaction.set_rollback(True)
        except BaseApplicationError as exc:
            return cls.handle_exception(exc, operation.__name__, logging.WARNING)
        except DatabaseError as exc:
            return cls.handle_exception(exc, operation.__name__)

        if isinstance(outcome, ServiceResult):
            return outcome
        return ServiceResult.success(outcome)

    @classmethod
    def handle_exception(
        cls,
        exc: Exception,
        context: str = "",
        log_level: int = logging.ERROR,
    ) -> ServiceResult:
        """
        Convert exception to ServiceResult with logging.

        Args:
            exc: The caught exception
            context: Additional context for logging
            log_level: Logging level (default ERROR)

        Returns:
            ServiceResult with error details
        """
        logger = cls.get_logger()
        message = f"{context}: {exc}" if context else str(exc)

        if isinstance(exc, BaseApplicationError):
            logger.log(
                log_level,
                message,
                extra={"error_code": exc.error_code, "kind": exc.kind},
            )
            return ServiceResult.from_exception(exc)

        if isinstance(exc, DatabaseError):
            logger.log(log_level, message, exc_info=True)
            return ServiceResult.from_exception(
                StorageError(
                    "The operation could not be stored and was rolled back",
                    details={"detail": str(exc)},
                )
            )

        logger.log(log_level, message, exc_info=True)
        return ServiceResult.from_exception(exc)
