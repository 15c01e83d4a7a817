"""
Wallet-specific exceptions for balance and transfer operations.

This module provides the exceptions raised by the account store, the
ledger recorder and the transfer service. They inherit from the core
hierarchy so every one of them maps to a stable failure kind.

Exception Hierarchy:
    AccountNotFound (NotFoundError) - Account lookup failures
    InsufficientFunds (InsufficientFundsError) - Debit larger than balance
    InvalidTransfer (ValidationError) - Bad amount, same account, role rules
    AccountBlocked (PermissionDeniedError) - Blocked account attempted to act

Usage:
    from wallets.exceptions import InsufficientFunds, AccountNotFound

    if balance < amount:
        raise InsufficientFunds(account.id, required=amount, available=balance)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import (
    InsufficientFundsError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

if TYPE_CHECKING:
    from decimal import Decimal
    from typing import Any


class AccountNotFound(NotFoundError):
    """
    Raised when an account cannot be found.

    Example:
        raise AccountNotFound(
            f"Account {account_id} not found",
            details={"account_id": account_id}
        )
    """

    default_error_code: str = "ACCOUNT_NOT_FOUND"


class InsufficientFunds(InsufficientFundsError):
    """
    Raised when an account has insufficient funds for a debit.

    Stores the account ID, required amount, and available balance
    for detailed error reporting.

    Attributes:
        account_id: Account that lacks funds
        required: Amount the operation needed
        available: Balance at the time of the check
    """

    default_error_code: str = "INSUFFICIENT_FUNDS"

    def __init__(
        self,
        account_id: str,
        required: Decimal,
        available: Decimal,
        details: dict[str, Any] | None = None,
    ):
        self.account_id = account_id
        self.required = required
        self.available = available

        error_details = {
            "account_id": account_id,
            "required": str(required),
            "available": str(available),
        }
        if details:
            error_details.update(details)

        super().__init__(
            f"Insufficient balance: requires {required}, available {available}",
            details=error_details,
        )


class InvalidTransfer(ValidationError):
    """Raised when a transfer request breaks an amount or role rule."""

    default_error_code: str = "INVALID_TRANSFER"


class AccountBlocked(PermissionDeniedError):
    """Raised when a blocked account attempts a money-moving operation."""

    default_error_code: str = "ACCOUNT_BLOCKED"
