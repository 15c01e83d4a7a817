"""
Data types for wallet operations.

Types:
    TransferKind: Supported account-to-account transfers
    TransferReceipt: Outcome of a committed transfer
    BalanceCheck: Stored balance compared with its ledger reconstruction
    ReconciliationReport: Outcome of a full ledger consistency pass
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from django.db import models


class TransferKind(models.TextChoices):
    """
    Supported account-to-account transfers.

    Values:
        DEALER_TO_USER: Dealer funds one of the users they manage
        ADMIN_TO_USER: Admin moves own balance to a user or dealer
        USER_TO_ADMIN: Admin pulls funds back from a user or dealer
    """

    DEALER_TO_USER = "dealer_to_user", "Dealer To User"
    ADMIN_TO_USER = "admin_to_user", "Admin To User"
    USER_TO_ADMIN = "user_to_admin", "User To Admin"


@dataclass(frozen=True)
class TransferReceipt:
    """
    Outcome of a committed transfer.

    Attributes:
        kind: Transfer kind
        from_account_id: Debited account
        to_account_id: Credited account
        amount: Amount moved (positive)
        debit_entry_id: Ledger entry on the debited account
        credit_entry_id: Ledger entry on the credited account
        from_balance: Debited account balance after the transfer
        to_balance: Credited account balance after the transfer
    """

    kind: str
    from_account_id: str
    to_account_id: str
    amount: Decimal
    debit_entry_id: str
    credit_entry_id: str
    from_balance: Decimal
    to_balance: Decimal


@dataclass(frozen=True)
class BalanceCheck:
    """Stored balance compared with the sum of the account's ledger entries."""

    account_id: str
    balance: Decimal
    ledger_total: Decimal

    @property
    def consistent(self) -> bool:
        return self.balance == self.ledger_total

    @property
    def difference(self) -> Decimal:
        return self.balance - self.ledger_total


@dataclass
class ReconciliationReport:
    """
    Outcome of a ledger consistency pass over all accounts.

    Attributes:
        accounts_checked: Number of accounts compared
        mismatches: Checks whose balance differs from the ledger total
    """

    accounts_checked: int = 0
    mismatches: list[BalanceCheck] = field(default_factory=list)

    @property
    def consistent(self) -> bool:
        return not self.mismatches
