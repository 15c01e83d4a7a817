"""
Account store: the only code path that mutates account balances.

Every mutation runs inside the caller's atomic unit of work. Accounts are
locked with SELECT ... FOR UPDATE before their balance is read for a
decision, and several accounts are always locked in ascending id order so
concurrent units cannot deadlock on each other.

Usage:
    from wallets.services import AccountStore

    with transaction.atomic():
        account = AccountStore.lock_account(account_id)
        new_balance = AccountStore.apply_delta(account_id, Decimal("-25.00"))
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from django.db import transaction
from django.db.models import F
from django.db.transaction import TransactionManagementError
from django.utils import timezone

from core.services import BaseService
from wallets.exceptions import AccountNotFound, InsufficientFunds
from wallets.models import Account
from wallets.types import BalanceCheck

if TYPE_CHECKING:
    from collections.abc import Iterable


class AccountStore(BaseService):
    """
    Locked reads and conditional balance updates for accounts.

    Methods:
        lock_account: Lock one account for the rest of the unit of work
        lock_accounts: Lock several accounts in ascending id order
        apply_delta: Add a signed amount, refusing to go below zero
        get_balance: Read the current balance without locking
        verify_balance: Compare a balance with its ledger reconstruction
    """

    @staticmethod
    def _require_atomic() -> None:
        if not transaction.get_connection().in_atomic_block:
            raise TransactionManagementError(
                "Account balances may only be changed inside an atomic block"
            )

    @classmethod
    def lock_account(cls, account_id: str) -> Account:
        """
        Lock an account row until the enclosing transaction ends.

        Args:
            account_id: Account to lock

        Returns:
            The locked Account with a fresh balance

        Raises:
            AccountNotFound: If the account does not exist
            TransactionManagementError: If called outside an atomic block
        """
        cls._require_atomic()
        try:
            return Account.objects.select_for_update().get(id=account_id)
        except Account.DoesNotExist:
            raise AccountNotFound(
                f"Account {account_id} not found",
                details={"account_id": account_id},
            ) from None

    @classmethod
    def lock_accounts(cls, account_ids: Iterable[str]) -> dict[str, Account]:
        """
        Lock several accounts in ascending id order.

        Args:
            account_ids: Accounts to lock (duplicates are ignored)

        Returns:
            Dict mapping account id to the locked Account

        Raises:
            AccountNotFound: If any of the accounts does not exist
        """
        cls._require_atomic()
        ids = sorted(set(account_ids))
        accounts = {
            account.id: account
            for account in Account.objects.select_for_update()
            .filter(id__in=ids)
            .order_by("id")
        }
        missing = [account_id for account_id in ids if account_id not in accounts]
        if missing:
            raise AccountNotFound(
                f"Accounts not found: {', '.join(missing)}",
                details={"account_ids": missing},
            )
        return accounts

    @classmethod
    def apply_delta(cls, account_id: str, delta: Decimal) -> Decimal:
        """
        Add a signed amount to an account balance.

        The update is conditional: a debit only matches the row while the
        balance covers it, so the balance can never be written negative.

        Args:
            account_id: Account to change
            delta: Signed amount (negative for debits)

        Returns:
            The balance after the change

        Raises:
            InsufficientFunds: If a debit exceeds the current balance
            AccountNotFound: If the account does not exist
        """
        cls._require_atomic()
        delta = Decimal(delta)

        queryset = Account.objects.filter(id=account_id)
        if delta < 0:
            queryset = queryset.filter(balance__gte=-delta)

        updated = queryset.update(
            balance=F("balance") + delta,
            updated_at=timezone.now(),
        )
        if not updated:
            available = (
                Account.objects.filter(id=account_id)
                .values_list("balance", flat=True)
                .first()
            )
            if available is None:
                raise AccountNotFound(
                    f"Account {account_id} not found",
                    details={"account_id": account_id},
                )
            raise InsufficientFunds(account_id, required=-delta, available=available)

        return cls.get_balance(account_id)

    @classmethod
    def get_balance(cls, account_id: str) -> Decimal:
        """
        Read an account balance without locking.

        Raises:
            AccountNotFound: If the account does not exist
        """
        balance = (
            Account.objects.filter(id=account_id)
            .values_list("balance", flat=True)
            .first()
        )
        if balance is None:
            raise AccountNotFound(
                f"Account {account_id} not found",
                details={"account_id": account_id},
            )
        return balance

    @classmethod
    def verify_balance(cls, account_id: str) -> BalanceCheck:
        """
        Compare the stored balance with the sum of the account's entries.

        Returns:
            BalanceCheck; ``consistent`` is False when they differ
        """
        from wallets.services.ledger_recorder import LedgerRecorder

        return BalanceCheck(
            account_id=account_id,
            balance=cls.get_balance(account_id),
            ledger_total=LedgerRecorder.ledger_total(account_id),
        )
