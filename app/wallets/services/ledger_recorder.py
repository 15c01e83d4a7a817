"""
Ledger recorder: appends immutable entries describing balance movements.

The recorder writes history; it never changes a balance. Callers apply the
matching delta through AccountStore in the same atomic unit of work, which
keeps the stored balance equal to the sum of the account's entries.

Usage:
    from wallets.services import LedgerRecorder

    entry = LedgerRecorder.record(
        account_id,
        Decimal("-10.00"),
        EntryKind.BET_PLACED,
        related_entity_id=bet.id,
    )
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from django.db.models import DecimalField, Sum, Value
from django.db.models.functions import Coalesce

from core.exceptions import ValidationError
from core.services import BaseService
from wallets.models import LedgerEntry
from wallets.services.account_store import AccountStore

if TYPE_CHECKING:
    from django.db.models import QuerySet


class LedgerRecorder(BaseService):
    """
    Append-only writer and reader for ledger entries.

    Methods:
        record: Append one signed entry
        record_transfer: Append the paired entries of a transfer
        ledger_total: Sum of an account's entries
        transaction_history: Newest-first entries of an account
    """

    @classmethod
    def record(
        cls,
        account_id: str,
        amount: Decimal,
        kind: str,
        related_entity_id: str | None = None,
        *,
        balance_after: Decimal | None = None,
        description: str = "",
    ) -> LedgerEntry:
        """
        Append one ledger entry.

        Args:
            account_id: Account whose balance moved
            amount: Signed, non-zero amount (negative for debits)
            kind: EntryKind value
            related_entity_id: Wager, counterparty, draw or payout id
            balance_after: Balance right after the movement; read from the
                account store when omitted
            description: Human-readable note

        Returns:
            The created LedgerEntry

        Raises:
            ValidationError: If amount is zero
            DatabaseError: If the write fails (rolls back the unit of work)
        """
        amount = Decimal(amount)
        if amount == 0:
            raise ValidationError(
                "Ledger entries must move a non-zero amount",
                error_code="ZERO_AMOUNT_ENTRY",
            )
        if balance_after is None:
            balance_after = AccountStore.get_balance(account_id)

        entry = LedgerEntry.objects.create(
            account_id=account_id,
            amount=amount,
            kind=kind,
            related_entity_id=related_entity_id,
            balance_after=balance_after,
            description=description,
        )

        cls.get_logger().debug(
            "Recorded ledger entry",
            extra={
                "entry_id": entry.id,
                "account_id": account_id,
                "amount": str(amount),
                "kind": kind,
                "related_entity_id": related_entity_id,
            },
        )
        return entry

    @classmethod
    def record_transfer(
        cls,
        from_account_id: str,
        to_account_id: str,
        amount: Decimal,
        debit_kind: str,
        credit_kind: str,
        *,
        from_balance_after: Decimal,
        to_balance_after: Decimal,
    ) -> tuple[LedgerEntry, LedgerEntry]:
        """
        Append the paired entries of a transfer.

        The debit and credit carry mirrored amounts and each references the
        counterparty account.

        Returns:
            Tuple of (debit_entry, credit_entry)
        """
        amount = Decimal(amount)
        debit = cls.record(
            from_account_id,
            -amount,
            debit_kind,
            related_entity_id=to_account_id,
            balance_after=from_balance_after,
        )
        credit = cls.record(
            to_account_id,
            amount,
            credit_kind,
            related_entity_id=from_account_id,
            balance_after=to_balance_after,
        )
        return debit, credit

    @staticmethod
    def ledger_total(account_id: str) -> Decimal:
        """
        Reconstruct a balance from the account's entries.

        Returns:
            Sum of entry amounts (0 when the account has none)
        """
        return LedgerEntry.objects.filter(account_id=account_id).aggregate(
            total=Coalesce(
                Sum("amount"),
                Value(Decimal("0.00")),
                output_field=DecimalField(max_digits=16, decimal_places=2),
            )
        )["total"]

    @staticmethod
    def transaction_history(
        account_id: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> QuerySet[LedgerEntry]:
        """
        Entries of an account, newest first.

        Args:
            account_id: Account to list
            limit: Maximum number of entries (None for all)
            offset: Number of entries to skip

        Returns:
            QuerySet of LedgerEntry
        """
        queryset = LedgerEntry.objects.filter(account_id=account_id).order_by(
            "-created_at", "-id"
        )
        if limit is not None:
            return queryset[offset : offset + limit]
        if offset:
            return queryset[offset:]
        return queryset
