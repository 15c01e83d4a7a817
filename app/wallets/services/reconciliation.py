"""
Ledger reconciliation: checks that every stored balance equals the sum of
the account's ledger entries.

The check only reads. A mismatch means money moved outside the account
store, which must be investigated by an operator; nothing is corrected
automatically.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.db import DatabaseError
from django.db.models import DecimalField, Sum, Value
from django.db.models.functions import Coalesce

from core.services import BaseService, ServiceResult
from wallets.models import Account
from wallets.types import BalanceCheck, ReconciliationReport


class LedgerReconciliationService(BaseService):
    """Compares stored balances with their ledger reconstruction."""

    @classmethod
    def run(cls, batch_size: int | None = None) -> ServiceResult[ReconciliationReport]:
        """
        Check every account in batches.

        Args:
            batch_size: Accounts fetched per query (defaults to
                LEDGER_RECONCILIATION_BATCH_SIZE)

        Returns:
            ServiceResult with a ReconciliationReport, or STORAGE_ERROR if
            the accounts could not be read
        """
        batch_size = batch_size or settings.LEDGER_RECONCILIATION_BATCH_SIZE
        try:
            report = cls._check_all(batch_size)
        except DatabaseError as exc:
            return cls.handle_exception(exc, "ledger reconciliation")
        return ServiceResult.success(report)

    @classmethod
    def _check_all(cls, batch_size: int) -> ReconciliationReport:
        logger = cls.get_logger()
        report = ReconciliationReport()

        accounts = (
            Account.objects.order_by("id")
            .annotate(
                ledger_total=Coalesce(
                    Sum("ledger_entries__amount"),
                    Value(Decimal("0.00")),
                    output_field=DecimalField(max_digits=16, decimal_places=2),
                )
            )
            .values_list("id", "balance", "ledger_total")
        )
        for account_id, balance, ledger_total in accounts.iterator(
            chunk_size=batch_size
        ):
            report.accounts_checked += 1
            check = BalanceCheck(
                account_id=account_id, balance=balance, ledger_total=ledger_total
            )
            if not check.consistent:
                report.mismatches.append(check)
                logger.error(
                    "Balance does not match ledger",
                    extra={
                        "account_id": account_id,
                        "balance": str(balance),
                        "ledger_total": str(ledger_total),
                    },
                )

        logger.info(
            "Ledger reconciliation finished",
            extra={
                "accounts_checked": report.accounts_checked,
                "mismatches": len(report.mismatches),
            },
        )
        return report
