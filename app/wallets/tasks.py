"""
Celery tasks for the wallets app.

Tasks:
- verify_ledger_balances: Periodic check that every balance equals the sum
  of its ledger entries

Celery Beat Schedule:
    Registered by migration 0002_ledger_reconciliation_schedule (hourly).
"""

from __future__ import annotations

import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(bind=True)
def verify_ledger_balances(self, batch_size: int | None = None) -> dict:
    """
    Compare every account balance with its ledger reconstruction.

    Args:
        batch_size: Accounts fetched per query (defaults to
            LEDGER_RECONCILIATION_BATCH_SIZE)

    Returns:
        Dict with:
        - status: "consistent", "mismatch" or "error"
        - accounts_checked: Number of accounts compared
        - mismatched_accounts: Ids whose balance differs from the ledger
    """
    from wallets.services import LedgerReconciliationService

    logger.info("Starting ledger reconciliation", extra={"batch_size": batch_size})

    result = LedgerReconciliationService.run(batch_size=batch_size)
    if not result.success:
        logger.error(
            "Ledger reconciliation could not run",
            extra={"error_code": result.error_code, "error": result.error},
        )
        return {"status": "error", "error_code": result.error_code}

    report = result.data
    mismatched = [check.account_id for check in report.mismatches]

    if mismatched:
        logger.error(
            "Ledger reconciliation found mismatched balances",
            extra={"mismatched_accounts": mismatched},
        )

    return {
        "status": "consistent" if report.consistent else "mismatch",
        "accounts_checked": report.accounts_checked,
        "mismatched_accounts": mismatched,
    }
