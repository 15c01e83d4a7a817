"""
Tests for wallet Celery tasks.

Tasks are called directly (synchronously); the broker is not involved.
"""

from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import DatabaseError
from django_celery_beat.models import PeriodicTask

from wallets.models import Account
from wallets.services import LedgerReconciliationService
from wallets.tasks import verify_ledger_balances


@pytest.mark.django_db
class TestVerifyLedgerBalances:
    def test_consistent(self, user, dealer):
        result = verify_ledger_balances()

        assert result == {
            "status": "consistent",
            "accounts_checked": 2,
            "mismatched_accounts": [],
        }

    def test_mismatch(self, user, dealer):
        Account.objects.filter(id=dealer.id).update(balance=Decimal("0.00"))

        result = verify_ledger_balances(batch_size=1)

        assert result["status"] == "mismatch"
        assert result["mismatched_accounts"] == [dealer.id]

    def test_storage_error(self, user):
        with patch.object(
            LedgerReconciliationService,
            "_check_all",
            side_effect=DatabaseError("connection lost"),
        ):
            result = verify_ledger_balances()

        assert result == {"status": "error", "error_code": "STORAGE_ERROR"}

    def test_registered_with_beat(self, db):
        task = PeriodicTask.objects.get(name="Verify Ledger Balances")

        assert task.task == "wallets.tasks.verify_ledger_balances"
        assert task.enabled
