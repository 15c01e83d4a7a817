"""
Tests for wallet models and their database constraints.
"""

from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction

from wallets.models import Account, LedgerEntry
from wallets.tests.factories import DealerAccountFactory, UserAccountFactory


@pytest.mark.django_db
class TestAccount:
    def test_prefixed_id(self):
        account = DealerAccountFactory()

        assert account.id.startswith("acc_")
        assert len(account.id) == len("acc_") + 17

    def test_balance_cannot_be_negative(self):
        account = DealerAccountFactory()

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Account.objects.filter(id=account.id).update(balance=Decimal("-1"))

    def test_commission_rate_is_a_percentage(self):
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                DealerAccountFactory(commission_rate=Decimal("150"))

    def test_managed_users(self):
        user = UserAccountFactory()

        assert list(user.dealer.managed_users.all()) == [user]


@pytest.mark.django_db
class TestLedgerEntry:
    def test_zero_amount_rejected_by_database(self):
        account = DealerAccountFactory()

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                LedgerEntry.objects.create(
                    account=account,
                    amount=Decimal("0"),
                    kind="admin_credit",
                    balance_after=Decimal("0"),
                )

    def test_funded_account_has_one_entry(self):
        account = DealerAccountFactory(funds=Decimal("42.00"))

        entry = account.ledger_entries.get()
        assert entry.id.startswith("txn_")
        assert entry.amount == Decimal("42.00")
        assert entry.balance_after == Decimal("42.00")
        assert account.balance == Decimal("42.00")
