"""
Tests for commission and rebate calculation at settlement.
"""

from decimal import Decimal

import pytest

from betting.models import Commission
from betting.states import PayoutStatus, RecipientType
from betting.tests.factories import DRAW_LABEL
from wallets.models import EntryKind, LedgerEntry
from wallets.services import AccountStore
from wallets.tests.factories import UserAccountFactory


@pytest.mark.django_db
class TestCommissions:
    def test_user_rebate_is_credited_at_once(self, rebate_user, place, declare):
        place(rebate_user, ("2D", "47", "300"), ("1D-Open", "1", "200"))

        report = declare(two_digit="47")

        rebate = Commission.objects.get(
            account=rebate_user, recipient_type=RecipientType.USER
        )
        assert rebate.total_stake == Decimal("500.00")
        assert rebate.amount == Decimal("10.00")
        assert rebate.status == PayoutStatus.APPROVED
        assert rebate.approved_at is not None
        assert rebate in report.commissions

        entry = LedgerEntry.objects.get(
            account=rebate_user, kind=EntryKind.COMMISSION_REBATE
        )
        assert entry.amount == Decimal("10.00")
        assert entry.related_entity_id == DRAW_LABEL
        assert AccountStore.get_balance(rebate_user.id) == Decimal("510.00")
        assert AccountStore.verify_balance(rebate_user.id).consistent

    def test_dealer_commission_is_staged(
        self, rebate_user, commission_dealer, place, declare
    ):
        sibling = UserAccountFactory(dealer=commission_dealer, funds=Decimal("400"))
        place(rebate_user, ("2D", "47", "300"))
        place(sibling, ("2D", "12", "100"))

        declare(two_digit="47")

        commission = Commission.objects.get(account=commission_dealer)
        assert commission.recipient_type == RecipientType.DEALER
        assert commission.total_stake == Decimal("400.00")
        assert commission.rate == Decimal("5.00")
        assert commission.amount == Decimal("20.00")
        assert commission.status == PayoutStatus.PENDING
        assert AccountStore.get_balance(commission_dealer.id) == Decimal("0.00")

    def test_calculated_once_per_draw(self, rebate_user, place, declare):
        place(rebate_user, ("2D", "47", "300"))
        declare(two_digit="47")

        report = declare(two_digit="47")

        assert report.commissions_calculated is False
        assert Commission.objects.filter(draw_label=DRAW_LABEL).count() == 2
        assert (
            LedgerEntry.objects.filter(kind=EntryKind.COMMISSION_REBATE).count() == 1
        )

    def test_waits_for_two_digit_outcome(self, rebate_user, place, declare):
        place(rebate_user, ("1D-Open", "4", "100"))

        report = declare(one_digit_open="4")

        assert report.commissions_calculated is False
        assert not Commission.objects.exists()

    def test_no_rates_no_rows(self, user, place, declare):
        place(user, ("2D", "47", "300"))

        report = declare(two_digit="47")

        assert report.commissions_calculated is True
        assert report.commissions == []
        assert not Commission.objects.exists()

    def test_amounts_that_round_to_zero_are_skipped(
        self, rebate_user, place, declare
    ):
        place(rebate_user, ("2D", "47", "0.10"))

        report = declare(two_digit="47")

        # 2% of 0.10 rounds to 0.00; 5% of 0.10 rounds to 0.01
        assert [c.recipient_type for c in report.commissions] == [RecipientType.DEALER]
        assert report.commissions[0].amount == Decimal("0.01")
