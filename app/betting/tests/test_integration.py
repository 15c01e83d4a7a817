"""
End-to-end money flow: fund, wager, declare, approve, reconcile.
"""

from decimal import Decimal

import pytest

from approvals.services import ApprovalService
from approvals.states import RecordKind
from betting.models import Bet, Prize
from betting.services import BetPlacementService, DrawSettlementService
from betting.states import BetStatus, GameKind, PayoutStatus
from betting.tests.factories import DRAW_LABEL
from betting.types import WagerRequest
from wallets.models import AccountRole, EntryKind, LedgerEntry
from wallets.services import (
    AccountService,
    AccountStore,
    LedgerReconciliationService,
)


@pytest.mark.django_db
class TestWagerToPayout:
    def test_two_wagers_one_winner(self, admin, user):
        result = BetPlacementService.place_bets(
            user.id,
            [
                WagerRequest(DRAW_LABEL, GameKind.TWO_DIGIT, "47", Decimal("300")),
                WagerRequest(DRAW_LABEL, GameKind.TWO_DIGIT, "12", Decimal("300")),
            ],
        )
        assert result.success
        assert AccountStore.get_balance(user.id) == Decimal("400.00")
        assert Bet.objects.filter(account=user, status=BetStatus.PENDING).count() == 2
        assert (
            LedgerEntry.objects.filter(
                account=user, kind=EntryKind.BET_PLACED, amount=Decimal("-300")
            ).count()
            == 2
        )

        settled = DrawSettlementService.declare_draw(DRAW_LABEL, two_digit="47")
        assert settled.success
        prize = Prize.objects.get(account=user)
        assert prize.amount == Decimal("25500.00")
        assert prize.bet.number == "47"
        assert Bet.objects.get(account=user, number="12").status == BetStatus.LOST
        assert AccountStore.get_balance(user.id) == Decimal("400.00")

        approved = ApprovalService.approve(RecordKind.PRIZE, prize.id, approved_by=admin.id)
        assert approved.success
        assert approved.data.status == PayoutStatus.APPROVED
        assert AccountStore.get_balance(user.id) == Decimal("25900.00")

        entry = LedgerEntry.objects.get(account=user, kind=EntryKind.PRIZE_WON)
        assert entry.related_entity_id == prize.id
        assert entry.balance_after == Decimal("25900.00")

        report = LedgerReconciliationService.run().data
        assert report.consistent

    def test_dealer_lifecycle(self, admin):
        dealer = AccountService.open_account(
            "market", AccountRole.DEALER, commission_rate=Decimal("10")
        ).data
        top_up = ApprovalService.request_top_up(dealer.id, Decimal("2000")).data
        ApprovalService.approve(RecordKind.TOP_UP, top_up.id, approved_by=admin.id)

        player = AccountService.open_account(
            "punter",
            AccountRole.USER,
            dealer_id=dealer.id,
            initial_deposit=Decimal("500"),
        ).data
        BetPlacementService.place_bets(
            player.id,
            [WagerRequest(DRAW_LABEL, GameKind.ONE_DIGIT_OPEN, "3", Decimal("200"))],
        )
        DrawSettlementService.declare_draw(DRAW_LABEL, one_digit_open="4")
        DrawSettlementService.declare_draw(DRAW_LABEL, one_digit_close="9")

        commission = ApprovalService.list_pending(RecordKind.COMMISSION).get()
        assert commission.account_id == dealer.id
        assert commission.amount == Decimal("20.00")
        ApprovalService.approve(RecordKind.COMMISSION, commission.id, approved_by=admin.id)

        assert AccountStore.get_balance(dealer.id) == Decimal("1520.00")
        assert AccountStore.get_balance(player.id) == Decimal("300.00")
        assert not Prize.objects.exists()
        assert LedgerReconciliationService.run().data.consistent
