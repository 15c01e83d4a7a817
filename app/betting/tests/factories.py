"""
Factory Boy factories for betting test data.

These create rows directly, without moving money. Use them for model,
serializer and approval tests; use BetPlacementService and
DrawSettlementService when a test needs balances and ledger entries to
follow the wagers.

Usage:
    from betting.tests.factories import BetFactory, PrizeFactory

    bet = BetFactory(number="12")
    prize = PrizeFactory(amount=Decimal("850.00"))
"""

from decimal import Decimal

import factory

from betting.models import Bet, Commission, DrawResult, Prize
from betting.states import BetStatus, GameKind, PayoutStatus, RecipientType
from wallets.tests.factories import DealerAccountFactory, UserAccountFactory

DRAW_LABEL = "2024-01-01-GameX"


class BetFactory(factory.django.DjangoModelFactory):
    """
    Factory for creating Bet instances.

    Default creates a pending 2D wager of 300 on "47".
    """

    class Meta:
        model = Bet

    account = factory.SubFactory(UserAccountFactory)
    draw_label = DRAW_LABEL
    game_kind = GameKind.TWO_DIGIT
    number = "47"
    stake = Decimal("300.00")


class DrawResultFactory(factory.django.DjangoModelFactory):
    """Factory for creating an undeclared DrawResult."""

    class Meta:
        model = DrawResult

    draw_label = factory.Sequence(lambda n: f"2024-01-{(n % 28) + 1:02d}-Game{n}")


class PrizeFactory(factory.django.DjangoModelFactory):
    """
    Factory for creating a pending Prize for a won wager.

    Example:
        prize = PrizeFactory()
        prize.bet.status  # "won"
    """

    class Meta:
        model = Prize

    bet = factory.SubFactory(BetFactory, status=BetStatus.WON)
    account = factory.SelfAttribute("bet.account")
    draw_label = factory.SelfAttribute("bet.draw_label")
    amount = Decimal("25500.00")
    status = PayoutStatus.PENDING


class CommissionFactory(factory.django.DjangoModelFactory):
    """Factory for creating a pending dealer Commission."""

    class Meta:
        model = Commission

    account = factory.SubFactory(DealerAccountFactory, commission_rate=Decimal("5.00"))
    recipient_type = RecipientType.DEALER
    draw_label = DRAW_LABEL
    total_stake = Decimal("1000.00")
    rate = Decimal("5.00")
    amount = Decimal("50.00")
    status = PayoutStatus.PENDING
