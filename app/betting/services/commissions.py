"""
Commission and rebate calculation for a fully declared draw.

Runs inside the settlement unit of work. Every wager on the draw counts,
whatever its outcome. Users with a rebate rate get their share credited at
once; dealers with a commission rate get a pending Commission row that an
admin releases through the approval workflow.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal

from django.db.models import Sum
from django.utils import timezone

from betting.models import Bet, Commission
from betting.states import PayoutStatus, RecipientType
from core.helpers import quantize_money
from core.services import BaseService
from wallets.models import Account, EntryKind
from wallets.services import CreditTransferService


class CommissionCalculator(BaseService):
    """Aggregates a draw's stakes into user rebates and dealer commissions."""

    @classmethod
    def calculate(cls, draw_label: str) -> list[Commission]:
        """
        Create the draw's Commission rows and credit user rebates.

        Must run inside the caller's atomic unit of work. Recipients are
        processed in ascending account id order.

        Args:
            draw_label: Draw whose two-digit outcome is known

        Returns:
            Created Commission rows (rebates first, then dealer commissions)
        """
        stakes = {
            row["account_id"]: row["total"]
            for row in Bet.objects.filter(draw_label=draw_label)
            .values("account_id")
            .annotate(total=Sum("stake"))
        }
        if not stakes:
            return []

        users = Account.objects.filter(id__in=stakes).select_related("dealer")

        rebates: dict[str, tuple[Account, Decimal]] = {}
        dealer_totals: dict[str, Decimal] = defaultdict(Decimal)
        dealers: dict[str, Account] = {}
        for user in users:
            total = stakes[user.id]
            if user.commission_rate > 0:
                rebates[user.id] = (user, total)
            dealer = user.dealer
            if dealer is not None and dealer.commission_rate > 0:
                dealer_totals[dealer.id] += total
                dealers[dealer.id] = dealer

        created = []
        for user_id in sorted(rebates):
            user, total = rebates[user_id]
            commission = cls._rebate(user, total, draw_label)
            if commission is not None:
                created.append(commission)

        for dealer_id in sorted(dealer_totals):
            dealer = dealers[dealer_id]
            amount = quantize_money(
                dealer_totals[dealer_id] * dealer.commission_rate / 100
            )
            if amount <= 0:
                continue
            created.append(
                Commission.objects.create(
                    account=dealer,
                    recipient_type=RecipientType.DEALER,
                    draw_label=draw_label,
                    total_stake=dealer_totals[dealer_id],
                    rate=dealer.commission_rate,
                    amount=amount,
                )
            )

        cls.get_logger().info(
            "Commissions calculated",
            extra={
                "draw_label": draw_label,
                "rebates": sum(
                    1 for c in created if c.recipient_type == RecipientType.USER
                ),
                "dealer_commissions": sum(
                    1 for c in created if c.recipient_type == RecipientType.DEALER
                ),
            },
        )
        return created

    @staticmethod
    def _rebate(user: Account, total: Decimal, draw_label: str) -> Commission | None:
        amount = quantize_money(total * user.commission_rate / 100)
        if amount <= 0:
            return None
        CreditTransferService.post_credit(
            user.id,
            amount,
            EntryKind.COMMISSION_REBATE,
            related_entity_id=draw_label,
            description=f"Rebate on {draw_label}",
        )
        return Commission.objects.create(
            account=user,
            recipient_type=RecipientType.USER,
            draw_label=draw_label,
            total_stake=total,
            rate=user.commission_rate,
            amount=amount,
            status=PayoutStatus.APPROVED,
            approved_at=timezone.now(),
        )
