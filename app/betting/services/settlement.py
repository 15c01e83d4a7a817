"""
Draw settlement service: merges declarations and resolves wagers.

A draw's outcome may arrive whole (the two-digit number) or in halves (the
open digit and the close digit, possibly far apart). Each declaration runs
as one atomic unit of work holding a lock on the draw row:

1. Merge the declared component into the draw. A component that is already
   declared must match, otherwise nothing changes.
2. Resolve every pending wager whose game kind became known, creating a
   pending Prize for each winner.
3. Once the two-digit outcome is known, calculate commissions and rebates,
   but only if no Commission row exists for the draw yet.

Declaring the same values again is a no-op: nothing newly resolves and the
commission gate stays closed.

Usage:
    from betting.services import DrawSettlementService

    result = DrawSettlementService.declare_draw("2024-01-01-GameX", two_digit="47")
    if result.success:
        report = result.data
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.db.models import F, QuerySet
from django.utils import timezone

from betting.exceptions import DrawResultConflict
from betting.models import OUTCOME_FIELD, Bet, Commission, DrawResult, Prize
from betting.services.commissions import CommissionCalculator
from betting.services.draws import lock_draw
from betting.states import BetStatus, GameKind
from betting.types import SettlementReport
from betting.validators import validate_draw_label, validate_number
from core.exceptions import ValidationError
from core.helpers import quantize_money
from core.services import BaseService, ServiceResult
from wallets.models import Account

# Timestamp recorded when each component first becomes known
DECLARED_AT_FIELD = {
    "two_digit": "declared_at",
    "one_digit_open": "open_declared_at",
    "one_digit_close": "close_declared_at",
}


def prize_multiplier(account: Account, game_kind: str) -> Decimal:
    """Payout multiplier for a winning wager of this account and kind."""
    if game_kind == GameKind.TWO_DIGIT:
        rate = account.prize_rate_2d
        default = settings.BETTING_DEFAULT_PRIZE_RATE_2D
    else:
        rate = account.prize_rate_1d
        default = settings.BETTING_DEFAULT_PRIZE_RATE_1D
    return Decimal(rate) if rate is not None else Decimal(default)


class DrawSettlementService(BaseService):
    """
    Declaration of draw outcomes and settlement of their wagers.

    Methods:
        declare_draw: Declare one outcome component and settle what it resolves
        list_results: Declared draws, most recently declared first
    """

    @classmethod
    def declare_draw(
        cls,
        draw_label: str,
        two_digit: str | None = None,
        one_digit_open: str | None = None,
        one_digit_close: str | None = None,
    ) -> ServiceResult[SettlementReport]:
        """
        Declare one outcome component of a draw.

        Exactly one of two_digit, one_digit_open and one_digit_close must be
        given.

        Args:
            draw_label: "{YYYY-MM-DD}-{gameName}"
            two_digit: Full outcome, e.g. "47"
            one_digit_open: First digit
            one_digit_close: Second digit

        Returns:
            ServiceResult with a SettlementReport on success. Failure kinds:
            INVALID_INPUT, CONFLICT (component already declared differently),
            STORAGE_ERROR.
        """
        components = {
            "two_digit": two_digit,
            "one_digit_open": one_digit_open,
            "one_digit_close": one_digit_close,
        }
        given = {name: value for name, value in components.items() if value is not None}

        try:
            validate_draw_label(draw_label)
            if len(given) != 1:
                raise ValidationError(
                    "Declare exactly one of two_digit, one_digit_open, one_digit_close",
                    error_code="INVALID_DECLARATION",
                    details={"components": sorted(given)},
                )
            (component, value), = given.items()
            validate_number(
                GameKind.TWO_DIGIT if component == "two_digit" else GameKind.ONE_DIGIT_OPEN,
                value,
            )
        except ValidationError as exc:
            cls.get_logger().warning(
                "Rejected draw declaration",
                extra={"draw_label": draw_label, "error_code": exc.error_code},
            )
            return ServiceResult.from_exception(exc)

        return cls.run_atomic(cls._declare, draw_label, component, value)

    @classmethod
    def _declare(cls, draw_label: str, component: str, value: str) -> SettlementReport:
        draw = lock_draw(draw_label)
        before = draw.resolved_kinds

        if component == "two_digit":
            updates = {
                "two_digit": value,
                "one_digit_open": value[0],
                "one_digit_close": value[1],
            }
        else:
            updates = {component: value}

        # Check every component before writing any of them
        for field_name, new_value in updates.items():
            current = getattr(draw, field_name)
            if current is not None and current != new_value:
                raise DrawResultConflict(draw_label, field_name, current, new_value)

        now = timezone.now()
        changed = []
        for field_name, new_value in updates.items():
            if getattr(draw, field_name) is None:
                setattr(draw, field_name, new_value)
                setattr(draw, DECLARED_AT_FIELD[field_name], now)
                changed.append(field_name)

        if draw.two_digit is None and draw.one_digit_open and draw.one_digit_close:
            draw.two_digit = draw.one_digit_open + draw.one_digit_close
            draw.declared_at = now
            changed.append("two_digit")

        if changed:
            draw.save(
                update_fields=[
                    *changed,
                    *(DECLARED_AT_FIELD[name] for name in changed),
                    "updated_at",
                ]
            )

        newly_resolved = [
            kind for kind in OUTCOME_FIELD if kind in draw.resolved_kinds - before
        ]
        report = SettlementReport(draw=draw, newly_resolved=newly_resolved)
        if newly_resolved:
            cls._resolve_bets(draw, newly_resolved, report)

        if draw.two_digit and not Commission.objects.filter(
            draw_label=draw_label
        ).exists():
            report.commissions = CommissionCalculator.calculate(draw_label)
            report.commissions_calculated = True

        cls.get_logger().info(
            "Draw declared",
            extra={
                "draw_label": draw_label,
                "component": component,
                "value": value,
                "state": draw.state,
                "newly_resolved": newly_resolved,
                "bets_resolved": report.bets_resolved,
                "winners": report.winners,
                "commissions_created": len(report.commissions),
            },
        )
        return report

    @classmethod
    def _resolve_bets(
        cls, draw: DrawResult, kinds: list[str], report: SettlementReport
    ) -> None:
        pending = (
            Bet.objects.select_for_update(of=("self",))
            .select_related("account")
            .filter(
                draw_label=draw.draw_label,
                status=BetStatus.PENDING,
                game_kind__in=kinds,
            )
            .order_by("id")
        )
        for bet in pending:
            if bet.number == draw.outcome_for(bet.game_kind):
                bet.win()
                bet.save(update_fields=["status", "settled_at", "updated_at"])
                report.winners += 1
                amount = quantize_money(
                    bet.stake * prize_multiplier(bet.account, bet.game_kind)
                )
                if amount > 0:
                    report.prizes.append(
                        Prize.objects.create(
                            account=bet.account,
                            bet=bet,
                            draw_label=bet.draw_label,
                            amount=amount,
                        )
                    )
                else:
                    # A zero prize could never be released
                    cls.get_logger().info(
                        "Winning wager carries no prize",
                        extra={"bet_id": bet.id, "account_id": bet.account_id},
                    )
            else:
                bet.lose()
                bet.save(update_fields=["status", "settled_at", "updated_at"])
            report.bets_resolved += 1

    # ==========================================================================
    # Read projections
    # ==========================================================================

    @staticmethod
    def list_results() -> QuerySet[DrawResult]:
        """Draw results with at least one declared component, most recent first."""
        return DrawResult.objects.exclude(
            two_digit__isnull=True,
            one_digit_open__isnull=True,
            one_digit_close__isnull=True,
        ).order_by(
            F("declared_at").desc(nulls_last=True),
            F("open_declared_at").desc(nulls_last=True),
            "-created_at",
        )
