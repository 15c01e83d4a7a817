"""
Bet placement service: debits stakes and records pending wagers.

A placement request may carry several wagers. They are validated up front,
then placed together in one atomic unit of work: either every wager is
stored with its bet_placed ledger entry and the balance drops by the total
stake, or nothing is written at all.

Usage:
    from betting.services import BetPlacementService
    from betting.types import WagerRequest

    result = BetPlacementService.place_bets(
        user.id,
        [WagerRequest("2024-01-01-GameX", GameKind.TWO_DIGIT, "47", Decimal("300"))],
    )
    if result.success:
        bets = result.data
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import TYPE_CHECKING

from django.db.models import Sum

from betting.exceptions import BetLimitExceeded, DrawClosed
from betting.models import Bet
from betting.services.draws import lock_draws
from betting.states import GameKind
from betting.types import WagerRequest
from betting.validators import (
    validate_draw_label,
    validate_game_kind,
    validate_number,
    validate_stake,
)
from core.exceptions import (
    BaseApplicationError,
    PermissionDeniedError,
    ValidationError,
)
from core.services import BaseService, ServiceResult
from wallets.exceptions import AccountBlocked, InsufficientFunds
from wallets.models import Account, AccountRole, EntryKind
from wallets.services import AccountStore, LedgerRecorder

if TYPE_CHECKING:
    from collections.abc import Iterable

    from django.db.models import QuerySet


def _category(game_kind: str) -> str:
    return "2d" if game_kind == GameKind.TWO_DIGIT else "1d"


class BetPlacementService(BaseService):
    """
    Placement of wagers and read projections over them.

    Methods:
        place_bets: Validate and place a batch of wagers atomically
        bet_history: Wagers of one account, newest first
        bets_for_dealer: Wagers of every user a dealer manages
    """

    @classmethod
    def place_bets(
        cls,
        user_id: str,
        wagers: Iterable[WagerRequest | dict],
    ) -> ServiceResult[list[Bet]]:
        """
        Place a batch of wagers for one user.

        Args:
            user_id: Wagering account (role user)
            wagers: WagerRequest objects (or dicts with the same keys)

        Returns:
            ServiceResult with the created Bets on success. Failure kinds:
            INVALID_INPUT (malformed wager, bet limit), NOT_FOUND,
            PERMISSION_DENIED (blocked or not a user), CONFLICT (outcome
            already declared), INSUFFICIENT_FUNDS, STORAGE_ERROR.
        """
        requests = [
            wager if isinstance(wager, WagerRequest) else WagerRequest.from_dict(wager)
            for wager in wagers
        ]
        if not requests:
            return ServiceResult.success([])

        try:
            requests = [cls._validate(wager) for wager in requests]
        except ValidationError as exc:
            cls.get_logger().warning(
                "Rejected malformed wager",
                extra={"user_id": user_id, "error_code": exc.error_code},
            )
            return ServiceResult.from_exception(exc)

        return cls.run_atomic(cls._place, user_id, requests)

    @staticmethod
    def _validate(wager: WagerRequest) -> WagerRequest:
        validate_draw_label(wager.draw_label)
        validate_game_kind(wager.game_kind)
        validate_number(wager.game_kind, wager.number)
        return WagerRequest(
            draw_label=wager.draw_label,
            game_kind=wager.game_kind,
            number=wager.number,
            stake=validate_stake(wager.stake),
        )

    @classmethod
    def _place(
        cls, user_id: str, wagers: list[WagerRequest]
    ) -> ServiceResult[list[Bet]]:
        labels = {wager.draw_label for wager in wagers}
        closed = cls._closed_kinds(labels)
        user = AccountStore.lock_account(user_id)

        if user.role != AccountRole.USER:
            return cls._reject(
                PermissionDeniedError(
                    "Only user accounts can place wagers",
                    error_code="BETTING_NOT_ALLOWED",
                    details={"account_id": user.id, "role": user.role},
                )
            )
        if user.is_blocked:
            return cls._reject(
                AccountBlocked(
                    "Account is blocked and cannot place wagers",
                    details={"account_id": user.id},
                )
            )

        for wager in wagers:
            if wager.game_kind in closed.get(wager.draw_label, ()):
                return cls._reject(DrawClosed(wager.draw_label, wager.game_kind))

        limit_error = cls._check_limits(user, wagers)
        if limit_error is not None:
            return cls._reject(limit_error)

        total = sum((wager.stake for wager in wagers), Decimal("0"))
        if user.balance < total:
            return cls._reject(
                InsufficientFunds(user.id, required=total, available=user.balance)
            )

        running = user.balance
        bets = []
        for wager in wagers:
            bet = Bet.objects.create(
                account=user,
                draw_label=wager.draw_label,
                game_kind=wager.game_kind,
                number=wager.number,
                stake=wager.stake,
            )
            running -= wager.stake
            LedgerRecorder.record(
                user.id,
                -wager.stake,
                EntryKind.BET_PLACED,
                related_entity_id=bet.id,
                balance_after=running,
                description=f"{wager.game_kind} {wager.number} on {wager.draw_label}",
            )
            bets.append(bet)

        AccountStore.apply_delta(user.id, -total)

        cls.get_logger().info(
            "Wagers placed",
            extra={
                "user_id": user.id,
                "count": len(bets),
                "total_stake": str(total),
                "draw_labels": sorted(labels),
            },
        )
        return ServiceResult.success(bets)

    @classmethod
    def _reject(cls, exc: BaseApplicationError) -> ServiceResult[list[Bet]]:
        cls.get_logger().warning(
            "Wager placement rejected",
            extra={"error_code": exc.error_code, "kind": exc.kind, "details": exc.details},
        )
        return ServiceResult.from_exception(exc)

    @staticmethod
    def _closed_kinds(labels: set[str]) -> dict[str, set[str]]:
        """
        Lock the draws being wagered on and report their declared kinds.

        Missing draw rows are created so that a declaration arriving
        meanwhile waits for this placement. Draw rows are locked before the
        account, matching the lock order of DrawSettlementService.declare_draw.
        """
        return {
            label: draw.resolved_kinds for label, draw in lock_draws(labels).items()
        }

    @staticmethod
    def _check_limits(
        user: Account, wagers: list[WagerRequest]
    ) -> BetLimitExceeded | None:
        """
        Compare already-staked plus requested stake with the account limits.

        A limit that is empty or zero means no limit.
        """
        limits = {
            "bet_limit_per_draw": user.bet_limit_per_draw,
            "bet_limit_2d": user.bet_limit_2d,
            "bet_limit_1d": user.bet_limit_1d,
        }
        if not any(limit for limit in limits.values()):
            return None

        requested: dict[tuple[str, str | None], Decimal] = defaultdict(Decimal)
        for wager in wagers:
            requested[(wager.draw_label, None)] += wager.stake
            requested[(wager.draw_label, _category(wager.game_kind))] += wager.stake

        staked: dict[tuple[str, str | None], Decimal] = defaultdict(Decimal)
        rows = (
            Bet.objects.filter(
                account_id=user.id,
                draw_label__in={label for label, _ in requested},
            )
            .values("draw_label", "game_kind")
            .annotate(total=Sum("stake"))
        )
        for row in rows:
            staked[(row["draw_label"], None)] += row["total"]
            staked[(row["draw_label"], _category(row["game_kind"]))] += row["total"]

        for (label, category), amount in requested.items():
            limit_name = (
                "bet_limit_per_draw" if category is None else f"bet_limit_{category}"
            )
            limit = limits[limit_name]
            if limit and staked[(label, category)] + amount > limit:
                return BetLimitExceeded(
                    user.id,
                    limit_name,
                    limit,
                    requested=staked[(label, category)] + amount,
                    draw_label=label,
                )
        return None

    # ==========================================================================
    # Read projections
    # ==========================================================================

    @staticmethod
    def bet_history(
        account_id: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> QuerySet[Bet]:
        """Wagers of one account, newest first."""
        queryset = Bet.objects.filter(account_id=account_id).order_by(
            "-created_at", "-id"
        )
        if limit is not None:
            return queryset[offset : offset + limit]
        if offset:
            return queryset[offset:]
        return queryset

    @staticmethod
    def bets_for_dealer(dealer_id: str) -> QuerySet[Bet]:
        """Wagers of every user managed by a dealer, newest first."""
        return (
            Bet.objects.filter(account__dealer_id=dealer_id)
            .select_related("account")
            .order_by("-created_at", "-id")
        )
