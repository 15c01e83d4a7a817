"""
Betting models: wagers, draw results and staged payouts.

Models:
- Bet: One staked prediction on a draw label for one game kind
- DrawResult: Declared outcome components of a draw label
- Prize: Pending-then-approved payout for a winning bet
- Commission: Dealer commission (staged) or user rebate (credited at once)

Usage:
    from betting.models import Bet
    from betting.states import BetStatus

    bet.win()   # pending -> won (django-fsm)
    bet.save()
"""

from __future__ import annotations

from django.db import models
from django.db.models import Q
from django.utils import timezone
from django_fsm import FSMField, transition

from betting.states import (
    BetStatus,
    DrawState,
    GameKind,
    PayoutStatus,
    RecipientType,
)
from core.model_mixins import PrefixedIdMixin
from core.models import BaseModel

# Draw component holding the outcome of each game kind
OUTCOME_FIELD = {
    GameKind.TWO_DIGIT: "two_digit",
    GameKind.ONE_DIGIT_OPEN: "one_digit_open",
    GameKind.ONE_DIGIT_CLOSE: "one_digit_close",
}


class Bet(PrefixedIdMixin, BaseModel):
    """
    A single staked prediction on a draw's outcome.

    State Flow:
        PENDING -> WON
        PENDING -> LOST

    Fields:
        id: Prefixed id ("bet_...")
        account: Wagering user
        draw_label: "{YYYY-MM-DD}-{gameName}", the join key with DrawResult
        game_kind: 2D, 1D-Open or 1D-Close
        number: Predicted digits (two for 2D, one otherwise)
        stake: Amount debited when the bet was placed
        status: Current FSM state
        settled_at: When the bet was resolved
    """

    id_prefix = "bet"

    account = models.ForeignKey(
        "wallets.Account",
        on_delete=models.PROTECT,
        related_name="bets",
        help_text="Account that placed the wager",
    )
    draw_label = models.CharField(
        max_length=100,
        db_index=True,
        help_text="Draw label, e.g. 2024-01-01-GameX",
    )
    game_kind = models.CharField(
        max_length=10,
        choices=GameKind.choices,
        help_text="Outcome component this wager predicts",
    )
    number = models.CharField(
        max_length=2,
        help_text="Predicted digits",
    )
    stake = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        help_text="Amount staked",
    )
    status = FSMField(
        default=BetStatus.PENDING,
        choices=BetStatus.choices,
        db_index=True,
        help_text="Current state of the wager (managed by FSM)",
    )
    settled_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the wager was resolved",
    )

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["draw_label", "status", "game_kind"],
                name="betting_bet_draw_status_idx",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(stake__gt=0),
                name="betting_bet_stake_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.game_kind} {self.number} on {self.draw_label} ({self.status})"

    # ==========================================================================
    # State Transitions
    # ==========================================================================

    @transition(field=status, source=BetStatus.PENDING, target=BetStatus.WON)
    def win(self) -> None:
        """Mark the wager as won. Caller must save."""
        self.settled_at = timezone.now()

    @transition(field=status, source=BetStatus.PENDING, target=BetStatus.LOST)
    def lose(self) -> None:
        """Mark the wager as lost. Caller must save."""
        self.settled_at = timezone.now()


class DrawResult(PrefixedIdMixin, BaseModel):
    """
    Declared outcome of one draw label.

    Components arrive independently: the two-digit outcome at once, or the
    open and close digits separately. Once both halves are known the
    two-digit outcome is derived from them.

    Fields:
        id: Prefixed id ("drw_...")
        draw_label: Unique draw label
        two_digit: Two-digit outcome
        one_digit_open: First digit
        one_digit_close: Second digit
        declared_at: When the two-digit outcome became known
        open_declared_at: When the open digit became known
        close_declared_at: When the close digit became known
    """

    id_prefix = "drw"

    draw_label = models.CharField(
        max_length=100,
        unique=True,
        help_text="Draw label, e.g. 2024-01-01-GameX",
    )
    two_digit = models.CharField(max_length=2, null=True, blank=True)
    one_digit_open = models.CharField(max_length=1, null=True, blank=True)
    one_digit_close = models.CharField(max_length=1, null=True, blank=True)
    declared_at = models.DateTimeField(null=True, blank=True)
    open_declared_at = models.DateTimeField(null=True, blank=True)
    close_declared_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.draw_label}: {self.two_digit or '--'}"

    @property
    def state(self) -> str:
        if self.two_digit:
            return DrawState.FULLY_DECLARED
        if self.one_digit_open or self.one_digit_close:
            return DrawState.PARTIALLY_DECLARED
        return DrawState.NO_RESULT

    def outcome_for(self, game_kind: str) -> str | None:
        """Declared outcome component for a game kind, or None."""
        return getattr(self, OUTCOME_FIELD[game_kind])

    @property
    def resolved_kinds(self) -> set[str]:
        """Game kinds whose outcome is already declared."""
        return {
            kind for kind, field in OUTCOME_FIELD.items() if getattr(self, field)
        }


class Prize(PrefixedIdMixin, BaseModel):
    """
    Staged payout for a winning wager.

    Created pending at settlement; released once by ApprovalService, which
    credits the recipient and records a prize_won entry referencing it.

    Fields:
        id: Prefixed id ("prz_...")
        account: Recipient
        bet: Winning wager (one prize per bet)
        draw_label: Draw the wager was on
        amount: stake x prize multiplier
        status: pending or approved
        approved_at: When the prize was released
        approved_by: Admin account that released it
    """

    id_prefix = "prz"

    account = models.ForeignKey(
        "wallets.Account",
        on_delete=models.PROTECT,
        related_name="prizes",
    )
    bet = models.OneToOneField(
        Bet,
        on_delete=models.PROTECT,
        related_name="prize",
    )
    draw_label = models.CharField(max_length=100, db_index=True)
    amount = models.DecimalField(max_digits=16, decimal_places=2)
    status = models.CharField(
        max_length=10,
        choices=PayoutStatus.choices,
        default=PayoutStatus.PENDING,
        db_index=True,
    )
    approved_at = models.DateTimeField(null=True, blank=True)
    approved_by = models.CharField(max_length=40, null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Prize {self.amount} for {self.bet_id} ({self.status})"


class Commission(PrefixedIdMixin, BaseModel):
    """
    Per-draw commission (dealer) or rebate (user).

    Dealer commissions are created pending and released by
    ApprovalService. User rebates are credited at settlement and stored
    already approved. Any Commission row for a draw label marks that
    draw's commissions as calculated.

    Fields:
        id: Prefixed id ("com_...")
        account: Recipient
        recipient_type: dealer or user
        draw_label: Settled draw
        total_stake: Stake aggregated for the recipient
        rate: Percentage applied
        amount: total_stake x rate / 100
        status: pending or approved
        approved_at: When the payout was released
        approved_by: Admin account that released it (dealer commissions)
    """

    id_prefix = "com"

    account = models.ForeignKey(
        "wallets.Account",
        on_delete=models.PROTECT,
        related_name="commissions",
    )
    recipient_type = models.CharField(
        max_length=10,
        choices=RecipientType.choices,
    )
    draw_label = models.CharField(max_length=100, db_index=True)
    total_stake = models.DecimalField(max_digits=16, decimal_places=2)
    rate = models.DecimalField(max_digits=5, decimal_places=2)
    amount = models.DecimalField(max_digits=16, decimal_places=2)
    status = models.CharField(
        max_length=10,
        choices=PayoutStatus.choices,
        default=PayoutStatus.PENDING,
        db_index=True,
    )
    approved_at = models.DateTimeField(null=True, blank=True)
    approved_by = models.CharField(max_length=40, null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["draw_label", "account"],
                name="betting_commission_once_per_draw",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.get_recipient_type_display()} commission {self.amount} ({self.status})"
