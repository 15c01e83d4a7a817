"""
Wallet models: accounts and their append-only ledger.

This module defines the two tables every money movement touches:
- Account: A participant (user, dealer or admin) with a stored balance
- LedgerEntry: One immutable, signed movement on one account

The stored balance is authoritative for sufficiency checks and is only
changed through wallets.services.AccountStore. Every change is paired with
ledger entries in the same transaction, so that for every account:

    account.balance == sum(entry.amount for entry in account.ledger_entries)

Usage:
    from wallets.models import Account, AccountRole, EntryKind, LedgerEntry

    dealer = Account.objects.create(username="dealer1", role=AccountRole.DEALER)
    user = Account.objects.create(
        username="player1",
        role=AccountRole.USER,
        dealer=dealer,
        commission_rate=Decimal("2.00"),
    )
"""

from __future__ import annotations

from django.db import models
from django.db.models import Q

from core.model_mixins import PrefixedIdMixin
from core.models import BaseModel


class AccountRole(models.TextChoices):
    """
    Position of an account in the three-tier hierarchy.

    Values:
        USER: End participant who places wagers
        DEALER: Manages a set of users and funds them
        ADMIN: Platform operator; issues credit and approves payouts
    """

    USER = "user", "User"
    DEALER = "dealer", "Dealer"
    ADMIN = "admin", "Admin"


class EntryKind(models.TextChoices):
    """
    Categories of ledger movements.

    Debits carry a negative amount, credits a positive one. Transfer kinds
    come in pairs (one per side), platform credits are single entries.
    """

    BET_PLACED = "bet_placed", "Bet Placed"
    PRIZE_WON = "prize_won", "Prize Won"
    DEALER_CREDIT = "dealer_credit", "Dealer Credit"
    DEALER_DEBIT_TO_USER = "dealer_debit_to_user", "Dealer Debit To User"
    ADMIN_CREDIT = "admin_credit", "Admin Credit"
    ADMIN_DEBIT_TO_USER = "admin_debit_to_user", "Admin Debit To User"
    ADMIN_DEBIT_FROM_USER = "admin_debit_from_user", "Admin Debit From User"
    ADMIN_CREDIT_FROM_USER = "admin_credit_from_user", "Admin Credit From User"
    COMMISSION_PAYOUT = "commission_payout", "Commission Payout"
    TOP_UP_APPROVED = "top_up_approved", "Top-Up Approved"
    COMMISSION_REBATE = "commission_rebate", "Commission Rebate"


class Account(PrefixedIdMixin, BaseModel):
    """
    A participant holding a non-negative balance.

    Fields:
        id: Prefixed id ("acc_...")
        username: Unique login name (credentials live upstream)
        role: user, dealer or admin
        balance: Current balance; never negative
        dealer: Managing dealer (users only)
        is_blocked: Blocked accounts may not place wagers
        bet_limit_per_draw: Maximum total stake per draw label
        bet_limit_2d: Maximum two-digit stake per draw label
        bet_limit_1d: Maximum one-digit stake per draw label
        commission_rate: Percent of stake paid as commission (dealers)
            or rebate (users) once a draw's two-digit result is known
        prize_rate_2d: Payout multiplier for winning two-digit wagers
        prize_rate_1d: Payout multiplier for winning one-digit wagers

    Constraints:
        - balance >= 0 (also enforced by AccountStore before writing)

    Note:
        Rates left empty fall back to BETTING_DEFAULT_PRIZE_RATE_2D and
        BETTING_DEFAULT_PRIZE_RATE_1D.
    """

    id_prefix = "acc"

    username = models.CharField(
        max_length=150,
        unique=True,
        help_text="Unique login name",
    )
    role = models.CharField(
        max_length=10,
        choices=AccountRole.choices,
        default=AccountRole.USER,
        db_index=True,
        help_text="Position in the account hierarchy",
    )
    balance = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        default=0,
        help_text="Current balance (mutated only through AccountStore)",
    )
    dealer = models.ForeignKey(
        "self",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="managed_users",
        help_text="Dealer managing this user",
    )
    is_blocked = models.BooleanField(
        default=False,
        help_text="Blocked accounts may not place wagers",
    )

    # ==========================================================================
    # Limits
    # ==========================================================================

    bet_limit_per_draw = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Maximum total stake per draw (empty for no limit)",
    )
    bet_limit_2d = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Maximum two-digit stake per draw (empty for no limit)",
    )
    bet_limit_1d = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Maximum one-digit stake per draw (empty for no limit)",
    )

    # ==========================================================================
    # Rates
    # ==========================================================================

    commission_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=0,
        help_text="Commission (dealer) or rebate (user) percentage",
    )
    prize_rate_2d = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Two-digit payout multiplier (empty for platform default)",
    )
    prize_rate_1d = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="One-digit payout multiplier (empty for platform default)",
    )

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(balance__gte=0),
                name="wallet_account_balance_non_negative",
            ),
            models.CheckConstraint(
                condition=Q(commission_rate__gte=0) & Q(commission_rate__lte=100),
                name="wallet_account_commission_rate_percent",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class LedgerEntry(PrefixedIdMixin, models.Model):
    """
    One immutable, signed movement on one account.

    Entries are append-only: corrections are new entries, never edits.

    Fields:
        id: Prefixed id ("txn_...")
        account: Account whose balance moved
        amount: Signed, non-zero amount (negative for debits)
        kind: Movement category (EntryKind)
        related_entity_id: Wager id, counterparty account id, draw label or
            staged payout id this movement refers to
        balance_after: Account balance right after this movement
        description: Human-readable note
        created_at: When the entry was recorded

    Constraints:
        - amount != 0
    """

    id_prefix = "txn"

    account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="ledger_entries",
        help_text="Account whose balance moved",
    )
    amount = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        help_text="Signed amount (negative for debits)",
    )
    kind = models.CharField(
        max_length=30,
        choices=EntryKind.choices,
        db_index=True,
        help_text="Category of this movement",
    )
    related_entity_id = models.CharField(
        max_length=100,
        null=True,
        blank=True,
        db_index=True,
        help_text="Id of the wager, counterparty, draw or payout involved",
    )
    balance_after = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        help_text="Account balance right after this movement",
    )
    description = models.CharField(
        max_length=255,
        blank=True,
        default="",
        help_text="Human-readable description",
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="Timestamp when this entry was recorded",
    )

    class Meta:
        ordering = ["-created_at", "-id"]
        verbose_name_plural = "ledger entries"
        indexes = [
            models.Index(
                fields=["account", "created_at"],
                name="wallet_entry_acct_created_idx",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=~Q(amount=0),
                name="wallet_ledger_entry_amount_non_zero",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.get_kind_display()}: {self.amount} ({self.account_id})"

    def save(self, *args, **kwargs) -> None:
        if not self._state.adding:
            raise ValueError("Ledger entries are append-only")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Ledger entries are append-only")
