"""
State and kind enums for betting models.

These are Django TextChoices for database storage and admin integration.
Bet status is driven by django-fsm transitions; payout status changes only
through the conditional claim in approvals.services.

State Machines Overview:

Bet States:
    pending → won
    pending → lost

Payout States (Prize, Commission):
    pending → approved

Draw States (derived from the declared components):
    no_result → partially_declared → fully_declared
"""

from django.db import models


class GameKind(models.TextChoices):
    """
    What a wager predicts.

    Values:
        TWO_DIGIT: The full two-digit outcome ("47")
        ONE_DIGIT_OPEN: The first digit ("4")
        ONE_DIGIT_CLOSE: The second digit ("7")
    """

    TWO_DIGIT = "2D", "Two Digit"
    ONE_DIGIT_OPEN = "1D-Open", "One Digit Open"
    ONE_DIGIT_CLOSE = "1D-Close", "One Digit Close"


class BetStatus(models.TextChoices):
    """
    States for the Bet lifecycle.

    Terminal states: WON, LOST

    State Flow:
        PENDING → WON   (number matches the declared outcome)
        PENDING → LOST  (number differs)
    """

    PENDING = "pending", "Pending"
    WON = "won", "Won"
    LOST = "lost", "Lost"


class PayoutStatus(models.TextChoices):
    """
    States for staged payouts (Prize, Commission).

    State Flow:
        PENDING → APPROVED (credited exactly once)
    """

    PENDING = "pending", "Pending"
    APPROVED = "approved", "Approved"


class RecipientType(models.TextChoices):
    """Who a Commission row pays: a dealer commission or a user rebate."""

    DEALER = "dealer", "Dealer"
    USER = "user", "User"


class DrawState(models.TextChoices):
    """
    Declaration progress of a draw label.

    Values:
        NO_RESULT: Nothing declared yet
        PARTIALLY_DECLARED: Only one one-digit half is known
        FULLY_DECLARED: The two-digit outcome (and both halves) are known
    """

    NO_RESULT = "no_result", "No Result"
    PARTIALLY_DECLARED = "partially_declared", "Partially Declared"
    FULLY_DECLARED = "fully_declared", "Fully Declared"
