"""
State and kind enums for the approval workflow.

Top-Up States:
    pending → approved (dealer credited)
    pending → rejected (no money moves)
"""

from django.db import models


class TopUpStatus(models.TextChoices):
    """
    States for a dealer top-up request.

    Terminal states: APPROVED, REJECTED
    """

    PENDING = "pending", "Pending"
    APPROVED = "approved", "Approved"
    REJECTED = "rejected", "Rejected"


class RecordKind(models.TextChoices):
    """Kinds of staged records the approval workflow can release."""

    PRIZE = "prize", "Prize"
    COMMISSION = "commission", "Commission"
    TOP_UP = "top_up", "Top-Up"
