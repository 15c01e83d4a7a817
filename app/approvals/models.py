"""
Approval models.

Models:
- TopUpRequest: A dealer's request for platform credit

Prizes and commissions live in the betting app; this app only releases
them.
"""

from __future__ import annotations

from django.db import models
from django.db.models import Q

from approvals.states import TopUpStatus
from core.model_mixins import PrefixedIdMixin
from core.models import BaseModel


class TopUpRequest(PrefixedIdMixin, BaseModel):
    """
    A dealer's request for platform credit, approved or rejected by an admin.

    Fields:
        id: Prefixed id ("tpr_...")
        dealer: Requesting dealer
        amount: Requested credit
        reference: Free-text reference (e.g. a bank transfer id)
        status: pending, approved or rejected
        approved_at: When the credit was released
        rejected_at: When the request was rejected
        processed_by: Admin account that approved or rejected it
    """

    id_prefix = "tpr"

    dealer = models.ForeignKey(
        "wallets.Account",
        on_delete=models.PROTECT,
        related_name="top_up_requests",
        help_text="Dealer requesting credit",
    )
    amount = models.DecimalField(
        max_digits=16,
        decimal_places=2,
        help_text="Requested credit",
    )
    reference = models.CharField(
        max_length=255,
        blank=True,
        default="",
        help_text="Free-text payment reference",
    )
    status = models.CharField(
        max_length=10,
        choices=TopUpStatus.choices,
        default=TopUpStatus.PENDING,
        db_index=True,
    )
    approved_at = models.DateTimeField(null=True, blank=True)
    rejected_at = models.DateTimeField(null=True, blank=True)
    processed_by = models.CharField(max_length=40, null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=Q(amount__gt=0),
                name="approvals_top_up_amount_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"Top-up {self.amount} for {self.dealer_id} ({self.status})"
