"""
Core base model providing common functionality for all domain models.

Base Classes:
    BaseModel: Abstract model with timestamps (created_at, updated_at)

For the prefixed, time-sortable primary key used by every persisted
entity, see core.model_mixins.PrefixedIdMixin.

Usage:
    from core.models import BaseModel
    from core.model_mixins import PrefixedIdMixin

    class Prize(PrefixedIdMixin, BaseModel):
        id_prefix = "prz"
        amount = models.DecimalField(max_digits=16, decimal_places=2)

Note:
    - Always list mixins before BaseModel in inheritance
"""

from __future__ import annotations

from django.db import models


class BaseModel(models.Model):
    """
    Abstract base model providing creation and modification timestamps.

    Fields:
        created_at: Automatically set when the object is first created
        updated_at: Automatically updated whenever the object is saved

    Note:
        Bulk ``QuerySet.update()`` calls do not touch ``updated_at``; pass it
        explicitly when the change matters for auditing.
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="Timestamp when this record was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="Timestamp when this record was last modified",
    )

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(id={self.pk})"
