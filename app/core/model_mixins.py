"""
Model mixins providing reusable functionality for Django models.

Available Mixins:
    PrefixedIdMixin: Prefixed, time-sortable string primary key

Usage:
    from core.models import BaseModel
    from core.model_mixins import PrefixedIdMixin

    class Bet(PrefixedIdMixin, BaseModel):
        id_prefix = "bet"

    bet = Bet.objects.create(...)
    bet.id  # "bet_0lzq3v8k2f1x9a0mbq"

Note:
    - Always list mixins before BaseModel in inheritance
    - Mixins are abstract and don't create database tables
"""

from __future__ import annotations

from django.db import models

from core.helpers import generate_id


class PrefixedIdMixin(models.Model):
    """
    Use a prefixed, time-sortable string as primary key.

    The id is assigned on first save from ``id_prefix`` (see
    core.helpers.generate_id). Lexical order of ids matches creation
    order, which gives a deterministic order for row locks.

    Fields:
        id: CharField primary key, e.g. "acc_0lzq3v8k2f1x9a0mbq"

    Note:
        ``QuerySet.bulk_create()`` bypasses save(); assign ids explicitly
        when bulk inserting.
    """

    id_prefix: str = "obj"

    id = models.CharField(
        primary_key=True,
        max_length=40,
        editable=False,
        help_text="Prefixed, time-sortable identifier",
    )

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        if not self.id:
            self.id = generate_id(self.id_prefix)
        super().save(*args, **kwargs)
