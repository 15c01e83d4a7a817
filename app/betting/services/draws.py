"""
Draw row locking shared by placement and settlement.

Both paths lock the DrawResult row of every draw they touch, creating it
when missing, so a wager and a declaration on the same draw always
serialize on that row. Rows are locked in ascending label order before any
account row.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import IntegrityError, transaction

from betting.models import DrawResult

if TYPE_CHECKING:
    from collections.abc import Iterable


def lock_draw(draw_label: str) -> DrawResult:
    """Lock the draw row, creating an undeclared one if none exists."""
    draw = DrawResult.objects.select_for_update().filter(draw_label=draw_label).first()
    if draw is not None:
        return draw
    try:
        with transaction.atomic():
            return DrawResult.objects.create(draw_label=draw_label)
    except IntegrityError:
        # Created concurrently; wait for that transaction's lock
        return DrawResult.objects.select_for_update().get(draw_label=draw_label)


def lock_draws(draw_labels: Iterable[str]) -> dict[str, DrawResult]:
    """Lock several draw rows in ascending label order."""
    return {label: lock_draw(label) for label in sorted(set(draw_labels))}
