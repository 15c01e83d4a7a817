"""
Betting-specific exceptions for placement and draw declaration.

Exception Hierarchy:
    DrawClosed (ConflictError) - Wager on an outcome that is already declared
    DrawResultConflict (ConflictError) - Re-declaring a component differently
    BetLimitExceeded (ValidationError) - Stake over a configured bet limit

Usage:
    from betting.exceptions import DrawClosed

    if wager.game_kind in draw.resolved_kinds:
        raise DrawClosed(wager.draw_label, wager.game_kind)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import ConflictError, ValidationError

if TYPE_CHECKING:
    from decimal import Decimal


class DrawClosed(ConflictError):
    """Raised when a wager targets a game kind whose outcome is declared."""

    default_error_code: str = "DRAW_CLOSED"

    def __init__(self, draw_label: str, game_kind: str):
        super().__init__(
            f"{game_kind} results for {draw_label} are already declared",
            details={"draw_label": draw_label, "game_kind": game_kind},
        )


class DrawResultConflict(ConflictError):
    """
    Raised when a declared component is declared again with another value.

    Attributes:
        draw_label: Draw being declared
        component: Field that conflicts (e.g. "two_digit")
        current: Value already stored
        requested: Value in the rejected declaration
    """

    default_error_code: str = "DRAW_RESULT_CONFLICT"

    def __init__(self, draw_label: str, component: str, current: str, requested: str):
        self.draw_label = draw_label
        self.component = component
        self.current = current
        self.requested = requested
        super().__init__(
            f"{component} for {draw_label} is already declared as {current}",
            details={
                "draw_label": draw_label,
                "component": component,
                "current": current,
                "requested": requested,
            },
        )


class BetLimitExceeded(ValidationError):
    """Raised when a stake would exceed one of the account's bet limits."""

    default_error_code: str = "BET_LIMIT_EXCEEDED"

    def __init__(
        self,
        account_id: str,
        limit_name: str,
        limit: Decimal,
        requested: Decimal,
        draw_label: str,
    ):
        super().__init__(
            f"Stake of {requested} on {draw_label} exceeds {limit_name} of {limit}",
            details={
                "account_id": account_id,
                "limit": limit_name,
                "limit_value": str(limit),
                "requested": str(requested),
                "draw_label": draw_label,
            },
        )
