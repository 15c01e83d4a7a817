"""
Data types for betting operations.

Types:
    WagerRequest: One wager as submitted for placement
    SettlementReport: Outcome of one draw declaration
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from betting.models import Commission, DrawResult, Prize


@dataclass(frozen=True)
class WagerRequest:
    """
    One wager as submitted for placement.

    Attributes:
        draw_label: "{YYYY-MM-DD}-{gameName}"
        game_kind: GameKind value
        number: Predicted digits
        stake: Positive amount, at most two decimal places
    """

    draw_label: str
    game_kind: str
    number: str
    stake: Decimal

    @classmethod
    def from_dict(cls, data: dict) -> WagerRequest:
        return cls(
            draw_label=data.get("draw_label"),
            game_kind=data.get("game_kind"),
            number=data.get("number"),
            stake=data.get("stake"),
        )


@dataclass
class SettlementReport:
    """
    Outcome of one draw declaration.

    Attributes:
        draw: The DrawResult after the declaration
        newly_resolved: Game kinds resolved by this declaration
        bets_resolved: Pending wagers moved to won or lost
        winners: Wagers moved to won
        prizes: Pending prizes created for the winners
        commissions: Commission rows created (empty when the gate was closed)
        commissions_calculated: Whether the commission step ran
    """

    draw: DrawResult
    newly_resolved: list[str] = field(default_factory=list)
    bets_resolved: int = 0
    winners: int = 0
    prizes: list[Prize] = field(default_factory=list)
    commissions: list[Commission] = field(default_factory=list)
    commissions_calculated: bool = False
