"""
Betting services.

Services:
    BetPlacementService: Places wagers and debits stakes
    DrawSettlementService: Declares outcomes and resolves wagers
    CommissionCalculator: Creates rebates and dealer commissions for a draw
"""

from betting.services.commissions import CommissionCalculator
from betting.services.placement import BetPlacementService
from betting.services.settlement import DrawSettlementService

__all__ = [
    "BetPlacementService",
    "CommissionCalculator",
    "DrawSettlementService",
]
