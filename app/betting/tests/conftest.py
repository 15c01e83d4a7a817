"""
Pytest fixtures for betting tests.

Accounts are funded through the ledger so that every test can also check
balances against ledger totals. ``place`` and ``declare`` wrap the services
and fail the test on an unexpected failure result.

Usage:
    def test_winner(user, place, declare):
        place(user, ("2D", "47", "300"))
        report = declare(two_digit="47")
        assert report.winners == 1
"""

from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from betting.services import BetPlacementService, DrawSettlementService
from betting.tests.factories import DRAW_LABEL
from betting.types import WagerRequest
from wallets.tests.factories import (
    AdminAccountFactory,
    DealerAccountFactory,
    UserAccountFactory,
)


# =============================================================================
# Account Fixtures
# =============================================================================


@pytest.fixture
def admin(db):
    """Create an admin account."""
    return AdminAccountFactory()


@pytest.fixture
def dealer(db):
    """Create a dealer without commission holding 5,000."""
    return DealerAccountFactory(funds=Decimal("5000.00"))


@pytest.fixture
def user(db, dealer):
    """Create a user managed by ``dealer`` holding 1,000."""
    return UserAccountFactory(dealer=dealer, funds=Decimal("1000.00"))


@pytest.fixture
def commission_dealer(db):
    """Create a dealer earning 5% commission on managed users' stakes."""
    return DealerAccountFactory(commission_rate=Decimal("5.00"))


@pytest.fixture
def rebate_user(db, commission_dealer):
    """Create a user with a 2% rebate managed by ``commission_dealer``."""
    return UserAccountFactory(
        dealer=commission_dealer,
        commission_rate=Decimal("2.00"),
        funds=Decimal("1000.00"),
    )


# =============================================================================
# Service Helpers
# =============================================================================


@pytest.fixture
def place():
    """Place wagers given as (game_kind, number, stake) tuples."""

    def make(account, *wagers, draw_label=DRAW_LABEL):
        result = BetPlacementService.place_bets(
            account.id,
            [
                WagerRequest(draw_label, kind, number, Decimal(stake))
                for kind, number, stake in wagers
            ],
        )
        assert result.success, result.to_response()
        return result.data

    return make


@pytest.fixture
def declare():
    """Declare one component of a draw and return the SettlementReport."""

    def make(draw_label=DRAW_LABEL, **component):
        result = DrawSettlementService.declare_draw(draw_label, **component)
        assert result.success, result.to_response()
        return result.data

    return make


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def client_for():
    """Return a factory building an API client authenticated as an account."""

    def make(account):
        client = APIClient()
        client.credentials(
            HTTP_X_ACCOUNT_ID=account.id,
            HTTP_X_ACCOUNT_ROLE=account.role,
        )
        return client

    return make
