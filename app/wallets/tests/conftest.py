"""
Pytest fixtures for wallet tests.

This module provides accounts in each role and API clients that carry the
trusted identity headers for a given account.

Usage:
    def test_balance(user_client, user):
        response = user_client.get("/api/v1/wallet/balance/")
        assert response.data["account_id"] == user.id
"""

from decimal import Decimal

import pytest
from rest_framework.test import APIClient

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
    """Create an admin account holding 100,000."""
    return AdminAccountFactory(funds=Decimal("100000.00"))


@pytest.fixture
def dealer(db):
    """Create a dealer account holding 5,000."""
    return DealerAccountFactory(funds=Decimal("5000.00"))


@pytest.fixture
def user(db, dealer):
    """Create a user managed by ``dealer`` holding 1,000."""
    return UserAccountFactory(dealer=dealer, funds=Decimal("1000.00"))


@pytest.fixture
def other_dealer(db):
    """Create a second dealer that does not manage ``user``."""
    return DealerAccountFactory(funds=Decimal("5000.00"))


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


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


@pytest.fixture
def admin_client(client_for, admin):
    return client_for(admin)


@pytest.fixture
def dealer_client(client_for, dealer):
    return client_for(dealer)


@pytest.fixture
def user_client(client_for, user):
    return client_for(user)
