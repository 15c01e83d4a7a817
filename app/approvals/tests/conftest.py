"""
Pytest fixtures for approval tests.

Provides an admin, staged records in the pending state and an API client
factory carrying the trusted identity headers.
"""

import pytest
from rest_framework.test import APIClient

from approvals.tests.factories import TopUpRequestFactory
from betting.tests.factories import CommissionFactory, PrizeFactory
from wallets.tests.factories import AdminAccountFactory


@pytest.fixture
def admin(db):
    """Create an admin account."""
    return AdminAccountFactory()


@pytest.fixture
def prize(db):
    """Create a pending prize of 25,500 for a user with no balance."""
    return PrizeFactory()


@pytest.fixture
def commission(db):
    """Create a pending dealer commission of 50."""
    return CommissionFactory()


@pytest.fixture
def top_up(db):
    """Create a pending top-up request of 1,000."""
    return TopUpRequestFactory()


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
