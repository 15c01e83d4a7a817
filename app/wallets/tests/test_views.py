"""
API tests for wallet endpoints.

Test Classes:
    TestBalance: Tests for GET /api/v1/wallet/balance/
    TestTransactions: Tests for GET /api/v1/wallet/transactions/
    TestTransfers: Tests for POST /api/v1/wallet/transfers/
    TestOpenAccount: Tests for POST /api/v1/wallet/accounts/
    TestAccountSettings: Tests for PATCH /api/v1/wallet/accounts/{id}/settings/
"""

from decimal import Decimal

import pytest
from django.urls import reverse
from rest_framework import status

from wallets.models import Account, AccountRole
from wallets.services import AccountStore


@pytest.mark.django_db
class TestBalance:
    def test_returns_own_balance(self, user_client, user):
        response = user_client.get(reverse("wallets:balance"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["account_id"] == user.id
        assert Decimal(response.data["balance"]) == Decimal("1000.00")

    def test_requires_identity(self, api_client):
        response = api_client.get(reverse("wallets:balance"))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_unknown_account(self, api_client):
        api_client.credentials(HTTP_X_ACCOUNT_ID="acc_ghost", HTTP_X_ACCOUNT_ROLE="user")

        response = api_client.get(reverse("wallets:balance"))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["kind"] == "NOT_FOUND"


@pytest.mark.django_db
class TestTransactions:
    def test_lists_own_entries(self, user_client, user, dealer):
        response = user_client.get(reverse("wallets:transactions"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["count"] == 1
        entry = response.data["results"][0]
        assert entry["kind"] == "admin_credit"
        assert Decimal(entry["balance_after"]) == Decimal("1000.00")


@pytest.mark.django_db
class TestTransfers:
    """
    Tests for POST /api/v1/wallet/transfers/.

    Verifies:
    - The caller always fills one side of the transfer
    - Role rules per transfer kind
    - Failure kinds map to HTTP statuses
    """

    url = "/api/v1/wallet/transfers/"

    def test_dealer_funds_managed_user(self, dealer_client, dealer, user):
        response = dealer_client.post(
            self.url,
            {"kind": "dealer_to_user", "account_id": user.id, "amount": "250.00"},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["from_account_id"] == dealer.id
        assert Decimal(response.data["to_balance"]) == Decimal("1250.00")

    def test_insufficient_funds_is_400(self, dealer_client, user):
        response = dealer_client.post(
            self.url,
            {"kind": "dealer_to_user", "account_id": user.id, "amount": "9999.00"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["kind"] == "INSUFFICIENT_FUNDS"

    def test_unmanaged_user_is_404(self, client_for, other_dealer, user):
        response = client_for(other_dealer).post(
            self.url,
            {"kind": "dealer_to_user", "account_id": user.id, "amount": "1.00"},
            format="json",
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_dealer_cannot_send_admin_transfer(self, dealer_client, user):
        response = dealer_client.post(
            self.url,
            {"kind": "admin_to_user", "account_id": user.id, "amount": "1.00"},
            format="json",
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_admin_pulls_funds_back(self, admin_client, admin, user):
        response = admin_client.post(
            self.url,
            {"kind": "user_to_admin", "account_id": user.id, "amount": "100.00"},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["from_account_id"] == user.id
        assert response.data["to_account_id"] == admin.id
        assert AccountStore.get_balance(user.id) == Decimal("900.00")

    def test_users_cannot_transfer(self, user_client, dealer):
        response = user_client.post(
            self.url,
            {"kind": "user_to_admin", "account_id": dealer.id, "amount": "1.00"},
            format="json",
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_malformed_payload(self, dealer_client):
        response = dealer_client.post(
            self.url, {"kind": "dealer_to_user"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "account_id" in response.data


@pytest.mark.django_db
class TestOpenAccount:
    url = "/api/v1/wallet/accounts/"

    def test_dealer_opens_user_under_self(self, dealer_client, dealer):
        response = dealer_client.post(
            self.url,
            {"username": "fresh", "initial_deposit": "100.00"},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["dealer"] == dealer.id
        assert Decimal(response.data["balance"]) == Decimal("100.00")

    def test_dealer_cannot_open_dealer(self, dealer_client):
        response = dealer_client.post(
            self.url, {"username": "rival", "role": "dealer"}, format="json"
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Account.objects.filter(username="rival").exists()

    def test_admin_opens_dealer(self, admin_client):
        response = admin_client.post(
            self.url,
            {"username": "newdealer", "role": "dealer", "commission_rate": "5.00"},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["role"] == AccountRole.DEALER

    def test_username_taken_is_409(self, admin_client, user):
        response = admin_client.post(
            self.url,
            {"username": user.username, "dealer_id": user.dealer_id},
            format="json",
        )

        assert response.status_code == status.HTTP_409_CONFLICT


@pytest.mark.django_db
class TestAccountSettings:
    def test_admin_blocks_user(self, admin_client, user):
        url = reverse("wallets:account-settings", args=[user.id])

        response = admin_client.patch(url, {"is_blocked": True}, format="json")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["is_blocked"] is True

    def test_dealer_cannot_change_settings(self, dealer_client, user):
        url = reverse("wallets:account-settings", args=[user.id])

        response = dealer_client.patch(url, {"is_blocked": True}, format="json")

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_unknown_account_is_404(self, admin_client):
        url = reverse("wallets:account-settings", args=["acc_ghost"])

        response = admin_client.patch(url, {"is_blocked": True}, format="json")

        assert response.status_code == status.HTTP_404_NOT_FOUND
