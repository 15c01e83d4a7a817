"""
URL configuration for the wallet API.

All URLs are prefixed with /api/v1/wallet/ in the main URL configuration.
"""

from django.urls import path

from wallets.views import (
    AccountCreateView,
    AccountSettingsView,
    BalanceView,
    TransactionHistoryView,
    TransferView,
)

app_name = "wallets"

urlpatterns = [
    path("balance/", BalanceView.as_view(), name="balance"),
    path("transactions/", TransactionHistoryView.as_view(), name="transactions"),
    path("transfers/", TransferView.as_view(), name="transfers"),
    path("accounts/", AccountCreateView.as_view(), name="account-create"),
    path(
        "accounts/<str:account_id>/settings/",
        AccountSettingsView.as_view(),
        name="account-settings",
    ),
]
