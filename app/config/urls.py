"""
URL configuration for the Django application.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/wallet/                - Wallet endpoints
        balance/                   - Own balance
        transactions/              - Own ledger entries
        transfers/                 - Dealer/admin transfers
        accounts/                  - Open user or dealer accounts
        accounts/{id}/settings/    - Limits, rates, blocking (admin)
    /api/v1/betting/               - Betting endpoints
        bets/                      - Wager list/place
        draws/                     - Draw results
        draws/declare/             - Declare an outcome component (admin)
    /api/v1/approvals/             - Approval endpoints
        top-ups/                   - Request a top-up (dealer)
        top-ups/{id}/reject/       - Reject a top-up (admin)
        {kind}/pending/            - Pending prizes, commissions, top-ups (admin)
        {kind}/{id}/approve/       - Approve and pay (admin)

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    # Wallet
    path("wallet/", include("wallets.urls")),
    # Betting
    path("betting/", include("betting.urls")),
    # Approvals
    path("approvals/", include("approvals.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Numbers Exchange Admin"
admin.site.site_title = "Numbers Exchange"
admin.site.index_title = "Wallets, draws and approvals"
