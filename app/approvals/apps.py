"""
Approvals app configuration.

This app releases staged payouts:
- Prize and dealer commission approval
- Dealer top-up requests (request, approve, reject)
"""

from django.apps import AppConfig


class ApprovalsConfig(AppConfig):
    """Configuration for the approvals application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "approvals"
    verbose_name = "Approvals"
