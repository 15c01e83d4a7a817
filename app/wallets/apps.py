"""
Wallets app configuration.

This app owns account balances and their ledger:
- Account store (locked reads, conditional balance updates)
- Append-only ledger recorder
- Credit transfers and platform credit
- Periodic ledger reconciliation
"""

from django.apps import AppConfig


class WalletsConfig(AppConfig):
    """Configuration for the wallets application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "wallets"
    verbose_name = "Wallets"
