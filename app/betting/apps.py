"""
Betting app configuration.

This app owns the wager lifecycle:
- Bet placement with limits and balance checks
- Draw declaration, full or in halves
- Settlement into prizes, rebates and dealer commissions
"""

from django.apps import AppConfig


class BettingConfig(AppConfig):
    """Configuration for the betting application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "betting"
    verbose_name = "Betting"
