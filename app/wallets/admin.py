"""
Django admin configuration for wallet models.

Balances and ledger entries are read-only here: every change must go
through the services so that the ledger stays in step with balances.
"""

from django.contrib import admin

from .models import Account, LedgerEntry


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    """Accounts with their balance, hierarchy and betting settings."""

    list_display = [
        "id",
        "username",
        "role",
        "balance",
        "dealer",
        "commission_rate",
        "is_blocked",
        "created_at",
    ]
    list_filter = ["role", "is_blocked"]
    search_fields = ["id", "username"]
    readonly_fields = ["id", "balance", "created_at", "updated_at"]
    raw_id_fields = ["dealer"]
    ordering = ["-created_at"]

    fieldsets = (
        (None, {"fields": ("id", "username", "role", "dealer", "balance")}),
        ("Limits", {"fields": ("is_blocked", "bet_limit_per_draw", "bet_limit_2d", "bet_limit_1d")}),
        ("Rates", {"fields": ("commission_rate", "prize_rate_2d", "prize_rate_1d")}),
        ("Timestamps", {"fields": ("created_at", "updated_at")}),
    )

    def has_delete_permission(self, request, obj=None) -> bool:
        return False


@admin.register(LedgerEntry)
class LedgerEntryAdmin(admin.ModelAdmin):
    """Immutable ledger entries (no add, change or delete)."""

    list_display = [
        "id",
        "account",
        "kind",
        "amount",
        "balance_after",
        "related_entity_id",
        "created_at",
    ]
    list_filter = ["kind"]
    search_fields = ["id", "account__id", "account__username", "related_entity_id"]
    ordering = ["-created_at"]

    def has_add_permission(self, request) -> bool:
        return False

    def has_change_permission(self, request, obj=None) -> bool:
        return False

    def has_delete_permission(self, request, obj=None) -> bool:
        return False
