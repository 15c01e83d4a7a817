"""
Django admin configuration for betting models.

Wagers, results and payouts are read-only here; settlement and approval
happen through the services.
"""

from django.contrib import admin

from .models import Bet, Commission, DrawResult, Prize


class ReadOnlyAdmin(admin.ModelAdmin):
    def has_add_permission(self, request) -> bool:
        return False

    def has_change_permission(self, request, obj=None) -> bool:
        return False

    def has_delete_permission(self, request, obj=None) -> bool:
        return False


@admin.register(Bet)
class BetAdmin(ReadOnlyAdmin):
    list_display = ["id", "account", "draw_label", "game_kind", "number", "stake", "status", "created_at"]
    list_filter = ["status", "game_kind"]
    search_fields = ["id", "draw_label", "account__username"]
    ordering = ["-created_at"]


@admin.register(DrawResult)
class DrawResultAdmin(ReadOnlyAdmin):
    list_display = ["draw_label", "two_digit", "one_digit_open", "one_digit_close", "declared_at"]
    search_fields = ["draw_label"]
    ordering = ["-created_at"]


@admin.register(Prize)
class PrizeAdmin(ReadOnlyAdmin):
    list_display = ["id", "account", "draw_label", "amount", "status", "approved_at"]
    list_filter = ["status"]
    search_fields = ["id", "draw_label", "account__username"]
    ordering = ["-created_at"]


@admin.register(Commission)
class CommissionAdmin(ReadOnlyAdmin):
    list_display = ["id", "account", "recipient_type", "draw_label", "amount", "status"]
    list_filter = ["status", "recipient_type"]
    search_fields = ["id", "draw_label", "account__username"]
    ordering = ["-created_at"]
