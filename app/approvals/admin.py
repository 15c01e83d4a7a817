"""
Django admin configuration for top-up requests.

Requests are approved or rejected through ApprovalService, never edited
here.
"""

from django.contrib import admin

from .models import TopUpRequest


@admin.register(TopUpRequest)
class TopUpRequestAdmin(admin.ModelAdmin):
    list_display = ["id", "dealer", "amount", "reference", "status", "processed_by", "created_at"]
    list_filter = ["status"]
    search_fields = ["id", "reference", "dealer__username"]
    ordering = ["-created_at"]

    def has_add_permission(self, request) -> bool:
        return False

    def has_change_permission(self, request, obj=None) -> bool:
        return False

    def has_delete_permission(self, request, obj=None) -> bool:
        return False
