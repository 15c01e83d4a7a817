"""
URL configuration for the approvals API.

All URLs are prefixed with /api/v1/approvals/ in the main URL configuration.
"""

from django.urls import path

from approvals.views import (
    ApproveView,
    PendingListView,
    RejectTopUpView,
    TopUpRequestView,
)

app_name = "approvals"

urlpatterns = [
    path("top-ups/", TopUpRequestView.as_view(), name="top-up-request"),
    path(
        "top-ups/<str:record_id>/reject/",
        RejectTopUpView.as_view(),
        name="top-up-reject",
    ),
    path("<slug:kind>/pending/", PendingListView.as_view(), name="pending"),
    path(
        "<slug:kind>/<str:record_id>/approve/",
        ApproveView.as_view(),
        name="approve",
    ),
]
