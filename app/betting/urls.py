"""
URL configuration for the betting API.

All URLs are prefixed with /api/v1/betting/ in the main URL configuration.
"""

from django.urls import path

from betting.views import BetListCreateView, DeclareDrawView, DrawResultListView

app_name = "betting"

urlpatterns = [
    path("bets/", BetListCreateView.as_view(), name="bets"),
    path("draws/", DrawResultListView.as_view(), name="draws"),
    path("draws/declare/", DeclareDrawView.as_view(), name="declare-draw"),
]
