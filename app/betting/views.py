"""
Views for the betting API.

URL Structure:
    /api/v1/betting/bets/            GET   wagers visible to the caller
                                     POST  place wagers (users)
    /api/v1/betting/draws/           GET   declared draw results
    /api/v1/betting/draws/declare/   POST  declare one outcome component (admin)

Visibility of GET bets/:
    user   -> own wagers
    dealer -> wagers of managed users
    admin  -> every wager
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from betting.models import Bet
from betting.serializers import (
    BetSerializer,
    DeclareDrawSerializer,
    DrawResultSerializer,
    PlaceBetsSerializer,
    SettlementReportSerializer,
)
from betting.services import BetPlacementService, DrawSettlementService
from betting.types import WagerRequest
from core.views import result_response
from wallets.permissions import IsAdminRole, IsUserRole


class BetListCreateView(generics.ListAPIView):
    """
    GET /api/v1/betting/bets/
        Paginated wagers, newest first.

    POST /api/v1/betting/bets/
        Place a batch of wagers atomically.

    Payload:
        wagers: [{draw_label, game_kind, number, stake}, ...]
    """

    serializer_class = BetSerializer

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsUserRole()]
        return [IsAuthenticated()]

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return Bet.objects.none()
        caller = self.request.user
        if caller.is_dealer:
            return BetPlacementService.bets_for_dealer(caller.id)
        if caller.is_admin:
            return Bet.objects.order_by("-created_at", "-id")
        return BetPlacementService.bet_history(caller.id)

    @extend_schema(
        operation_id="place_bets",
        summary="Place wagers",
        request=PlaceBetsSerializer,
        responses={
            201: BetSerializer(many=True),
            400: OpenApiResponse(description="Invalid wager, limit or insufficient funds"),
            403: OpenApiResponse(description="Account blocked"),
            409: OpenApiResponse(description="Outcome already declared"),
        },
        tags=["Betting"],
    )
    def post(self, request):
        serializer = PlaceBetsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        wagers = [
            WagerRequest(
                draw_label=wager["draw_label"],
                game_kind=wager["game_kind"],
                number=wager["number"],
                stake=wager["stake"],
            )
            for wager in serializer.validated_data["wagers"]
        ]

        result = BetPlacementService.place_bets(request.user.id, wagers)
        return result_response(
            result,
            lambda bets: BetSerializer(bets, many=True).data,
            status.HTTP_201_CREATED,
        )


@extend_schema(
    operation_id="list_draw_results",
    summary="List draw results",
    tags=["Betting"],
)
class DrawResultListView(generics.ListAPIView):
    """
    GET /api/v1/betting/draws/
        Draw results, most recently declared first.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = DrawResultSerializer

    def get_queryset(self):
        return DrawSettlementService.list_results()


class DeclareDrawView(APIView):
    """
    POST /api/v1/betting/draws/declare/
        Declare one outcome component and settle the wagers it resolves.

    Payload:
        draw_label: "{YYYY-MM-DD}-{gameName}"
        two_digit | one_digit_open | one_digit_close: the declared value
    """

    permission_classes = [IsAdminRole]

    @extend_schema(
        operation_id="declare_draw",
        summary="Declare draw result",
        request=DeclareDrawSerializer,
        responses={
            200: SettlementReportSerializer,
            400: OpenApiResponse(description="Invalid declaration"),
            409: OpenApiResponse(description="Component already declared differently"),
        },
        tags=["Betting"],
    )
    def post(self, request):
        serializer = DeclareDrawSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = DrawSettlementService.declare_draw(**serializer.validated_data)
        return result_response(
            result, lambda report: SettlementReportSerializer(report).data
        )
