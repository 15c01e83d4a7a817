"""
Serializers for the betting API.

Wager and declaration payloads are only shape-checked here. Number formats,
limits, balances and draw state are enforced by the services.
"""

from __future__ import annotations

from rest_framework import serializers

from betting.models import Bet, Commission, DrawResult, Prize
from betting.states import GameKind
from betting.validators import build_draw_label
from core.exceptions import ValidationError


class BetSerializer(serializers.ModelSerializer):
    class Meta:
        model = Bet
        fields = [
            "id",
            "account",
            "draw_label",
            "game_kind",
            "number",
            "stake",
            "status",
            "settled_at",
            "created_at",
        ]
        read_only_fields = fields


class WagerSerializer(serializers.Serializer):
    """
    One wager in a placement request.

    Either ``draw_label`` or both ``draw_date`` and ``game_name`` identify
    the draw; the latter are combined into a label.
    """

    draw_label = serializers.CharField(max_length=100, required=False)
    draw_date = serializers.DateField(required=False)
    game_name = serializers.CharField(max_length=80, required=False)
    game_kind = serializers.ChoiceField(choices=GameKind.choices)
    number = serializers.CharField(max_length=2)
    stake = serializers.DecimalField(max_digits=16, decimal_places=2)

    def validate(self, attrs):
        if attrs.get("draw_label"):
            return attrs
        if not (attrs.get("draw_date") and attrs.get("game_name")):
            raise serializers.ValidationError(
                "Provide draw_label, or draw_date and game_name."
            )
        try:
            attrs["draw_label"] = build_draw_label(
                attrs.pop("draw_date"), attrs.pop("game_name")
            )
        except ValidationError as exc:
            raise serializers.ValidationError({"game_name": exc.message}) from exc
        return attrs


class PlaceBetsSerializer(serializers.Serializer):
    wagers = WagerSerializer(many=True, allow_empty=True)


class DrawResultSerializer(serializers.ModelSerializer):
    state = serializers.CharField(read_only=True)

    class Meta:
        model = DrawResult
        fields = [
            "id",
            "draw_label",
            "state",
            "two_digit",
            "one_digit_open",
            "one_digit_close",
            "declared_at",
            "open_declared_at",
            "close_declared_at",
        ]
        read_only_fields = fields


class DeclareDrawSerializer(serializers.Serializer):
    """Exactly one of the three components is expected."""

    draw_label = serializers.CharField(max_length=100)
    two_digit = serializers.CharField(max_length=2, required=False)
    one_digit_open = serializers.CharField(max_length=1, required=False)
    one_digit_close = serializers.CharField(max_length=1, required=False)


class PrizeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Prize
        fields = [
            "id",
            "account",
            "bet",
            "draw_label",
            "amount",
            "status",
            "approved_at",
            "approved_by",
            "created_at",
        ]
        read_only_fields = fields


class CommissionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Commission
        fields = [
            "id",
            "account",
            "recipient_type",
            "draw_label",
            "total_stake",
            "rate",
            "amount",
            "status",
            "approved_at",
            "approved_by",
            "created_at",
        ]
        read_only_fields = fields


class SettlementReportSerializer(serializers.Serializer):
    draw = DrawResultSerializer()
    newly_resolved = serializers.ListField(child=serializers.CharField())
    bets_resolved = serializers.IntegerField()
    winners = serializers.IntegerField()
    prizes = PrizeSerializer(many=True)
    commissions = CommissionSerializer(many=True)
    commissions_calculated = serializers.BooleanField()
