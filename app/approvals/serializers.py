"""
Serializers for the approvals API.
"""

from __future__ import annotations

from rest_framework import serializers

from approvals.models import TopUpRequest


class TopUpRequestSerializer(serializers.ModelSerializer):
    class Meta:
        model = TopUpRequest
        fields = [
            "id",
            "dealer",
            "amount",
            "reference",
            "status",
            "approved_at",
            "rejected_at",
            "processed_by",
            "created_at",
        ]
        read_only_fields = fields


class TopUpCreateSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=16, decimal_places=2)
    reference = serializers.CharField(
        max_length=255, required=False, allow_blank=True, default=""
    )
