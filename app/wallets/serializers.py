"""
Serializers for the wallet API.

Request serializers only check shape; every money rule is enforced by the
services, which report violations through ServiceResult.
"""

from __future__ import annotations

from rest_framework import serializers

from wallets.models import Account, AccountRole, LedgerEntry
from wallets.types import TransferKind


class AccountSerializer(serializers.ModelSerializer):
    """Account with balance, limits and rates."""

    class Meta:
        model = Account
        fields = [
            "id",
            "username",
            "role",
            "balance",
            "dealer",
            "is_blocked",
            "bet_limit_per_draw",
            "bet_limit_2d",
            "bet_limit_1d",
            "commission_rate",
            "prize_rate_2d",
            "prize_rate_1d",
            "created_at",
        ]
        read_only_fields = fields


class LedgerEntrySerializer(serializers.ModelSerializer):
    """One ledger movement as shown in transaction history."""

    class Meta:
        model = LedgerEntry
        fields = [
            "id",
            "amount",
            "kind",
            "related_entity_id",
            "balance_after",
            "description",
            "created_at",
        ]
        read_only_fields = fields


class BalanceSerializer(serializers.Serializer):
    account_id = serializers.CharField()
    balance = serializers.DecimalField(max_digits=16, decimal_places=2)


class TransferRequestSerializer(serializers.Serializer):
    """
    Transfer request.

    ``account_id`` is the counterparty: the recipient for dealer_to_user and
    admin_to_user, the account being debited for user_to_admin. The caller
    is always the other side.
    """

    kind = serializers.ChoiceField(choices=TransferKind.choices)
    account_id = serializers.CharField(max_length=40)
    amount = serializers.DecimalField(
        max_digits=16, decimal_places=2, min_value=0
    )


class TransferReceiptSerializer(serializers.Serializer):
    kind = serializers.CharField()
    from_account_id = serializers.CharField()
    to_account_id = serializers.CharField()
    amount = serializers.DecimalField(max_digits=16, decimal_places=2)
    debit_entry_id = serializers.CharField()
    credit_entry_id = serializers.CharField()
    from_balance = serializers.DecimalField(max_digits=16, decimal_places=2)
    to_balance = serializers.DecimalField(max_digits=16, decimal_places=2)


class AccountCreateSerializer(serializers.Serializer):
    """Open a user (dealers and admins) or a dealer (admins only)."""

    username = serializers.CharField(max_length=150)
    role = serializers.ChoiceField(
        choices=[AccountRole.USER, AccountRole.DEALER], default=AccountRole.USER
    )
    dealer_id = serializers.CharField(max_length=40, required=False)
    initial_deposit = serializers.DecimalField(
        max_digits=16, decimal_places=2, min_value=0, required=False, default=0
    )
    commission_rate = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=0, max_value=100, required=False
    )
    bet_limit_per_draw = serializers.DecimalField(
        max_digits=16, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    prize_rate_2d = serializers.DecimalField(
        max_digits=8, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    prize_rate_1d = serializers.DecimalField(
        max_digits=8, decimal_places=2, min_value=0, required=False, allow_null=True
    )


class AccountSettingsSerializer(serializers.Serializer):
    """Partial update of limits, rates and the blocked flag."""

    is_blocked = serializers.BooleanField(required=False)
    bet_limit_per_draw = serializers.DecimalField(
        max_digits=16, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    bet_limit_2d = serializers.DecimalField(
        max_digits=16, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    bet_limit_1d = serializers.DecimalField(
        max_digits=16, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    commission_rate = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=0, max_value=100, required=False
    )
    prize_rate_2d = serializers.DecimalField(
        max_digits=8, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    prize_rate_1d = serializers.DecimalField(
        max_digits=8, decimal_places=2, min_value=0, required=False, allow_null=True
    )
