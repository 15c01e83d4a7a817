"""
Views for the wallet API.

URL Structure:
    /api/v1/wallet/balance/                   GET    own balance
    /api/v1/wallet/transactions/              GET    own ledger, newest first
    /api/v1/wallet/transfers/                 POST   dealer/admin transfers
    /api/v1/wallet/accounts/                  POST   open a user or dealer
    /api/v1/wallet/accounts/{id}/settings/    PATCH  limits, rates, blocking

Design Decisions:
    - The caller's identity always fills one side of a transfer
    - Views translate ServiceResult into HTTP via core.views.result_response
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.views import result_response
from wallets.exceptions import AccountNotFound
from wallets.models import AccountRole, LedgerEntry
from wallets.permissions import IsAdminRole, IsDealerOrAdminRole
from wallets.serializers import (
    AccountCreateSerializer,
    AccountSerializer,
    AccountSettingsSerializer,
    BalanceSerializer,
    LedgerEntrySerializer,
    TransferReceiptSerializer,
    TransferRequestSerializer,
)
from wallets.services import (
    AccountService,
    AccountStore,
    CreditTransferService,
    LedgerRecorder,
)
from wallets.types import TransferKind

# Role allowed to initiate each transfer kind
TRANSFER_INITIATOR_ROLE = {
    TransferKind.DEALER_TO_USER: AccountRole.DEALER,
    TransferKind.ADMIN_TO_USER: AccountRole.ADMIN,
    TransferKind.USER_TO_ADMIN: AccountRole.ADMIN,
}


class BalanceView(APIView):
    """
    GET /api/v1/wallet/balance/
        Current balance of the calling account.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="get_balance",
        summary="Get own balance",
        responses={200: BalanceSerializer},
        tags=["Wallet"],
    )
    def get(self, request):
        try:
            balance = AccountStore.get_balance(request.user.id)
        except AccountNotFound as exc:
            return Response(exc.to_dict(), status=status.HTTP_404_NOT_FOUND)
        return Response(
            BalanceSerializer({"account_id": request.user.id, "balance": balance}).data
        )


@extend_schema(
    operation_id="list_transactions",
    summary="List own ledger entries",
    tags=["Wallet"],
)
class TransactionHistoryView(generics.ListAPIView):
    """
    GET /api/v1/wallet/transactions/
        Paginated ledger entries of the calling account, newest first.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = LedgerEntrySerializer

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return LedgerEntry.objects.none()
        return LedgerRecorder.transaction_history(self.request.user.id)


class TransferView(APIView):
    """
    POST /api/v1/wallet/transfers/
        Move money between the caller and a counterparty.

    Payload:
        kind: "dealer_to_user" | "admin_to_user" | "user_to_admin"
        account_id: Counterparty account
        amount: Positive amount
    """

    permission_classes = [IsDealerOrAdminRole]

    @extend_schema(
        operation_id="create_transfer",
        summary="Transfer funds",
        request=TransferRequestSerializer,
        responses={
            201: TransferReceiptSerializer,
            400: OpenApiResponse(description="Invalid input or insufficient funds"),
            403: OpenApiResponse(description="Role may not send this transfer"),
            404: OpenApiResponse(description="Counterparty not found"),
        },
        tags=["Wallet"],
    )
    def post(self, request):
        serializer = TransferRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        kind = serializer.validated_data["kind"]
        counterparty = serializer.validated_data["account_id"]

        if request.user.role != TRANSFER_INITIATOR_ROLE[kind]:
            return Response(
                {
                    "success": False,
                    "error": f"A {request.user.role} may not initiate {kind} transfers",
                    "error_code": "PERMISSION_DENIED",
                },
                status=status.HTTP_403_FORBIDDEN,
            )

        if kind == TransferKind.USER_TO_ADMIN:
            from_id, to_id = counterparty, request.user.id
        else:
            from_id, to_id = request.user.id, counterparty

        result = CreditTransferService.transfer(
            from_id, to_id, serializer.validated_data["amount"], kind
        )
        return result_response(
            result,
            lambda receipt: TransferReceiptSerializer(receipt).data,
            status.HTTP_201_CREATED,
        )


class AccountCreateView(APIView):
    """
    POST /api/v1/wallet/accounts/
        Open an account. Dealers open users under themselves; admins open
        dealers, or users under a given dealer.
    """

    permission_classes = [IsDealerOrAdminRole]

    @extend_schema(
        operation_id="open_account",
        summary="Open account",
        request=AccountCreateSerializer,
        responses={201: AccountSerializer},
        tags=["Wallet"],
    )
    def post(self, request):
        serializer = AccountCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)

        username = data.pop("username")
        role = data.pop("role")
        initial_deposit = data.pop("initial_deposit")
        dealer_id = data.pop("dealer_id", None)

        if request.user.is_dealer:
            if role != AccountRole.USER:
                return Response(
                    {
                        "success": False,
                        "error": "Dealers can only open user accounts",
                        "error_code": "PERMISSION_DENIED",
                    },
                    status=status.HTTP_403_FORBIDDEN,
                )
            dealer_id = request.user.id

        result = AccountService.open_account(
            username,
            role,
            dealer_id=dealer_id,
            initial_deposit=initial_deposit,
            **data,
        )
        return result_response(
            result,
            lambda account: AccountSerializer(account).data,
            status.HTTP_201_CREATED,
        )


class AccountSettingsView(APIView):
    """
    PATCH /api/v1/wallet/accounts/{account_id}/settings/
        Change limits, rates or the blocked flag (admin only).
    """

    permission_classes = [IsAdminRole]

    @extend_schema(
        operation_id="update_account_settings",
        summary="Update account settings",
        request=AccountSettingsSerializer,
        responses={200: AccountSerializer},
        tags=["Wallet"],
    )
    def patch(self, request, account_id: str):
        serializer = AccountSettingsSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = AccountService.update_settings(
            account_id, **serializer.validated_data
        )
        return result_response(result, lambda account: AccountSerializer(account).data)
