"""
Views for the approvals API.

URL Structure:
    /api/v1/approvals/top-ups/                         POST  request a top-up (dealer)
    /api/v1/approvals/{kind}/pending/                  GET   pending records (admin)
    /api/v1/approvals/{kind}/{record_id}/approve/      POST  approve and pay (admin)
    /api/v1/approvals/top-ups/{record_id}/reject/      POST  reject a top-up (admin)

``kind`` is one of "prizes", "commissions" or "top-ups".
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import generics, status
from rest_framework.exceptions import NotFound
from rest_framework.views import APIView

from approvals.serializers import TopUpCreateSerializer, TopUpRequestSerializer
from approvals.services import ApprovalService
from approvals.states import RecordKind
from betting.serializers import CommissionSerializer, PrizeSerializer
from core.views import result_response
from wallets.permissions import IsAdminRole, IsDealerRole

# URL segment -> (record kind, serializer)
KIND_SLUGS = {
    "prizes": (RecordKind.PRIZE, PrizeSerializer),
    "commissions": (RecordKind.COMMISSION, CommissionSerializer),
    "top-ups": (RecordKind.TOP_UP, TopUpRequestSerializer),
}


def resolve_kind(slug: str):
    try:
        return KIND_SLUGS[slug]
    except KeyError:
        raise NotFound(f"Unknown approval kind: {slug}") from None


class TopUpRequestView(APIView):
    """
    POST /api/v1/approvals/top-ups/
        Request platform credit for the calling dealer.
    """

    permission_classes = [IsDealerRole]

    @extend_schema(
        operation_id="request_top_up",
        summary="Request top-up",
        request=TopUpCreateSerializer,
        responses={201: TopUpRequestSerializer},
        tags=["Approvals"],
    )
    def post(self, request):
        serializer = TopUpCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ApprovalService.request_top_up(
            request.user.id,
            serializer.validated_data["amount"],
            serializer.validated_data["reference"],
        )
        return result_response(
            result,
            lambda top_up: TopUpRequestSerializer(top_up).data,
            status.HTTP_201_CREATED,
        )


@extend_schema(
    operation_id="list_pending_approvals",
    summary="List pending records",
    tags=["Approvals"],
)
class PendingListView(generics.ListAPIView):
    """
    GET /api/v1/approvals/{kind}/pending/
        Pending records of one kind, oldest first. ``?account_id=`` narrows
        the list to one recipient.
    """

    permission_classes = [IsAdminRole]

    def get_serializer_class(self):
        if getattr(self, "swagger_fake_view", False):
            return PrizeSerializer
        return resolve_kind(self.kwargs["kind"])[1]

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return ApprovalService.list_pending(RecordKind.PRIZE).none()
        record_kind, _ = resolve_kind(self.kwargs["kind"])
        return ApprovalService.list_pending(
            record_kind, self.request.query_params.get("account_id")
        )


class ApproveView(APIView):
    """
    POST /api/v1/approvals/{kind}/{record_id}/approve/
        Approve a pending record and credit its recipient.
    """

    permission_classes = [IsAdminRole]

    @extend_schema(
        operation_id="approve_record",
        summary="Approve staged record",
        request=None,
        responses={
            200: OpenApiResponse(description="Approved record"),
            404: OpenApiResponse(description="Record not found"),
            409: OpenApiResponse(description="Record already processed"),
        },
        tags=["Approvals"],
    )
    def post(self, request, kind: str, record_id: str):
        record_kind, serializer_class = resolve_kind(kind)
        result = ApprovalService.approve(
            record_kind, record_id, approved_by=request.user.id
        )
        return result_response(result, lambda record: serializer_class(record).data)


class RejectTopUpView(APIView):
    """
    POST /api/v1/approvals/top-ups/{record_id}/reject/
        Reject a pending top-up request.
    """

    permission_classes = [IsAdminRole]

    @extend_schema(
        operation_id="reject_top_up",
        summary="Reject top-up",
        request=None,
        responses={200: TopUpRequestSerializer},
        tags=["Approvals"],
    )
    def post(self, request, record_id: str):
        result = ApprovalService.reject_top_up(record_id, rejected_by=request.user.id)
        return result_response(result, lambda top_up: TopUpRequestSerializer(top_up).data)
