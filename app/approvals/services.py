"""
Approval service: releases staged payouts exactly once.

Approving a record is a single unit of work that claims it with a
conditional update (``WHERE status = 'pending'``) and credits the
recipient. Of two concurrent approvals only one can match the pending row;
the other finds nothing to claim and reports ALREADY_PROCESSED.

Usage:
    from approvals.services import ApprovalService
    from approvals.states import RecordKind

    result = ApprovalService.approve(RecordKind.PRIZE, prize.id, approved_by=admin.id)
    if result.success:
        prize = result.data
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from django.db import models
from django.utils import timezone

from approvals.exceptions import AlreadyProcessed, RecordNotFound
from approvals.models import TopUpRequest
from approvals.states import RecordKind, TopUpStatus
from betting.models import Commission, Prize
from betting.states import PayoutStatus
from core.exceptions import PermissionDeniedError, ValidationError
from core.services import BaseService, ServiceResult
from wallets.exceptions import AccountNotFound, InvalidTransfer
from wallets.models import Account, AccountRole, EntryKind
from wallets.services import CreditTransferService
from wallets.services.transfers import parse_amount

if TYPE_CHECKING:
    from django.db.models import QuerySet


@dataclass(frozen=True)
class ApprovalTarget:
    """How one record kind is claimed and paid."""

    model: type[models.Model]
    recipient_field: str
    entry_kind: str
    processed_by_field: str
    pending: str
    approved: str


APPROVAL_TARGETS: dict[str, ApprovalTarget] = {
    RecordKind.PRIZE: ApprovalTarget(
        model=Prize,
        recipient_field="account_id",
        entry_kind=EntryKind.PRIZE_WON,
        processed_by_field="approved_by",
        pending=PayoutStatus.PENDING,
        approved=PayoutStatus.APPROVED,
    ),
    RecordKind.COMMISSION: ApprovalTarget(
        model=Commission,
        recipient_field="account_id",
        entry_kind=EntryKind.COMMISSION_PAYOUT,
        processed_by_field="approved_by",
        pending=PayoutStatus.PENDING,
        approved=PayoutStatus.APPROVED,
    ),
    RecordKind.TOP_UP: ApprovalTarget(
        model=TopUpRequest,
        recipient_field="dealer_id",
        entry_kind=EntryKind.TOP_UP_APPROVED,
        processed_by_field="processed_by",
        pending=TopUpStatus.PENDING,
        approved=TopUpStatus.APPROVED,
    ),
}


def _target(record_kind: str) -> ApprovalTarget:
    target = APPROVAL_TARGETS.get(record_kind)
    if target is None:
        raise ValidationError(
            f"Unknown record kind: {record_kind}",
            error_code="INVALID_RECORD_KIND",
            details={"record_kind": [f"Expected one of {', '.join(RecordKind.values)}"]},
        )
    return target


class ApprovalService(BaseService):
    """
    Release gate for prizes, dealer commissions and top-up requests.

    Methods:
        approve: Claim a pending record and credit its recipient
        reject_top_up: Claim a pending top-up request as rejected
        request_top_up: Create a pending top-up request for a dealer
        list_pending: Pending records of one kind, oldest first
    """

    @classmethod
    def approve(
        cls,
        record_kind: str,
        record_id: str,
        approved_by: str | None = None,
    ) -> ServiceResult:
        """
        Approve a staged record and pay it.

        Args:
            record_kind: RecordKind value
            record_id: Prize, Commission or TopUpRequest id
            approved_by: Admin account id recorded on the record

        Returns:
            ServiceResult with the approved record. Failure kinds:
            INVALID_INPUT (unknown kind), NOT_FOUND, ALREADY_PROCESSED,
            STORAGE_ERROR.
        """
        return cls.run_atomic(cls._approve, record_kind, record_id, approved_by)

    @classmethod
    def _approve(cls, record_kind: str, record_id: str, approved_by: str | None):
        target = _target(record_kind)
        now = timezone.now()

        cls._claim(
            record_kind,
            record_id,
            target,
            status=target.approved,
            approved_at=now,
            updated_at=now,
            **{target.processed_by_field: approved_by},
        )

        record = target.model.objects.get(pk=record_id)
        recipient_id = getattr(record, target.recipient_field)
        CreditTransferService.post_credit(
            recipient_id,
            record.amount,
            target.entry_kind,
            related_entity_id=record.id,
            description=f"Approved {record_kind} {record.id}",
        )

        cls.get_logger().info(
            "Staged record approved",
            extra={
                "record_kind": record_kind,
                "record_id": record.id,
                "recipient_id": recipient_id,
                "amount": str(record.amount),
                "approved_by": approved_by,
            },
        )
        return record

    @staticmethod
    def _claim(
        record_kind: str,
        record_id: str,
        target: ApprovalTarget,
        **changes,
    ) -> None:
        """
        Move a record out of pending with a conditional update.

        Raises:
            AlreadyProcessed: If the record exists but is no longer pending
            RecordNotFound: If there is no such record
        """
        claimed = target.model.objects.filter(
            pk=record_id, status=target.pending
        ).update(**changes)
        if claimed:
            return

        current = (
            target.model.objects.filter(pk=record_id)
            .values_list("status", flat=True)
            .first()
        )
        if current is None:
            raise RecordNotFound(record_kind, record_id)
        raise AlreadyProcessed(record_kind, record_id, current)

    @classmethod
    def reject_top_up(
        cls,
        top_up_id: str,
        rejected_by: str | None = None,
    ) -> ServiceResult[TopUpRequest]:
        """
        Reject a pending top-up request. No money moves.

        Returns:
            ServiceResult with the rejected request. Failure kinds:
            NOT_FOUND, ALREADY_PROCESSED, STORAGE_ERROR.
        """
        return cls.run_atomic(cls._reject_top_up, top_up_id, rejected_by)

    @classmethod
    def _reject_top_up(cls, top_up_id: str, rejected_by: str | None) -> TopUpRequest:
        now = timezone.now()
        cls._claim(
            RecordKind.TOP_UP,
            top_up_id,
            APPROVAL_TARGETS[RecordKind.TOP_UP],
            status=TopUpStatus.REJECTED,
            rejected_at=now,
            processed_by=rejected_by,
            updated_at=now,
        )
        cls.get_logger().info(
            "Top-up request rejected",
            extra={"top_up_id": top_up_id, "rejected_by": rejected_by},
        )
        return TopUpRequest.objects.get(pk=top_up_id)

    @classmethod
    def request_top_up(
        cls,
        dealer_id: str,
        amount: Decimal,
        reference: str = "",
    ) -> ServiceResult[TopUpRequest]:
        """
        Record a dealer's request for platform credit.

        Returns:
            ServiceResult with the pending TopUpRequest. Failure kinds:
            INVALID_INPUT (amount), NOT_FOUND, PERMISSION_DENIED (not a
            dealer), STORAGE_ERROR.
        """
        return cls.run_atomic(cls._request_top_up, dealer_id, amount, reference)

    @classmethod
    def _request_top_up(
        cls, dealer_id: str, amount: Decimal, reference: str
    ) -> TopUpRequest:
        try:
            amount = parse_amount(amount)
        except InvalidTransfer as exc:
            raise ValidationError(
                exc.message, error_code="INVALID_AMOUNT", details=exc.details
            ) from exc

        dealer = Account.objects.filter(id=dealer_id).first()
        if dealer is None:
            raise AccountNotFound(
                f"Account {dealer_id} not found",
                details={"account_id": dealer_id},
            )
        if dealer.role != AccountRole.DEALER:
            raise PermissionDeniedError(
                "Only dealers can request top-ups",
                error_code="TOP_UP_NOT_ALLOWED",
                details={"account_id": dealer_id, "role": dealer.role},
            )

        top_up = TopUpRequest.objects.create(
            dealer=dealer,
            amount=amount,
            reference=reference or "",
        )
        cls.get_logger().info(
            "Top-up requested",
            extra={"top_up_id": top_up.id, "dealer_id": dealer_id, "amount": str(amount)},
        )
        return top_up

    @staticmethod
    def list_pending(
        record_kind: str,
        recipient_id: str | None = None,
    ) -> QuerySet:
        """
        Pending records of one kind, oldest first.

        Args:
            record_kind: RecordKind value
            recipient_id: Only records paying this account

        Raises:
            ValidationError: If the record kind is unknown
        """
        target = _target(record_kind)
        queryset = target.model.objects.filter(status=target.pending)
        if recipient_id is not None:
            queryset = queryset.filter(**{target.recipient_field: recipient_id})
        return queryset.order_by("created_at", "id")
