"""
Approval workflow exceptions.

Exception Hierarchy:
    RecordNotFound (NotFoundError) - No staged record with that id
    AlreadyProcessed (AlreadyProcessedError) - Record left the pending state
"""

from __future__ import annotations

from core.exceptions import AlreadyProcessedError, NotFoundError


class RecordNotFound(NotFoundError):
    """Raised when a prize, commission or top-up request does not exist."""

    default_error_code: str = "RECORD_NOT_FOUND"

    def __init__(self, record_kind: str, record_id: str):
        super().__init__(
            f"{record_kind} {record_id} not found",
            details={"record_kind": record_kind, "record_id": record_id},
        )


class AlreadyProcessed(AlreadyProcessedError):
    """
    Raised when a staged record was already approved or rejected.

    Attributes:
        status: Status the record holds now
    """

    default_error_code: str = "ALREADY_PROCESSED"

    def __init__(self, record_kind: str, record_id: str, status: str):
        self.status = status
        super().__init__(
            f"{record_kind} {record_id} is already {status}",
            details={
                "record_kind": record_kind,
                "record_id": record_id,
                "status": status,
            },
        )
