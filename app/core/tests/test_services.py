"""
Tests for ServiceResult and the BaseService unit-of-work helper.
"""

import logging

import pytest
from django.db import DatabaseError

from core.exceptions import ConflictError, ErrorKind, NotFoundError
from core.services import BaseService, ServiceResult
from wallets.models import Account
from wallets.tests.factories import DealerAccountFactory


class TestServiceResult:
    def test_success(self):
        result = ServiceResult.success([1, 2])

        assert result
        assert result.data == [1, 2]
        assert not result.retryable
        assert result.to_response() == {"success": True, "data": [1, 2]}

    def test_failure_defaults_to_invalid_input(self):
        result = ServiceResult.failure("bad stake", error_code="INVALID_STAKE")

        assert not result
        assert result.kind == ErrorKind.INVALID_INPUT
        assert result.error_code == "INVALID_STAKE"

    def test_failure_with_kind_as_code(self):
        result = ServiceResult.failure("missing", error_code=ErrorKind.NOT_FOUND)

        assert result.kind == ErrorKind.NOT_FOUND

    def test_from_application_error(self):
        exc = NotFoundError("Account acc_1 not found", details={"account_id": "acc_1"})

        result = ServiceResult.from_exception(exc)

        assert result.kind == ErrorKind.NOT_FOUND
        assert result.errors == {"account_id": "acc_1"}
        assert result.to_response()["kind"] == ErrorKind.NOT_FOUND


class RenameService(BaseService):
    """Small service used to exercise run_atomic."""

    @classmethod
    def rename_then(cls, account_id, outcome):
        Account.objects.filter(id=account_id).update(username="renamed")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.mark.django_db
class TestRunAtomic:
    def test_plain_value_is_wrapped_and_committed(self):
        account = DealerAccountFactory()

        result = RenameService.run_atomic(RenameService.rename_then, account.id, 7)

        assert result.success
        assert result.data == 7
        account.refresh_from_db()
        assert account.username == "renamed"

    def test_failed_result_rolls_back(self):
        account = DealerAccountFactory()
        failure = ServiceResult.failure("rejected", error_code="CONFLICT")

        result = RenameService.run_atomic(RenameService.rename_then, account.id, failure)

        assert result is failure
        account.refresh_from_db()
        assert account.username != "renamed"

    def test_application_error_rolls_back(self, caplog):
        account = DealerAccountFactory()

        with caplog.at_level(logging.WARNING):
            result = RenameService.run_atomic(
                RenameService.rename_then,
                account.id,
                ConflictError("already declared", error_code="DRAW_RESULT_CONFLICT"),
            )

        assert result.kind == ErrorKind.CONFLICT
        assert result.error_code == "DRAW_RESULT_CONFLICT"
        assert not result.retryable
        account.refresh_from_db()
        assert account.username != "renamed"
        assert any(record.levelno == logging.WARNING for record in caplog.records)

    def test_database_error_is_retryable_storage_error(self):
        account = DealerAccountFactory()

        result = RenameService.run_atomic(
            RenameService.rename_then, account.id, DatabaseError("disk full")
        )

        assert result.kind == ErrorKind.STORAGE_ERROR
        assert result.retryable
        account.refresh_from_db()
        assert account.username != "renamed"
