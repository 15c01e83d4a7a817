"""
Core views providing infrastructure endpoints and response helpers.

This module contains views that are not part of the business domain but are
essential for application infrastructure, such as health checks, plus the
helper every API view uses to turn a ServiceResult into an HTTP response.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import DatabaseError, connection
from django.http import JsonResponse
from rest_framework import status
from rest_framework.response import Response

from core.exceptions import ErrorKind

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    from core.services import ServiceResult


# Failure kind -> HTTP status
KIND_STATUS = {
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INSUFFICIENT_FUNDS: status.HTTP_400_BAD_REQUEST,
    ErrorKind.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.ALREADY_PROCESSED: status.HTTP_409_CONFLICT,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.STORAGE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def result_response(
    result: ServiceResult,
    serialize: Callable[[Any], Any] | None = None,
    success_status: int = status.HTTP_200_OK,
) -> Response:
    """
    Build a DRF Response from a ServiceResult.

    Args:
        result: Outcome of a service operation
        serialize: Converts result.data into response data on success
        success_status: HTTP status for a successful result

    Returns:
        Response with the serialized data, or the failure body with the
        status mapped from the failure kind
    """
    if result.success:
        data = serialize(result.data) if serialize else result.data
        return Response(data, status=success_status)
    return Response(
        result.to_response(),
        status=KIND_STATUS.get(result.kind, status.HTTP_400_BAD_REQUEST),
    )


def health_check(request):
    """
    Health check endpoint for monitoring and orchestration.

    Returns:
        JsonResponse with status and component health:
        - status: "healthy" or "unhealthy"
        - database: "connected" or "disconnected"

    HTTP Status Codes:
        200: All systems operational
        503: Database unreachable
    """
    health_status = {
        "status": "healthy",
        "database": "unknown",
    }
    is_healthy = True

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        health_status["database"] = "connected"
    except DatabaseError:
        health_status["database"] = "disconnected"
        health_status["status"] = "unhealthy"
        is_healthy = False

    status_code = 200 if is_healthy else 503

    return JsonResponse(health_status, status=status_code)
