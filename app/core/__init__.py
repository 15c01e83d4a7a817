"""
Core Application - Infrastructure & Base Classes

This app contains infrastructure code shared by the wallet, betting and
approval apps. It holds no betting or wallet rules of its own.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Model Mixins (import from core.model_mixins):
    - PrefixedIdMixin: Prefixed, time-sortable string primary key

Services (import from core.services):
    - BaseService: Base class for service layer (logging, atomic units of work)
    - ServiceResult: Standard result wrapper for success/failure handling

Exceptions (import from core.exceptions):
    - ErrorKind: Stable failure kinds
    - BaseApplicationError: Base exception with error codes
    - ValidationError: Input validation failures (INVALID_INPUT)
    - NotFoundError: Resource not found (NOT_FOUND)
    - InsufficientFundsError: Balance too low (INSUFFICIENT_FUNDS)
    - AlreadyProcessedError: Staged record already released (ALREADY_PROCESSED)
    - PermissionDeniedError: Authorization failures (PERMISSION_DENIED)
    - ConflictError: State conflicts (CONFLICT)
    - StorageError: Persistence faults, retryable (STORAGE_ERROR)

Helpers (import from core.helpers):
    - generate_id: Prefixed, time-sortable identifiers
    - quantize_money: Round to cents, half up

Views (import from core.views):
    - health_check: Database health endpoint
    - result_response: ServiceResult -> DRF Response

Note:
    Django models and model mixins are NOT imported here to avoid
    AppRegistryNotReady errors. Import them directly from their modules.
"""

# Services (no Django model dependencies)
from .services import BaseService, ServiceResult

# Exceptions (no Django dependencies)
from .exceptions import (
    AlreadyProcessedError,
    BaseApplicationError,
    ConflictError,
    ErrorKind,
    InsufficientFundsError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)

# Helpers (no Django model dependencies)
from .helpers import generate_id, quantize_money

__all__ = [
    # Services
    "BaseService",
    "ServiceResult",
    # Exceptions
    "ErrorKind",
    "BaseApplicationError",
    "ValidationError",
    "NotFoundError",
    "InsufficientFundsError",
    "AlreadyProcessedError",
    "PermissionDeniedError",
    "ConflictError",
    "StorageError",
    # Helpers
    "generate_id",
    "quantize_money",
]
