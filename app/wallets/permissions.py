"""
Role-based permission classes for the API.

Permission Hierarchy:
    ADMIN: declares draws, approves payouts, moves platform money
    DEALER: funds managed users, requests top-ups
    USER: places wagers

Every class also requires an authenticated caller, so each can be used
on its own in ``permission_classes``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rest_framework import permissions

from wallets.models import AccountRole

if TYPE_CHECKING:
    from rest_framework.request import Request
    from rest_framework.views import APIView


class HasRole(permissions.BasePermission):
    """Allows access only to callers whose role is in ``allowed_roles``."""

    allowed_roles: frozenset[str] = frozenset()
    message = "Your account role may not perform this action."

    def has_permission(self, request: Request, view: APIView) -> bool:
        user = request.user
        if not (user and user.is_authenticated):
            return False
        return getattr(user, "role", None) in self.allowed_roles


class IsAdminRole(HasRole):
    allowed_roles = frozenset({AccountRole.ADMIN})


class IsDealerRole(HasRole):
    allowed_roles = frozenset({AccountRole.DEALER})


class IsUserRole(HasRole):
    allowed_roles = frozenset({AccountRole.USER})


class IsDealerOrAdminRole(HasRole):
    allowed_roles = frozenset({AccountRole.DEALER, AccountRole.ADMIN})
