"""
Trusted identity authentication for the API.

Credentials are checked upstream (gateway or auth service). By the time a
request reaches this service it carries the verified account id and role
in two headers, which are trusted as-is:

    X-Account-Id: acc_0lzq3v8k2f1x9a0mbq
    X-Account-Role: dealer

Requests without the headers stay anonymous and are rejected by the
default IsAuthenticated permission.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.conf import settings
from rest_framework import authentication, exceptions

from wallets.models import AccountRole

if TYPE_CHECKING:
    from rest_framework.request import Request


@dataclass(frozen=True)
class AccountIdentity:
    """
    The verified caller of a request.

    Stands in for request.user; it is not loaded from the database.
    """

    id: str
    role: str

    is_authenticated = True
    is_anonymous = False

    @property
    def pk(self) -> str:
        return self.id

    @property
    def is_admin(self) -> bool:
        return self.role == AccountRole.ADMIN

    @property
    def is_dealer(self) -> bool:
        return self.role == AccountRole.DEALER

    @property
    def is_user(self) -> bool:
        return self.role == AccountRole.USER


class TrustedIdentityAuthentication(authentication.BaseAuthentication):
    """
    Read the upstream-verified (account id, role) pair from request headers.
    """

    def authenticate(self, request: Request) -> tuple[AccountIdentity, None] | None:
        account_id = request.META.get(settings.TRUSTED_IDENTITY_ID_HEADER, "").strip()
        role = request.META.get(settings.TRUSTED_IDENTITY_ROLE_HEADER, "").strip()

        if not account_id and not role:
            return None
        if not account_id or not role:
            raise exceptions.AuthenticationFailed(
                "Both account id and role headers are required"
            )
        if role not in AccountRole.values:
            raise exceptions.AuthenticationFailed(f"Unknown account role: {role}")

        return AccountIdentity(id=account_id, role=role), None

    def authenticate_header(self, request: Request) -> str:
        return "X-Account-Id"
