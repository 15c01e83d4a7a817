"""
Factory Boy factories for wallet test data.

Accounts are created with a zero balance. Pass ``funds`` to give an account
money through CreditTransferService, so its ledger always matches its
balance.

Usage:
    from wallets.tests.factories import (
        AdminAccountFactory,
        DealerAccountFactory,
        UserAccountFactory,
    )

    # Dealer with 5,000 of platform credit
    dealer = DealerAccountFactory(funds=Decimal("5000.00"))

    # User managed by that dealer with a 2% rebate
    user = UserAccountFactory(dealer=dealer, commission_rate=Decimal("2.00"))
"""

from decimal import Decimal

import factory

from wallets.models import Account, AccountRole, EntryKind


class AccountFactory(factory.django.DjangoModelFactory):
    """
    Factory for creating Account instances.

    Default creates an unmanaged user account with no balance. Prefer the
    role-specific factories below.
    """

    class Meta:
        model = Account
        skip_postgeneration_save = True

    username = factory.Sequence(lambda n: f"account{n}")
    role = AccountRole.USER
    commission_rate = Decimal("0")

    @factory.post_generation
    def funds(obj, create, extracted, **kwargs):
        """Credit the account through the ledger when ``funds`` is given."""
        if not create or not extracted:
            return

        from wallets.services import CreditTransferService

        result = CreditTransferService.issue_credit(
            obj.id, Decimal(extracted), EntryKind.ADMIN_CREDIT, description="Test funds"
        )
        assert result.success, result.error
        obj.refresh_from_db()


class AdminAccountFactory(AccountFactory):
    username = factory.Sequence(lambda n: f"admin{n}")
    role = AccountRole.ADMIN


class DealerAccountFactory(AccountFactory):
    username = factory.Sequence(lambda n: f"dealer{n}")
    role = AccountRole.DEALER


class UserAccountFactory(AccountFactory):
    """User account managed by a freshly created dealer."""

    username = factory.Sequence(lambda n: f"player{n}")
    role = AccountRole.USER
    dealer = factory.SubFactory(DealerAccountFactory)
