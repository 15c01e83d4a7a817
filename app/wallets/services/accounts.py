"""
Account service: opening accounts and changing their betting settings.

Opening balances never appear from nowhere: a user's opening deposit is a
dealer-to-user transfer from the managing dealer, and a dealer's or admin's
opening balance is recorded as platform credit.

Usage:
    from wallets.services import AccountService

    result = AccountService.open_account(
        "player1",
        AccountRole.USER,
        dealer_id=dealer.id,
        initial_deposit=Decimal("100.00"),
    )
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from core.exceptions import ConflictError, ValidationError
from core.helpers import CENT
from core.services import BaseService, ServiceResult
from wallets.models import Account, AccountRole, EntryKind
from wallets.services.account_store import AccountStore
from wallets.services.transfers import CreditTransferService
from wallets.types import TransferKind

# Fields an admin may change after opening
SETTING_FIELDS = frozenset(
    {
        "is_blocked",
        "bet_limit_per_draw",
        "bet_limit_2d",
        "bet_limit_1d",
        "commission_rate",
        "prize_rate_2d",
        "prize_rate_1d",
    }
)

# Setting -> (nullable, upper bound); every decimal setting is at least zero
DECIMAL_SETTINGS = {
    "bet_limit_per_draw": (True, None),
    "bet_limit_2d": (True, None),
    "bet_limit_1d": (True, None),
    "commission_rate": (False, Decimal("100")),
    "prize_rate_2d": (True, None),
    "prize_rate_1d": (True, None),
}


def _parse_decimal(name: str, value) -> Decimal:
    try:
        parsed = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        parsed = None
    if parsed is None or not parsed.is_finite():
        raise ValidationError(
            f"{name} must be a number",
            details={name: [f"Not a number: {value!r}"]},
        )
    return parsed


def clean_settings(values: dict) -> dict:
    """
    Validate account settings before they reach the database.

    Raises:
        ValidationError: For unknown fields or values of the wrong type or range
    """
    unknown = set(values) - SETTING_FIELDS
    if unknown:
        raise ValidationError(
            "Unknown account settings",
            details={name: ["Not an account setting"] for name in sorted(unknown)},
        )

    cleaned = {}
    for name, value in values.items():
        if name == "is_blocked":
            if not isinstance(value, bool):
                raise ValidationError(
                    "is_blocked must be true or false",
                    details={name: ["Must be a boolean"]},
                )
            cleaned[name] = value
            continue

        nullable, upper = DECIMAL_SETTINGS[name]
        if value is None:
            if not nullable:
                raise ValidationError(
                    f"{name} cannot be null", details={name: ["May not be null"]}
                )
            cleaned[name] = None
            continue

        parsed = _parse_decimal(name, value)
        if parsed < 0 or (upper is not None and parsed > upper):
            bound = f"between 0 and {upper}" if upper is not None else "zero or positive"
            raise ValidationError(
                f"{name} must be {bound}", details={name: [f"Must be {bound}"]}
            )
        field = Account._meta.get_field(name)
        if parsed >= 10 ** (field.max_digits - field.decimal_places) or (
            parsed != parsed.quantize(CENT)
        ):
            raise ValidationError(
                f"{name} has too many digits",
                details={name: [f"At most {field.max_digits} digits, 2 after the point"]},
            )
        cleaned[name] = parsed
    return cleaned



class AccountService(BaseService):
    """Account lifecycle operations."""

    @classmethod
    def open_account(
        cls,
        username: str,
        role: str,
        *,
        dealer_id: str | None = None,
        initial_deposit: Decimal = Decimal("0"),
        **settings,
    ) -> ServiceResult[Account]:
        """
        Create an account and fund its opening balance.

        Args:
            username: Unique login name
            role: AccountRole value
            dealer_id: Managing dealer (required for users)
            initial_deposit: Opening balance; taken from the dealer for
                users, issued as platform credit otherwise
            **settings: Initial values for SETTING_FIELDS

        Returns:
            ServiceResult with the created Account. Failure kinds:
            INVALID_INPUT, CONFLICT (username taken), NOT_FOUND (dealer),
            INSUFFICIENT_FUNDS (dealer cannot cover the deposit).
        """
        return cls.run_atomic(
            cls._open_account,
            username,
            role,
            dealer_id=dealer_id,
            initial_deposit=initial_deposit,
            settings=settings,
        )

    @classmethod
    def _open_account(
        cls,
        username: str,
        role: str,
        *,
        dealer_id: str | None,
        initial_deposit,
        settings: dict,
    ) -> Account:
        if role not in AccountRole.values:
            raise ValidationError(
                f"Unknown role: {role}",
                details={"role": [f"Expected one of {', '.join(AccountRole.values)}"]},
            )
        settings = clean_settings(settings)
        initial_deposit = _parse_decimal("initial_deposit", initial_deposit)
        if initial_deposit < 0:
            raise ValidationError(
                "Initial deposit cannot be negative",
                details={"initial_deposit": ["Must be zero or positive"]},
            )
        if role == AccountRole.USER and not dealer_id:
            raise ValidationError(
                "Users must be opened under a dealer",
                details={"dealer_id": ["This field is required for users"]},
            )
        if role != AccountRole.USER and dealer_id:
            raise ValidationError(
                "Only users can be managed by a dealer",
                details={"dealer_id": ["Only allowed for users"]},
            )
        if Account.objects.filter(username=username).exists():
            raise ConflictError(
                f"Username {username} is already taken",
                error_code="USERNAME_TAKEN",
                details={"username": username},
            )

        if dealer_id:
            dealer = AccountStore.lock_account(dealer_id)
            if dealer.role != AccountRole.DEALER:
                raise ValidationError(
                    "Managing account must be a dealer",
                    details={"dealer_id": ["Not a dealer account"]},
                )

        account = Account.objects.create(
            username=username,
            role=role,
            dealer_id=dealer_id,
            **settings,
        )

        if initial_deposit > 0:
            if dealer_id:
                CreditTransferService.execute_transfer(
                    dealer_id, account.id, initial_deposit, TransferKind.DEALER_TO_USER
                )
            else:
                CreditTransferService.post_credit(
                    account.id,
                    initial_deposit,
                    EntryKind.ADMIN_CREDIT,
                    description="Opening balance",
                )
            account.refresh_from_db()

        cls.get_logger().info(
            "Account opened",
            extra={
                "account_id": account.id,
                "role": role,
                "dealer_id": dealer_id,
                "initial_deposit": str(initial_deposit),
            },
        )
        return account

    @classmethod
    def update_settings(cls, account_id: str, **changes) -> ServiceResult[Account]:
        """
        Change limits, rates or the blocked flag of an account.

        Args:
            account_id: Account to change
            **changes: New values for SETTING_FIELDS

        Returns:
            ServiceResult with the updated Account
        """
        return cls.run_atomic(cls._update_settings, account_id, changes)

    @classmethod
    def _update_settings(cls, account_id: str, changes: dict) -> Account:
        changes = clean_settings(changes)
        account = AccountStore.lock_account(account_id)
        for name, value in changes.items():
            setattr(account, name, value)
        account.save(update_fields=[*changes, "updated_at"])

        cls.get_logger().info(
            "Account settings updated",
            extra={"account_id": account_id, "fields": sorted(changes)},
        )
        return account
