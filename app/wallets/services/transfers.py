"""
Credit transfer service: moves money between two accounts, or issues
platform credit to one.

A transfer debits one account and credits another by the same amount in a
single atomic unit of work, writing a paired ledger entry on each side.
Total money across the two accounts is unchanged. Platform credit (admin
funding, opening balances, approved payouts) is the only way money enters
the system and always writes exactly one ledger entry.

Usage:
    from wallets.services import CreditTransferService
    from wallets.types import TransferKind

    result = CreditTransferService.transfer(
        dealer.id, user.id, Decimal("500.00"), TransferKind.DEALER_TO_USER
    )
    if result.success:
        receipt = result.data
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from core.services import BaseService, ServiceResult
from wallets.exceptions import AccountNotFound, InsufficientFunds, InvalidTransfer
from wallets.models import Account, AccountRole, EntryKind, LedgerEntry
from wallets.services.account_store import AccountStore
from wallets.services.ledger_recorder import LedgerRecorder
from wallets.types import TransferKind, TransferReceipt


@dataclass(frozen=True)
class TransferRule:
    """Who may send to whom for one transfer kind, and how it is recorded."""

    sender_roles: frozenset[str]
    recipient_roles: frozenset[str]
    debit_kind: str
    credit_kind: str
    managed_recipient_only: bool = False


TRANSFER_RULES: dict[str, TransferRule] = {
    TransferKind.DEALER_TO_USER: TransferRule(
        sender_roles=frozenset({AccountRole.DEALER}),
        recipient_roles=frozenset({AccountRole.USER}),
        debit_kind=EntryKind.DEALER_DEBIT_TO_USER,
        credit_kind=EntryKind.DEALER_CREDIT,
        managed_recipient_only=True,
    ),
    TransferKind.ADMIN_TO_USER: TransferRule(
        sender_roles=frozenset({AccountRole.ADMIN}),
        recipient_roles=frozenset({AccountRole.USER, AccountRole.DEALER}),
        debit_kind=EntryKind.ADMIN_DEBIT_TO_USER,
        credit_kind=EntryKind.ADMIN_CREDIT,
    ),
    TransferKind.USER_TO_ADMIN: TransferRule(
        sender_roles=frozenset({AccountRole.USER, AccountRole.DEALER}),
        recipient_roles=frozenset({AccountRole.ADMIN}),
        debit_kind=EntryKind.ADMIN_DEBIT_FROM_USER,
        credit_kind=EntryKind.ADMIN_CREDIT_FROM_USER,
    ),
}


def parse_amount(amount, field_name: str = "amount") -> Decimal:
    """
    Parse a positive monetary amount with at most two decimal places.

    Raises:
        InvalidTransfer: If the amount is not a positive cent amount
    """
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidTransfer(
            f"{field_name} must be a number",
            details={field_name: [f"Not a number: {amount!r}"]},
        ) from None
    if not value.is_finite() or value <= 0:
        raise InvalidTransfer(
            f"{field_name} must be positive",
            details={field_name: ["Must be greater than zero"]},
        )
    if value != value.quantize(Decimal("0.01")):
        raise InvalidTransfer(
            f"{field_name} may have at most two decimal places",
            details={field_name: ["At most two decimal places"]},
        )
    return value


class CreditTransferService(BaseService):
    """
    Atomic two-account transfers and single-account platform credits.

    Methods:
        transfer: Move money between two accounts
        issue_credit: Credit an account with platform money
        post_credit: Credit inside an already open unit of work
    """

    @classmethod
    def transfer(
        cls,
        from_account_id: str,
        to_account_id: str,
        amount: Decimal,
        kind: str,
    ) -> ServiceResult[TransferReceipt]:
        """
        Move money from one account to another.

        Both accounts are locked in ascending id order, the sender's
        balance is checked, both balances change and the paired ledger
        entries are written, all in one unit of work. Any failure leaves
        both balances untouched.

        Args:
            from_account_id: Account to debit
            to_account_id: Account to credit
            amount: Positive amount with at most two decimal places
            kind: TransferKind value

        Returns:
            ServiceResult with TransferReceipt on success. Failure kinds:
            INVALID_INPUT (amount, same account, role rules), NOT_FOUND
            (missing account, or a dealer sending to a user they do not
            manage), INSUFFICIENT_FUNDS, STORAGE_ERROR.
        """
        return cls.run_atomic(
            cls.execute_transfer, from_account_id, to_account_id, amount, kind
        )

    @classmethod
    def execute_transfer(
        cls,
        from_account_id: str,
        to_account_id: str,
        amount: Decimal,
        kind: str,
    ) -> TransferReceipt:
        """
        Perform a transfer inside the caller's unit of work.

        Raises the same errors that transfer() reports.
        """
        amount = parse_amount(amount)
        rule = TRANSFER_RULES.get(kind)
        if rule is None:
            raise InvalidTransfer(
                f"Unknown transfer kind: {kind}",
                details={"kind": [f"Expected one of {', '.join(TransferKind.values)}"]},
            )
        if from_account_id == to_account_id:
            raise InvalidTransfer(
                "Cannot transfer to the same account",
                error_code="SAME_ACCOUNT_TRANSFER",
            )

        accounts = AccountStore.lock_accounts([from_account_id, to_account_id])
        sender = accounts[from_account_id]
        recipient = accounts[to_account_id]
        cls._check_roles(rule, sender, recipient, kind)

        if sender.balance < amount:
            raise InsufficientFunds(
                sender.id, required=amount, available=sender.balance
            )

        from_balance = AccountStore.apply_delta(sender.id, -amount)
        to_balance = AccountStore.apply_delta(recipient.id, amount)
        debit, credit = LedgerRecorder.record_transfer(
            sender.id,
            recipient.id,
            amount,
            rule.debit_kind,
            rule.credit_kind,
            from_balance_after=from_balance,
            to_balance_after=to_balance,
        )

        cls.get_logger().info(
            "Transfer committed",
            extra={
                "kind": kind,
                "from_account_id": sender.id,
                "to_account_id": recipient.id,
                "amount": str(amount),
            },
        )
        return TransferReceipt(
            kind=kind,
            from_account_id=sender.id,
            to_account_id=recipient.id,
            amount=amount,
            debit_entry_id=debit.id,
            credit_entry_id=credit.id,
            from_balance=from_balance,
            to_balance=to_balance,
        )

    @staticmethod
    def _check_roles(
        rule: TransferRule, sender: Account, recipient: Account, kind: str
    ) -> None:
        if sender.role not in rule.sender_roles:
            raise InvalidTransfer(
                f"A {sender.role} account cannot send a {kind} transfer",
                error_code="TRANSFER_ROLE_NOT_ALLOWED",
                details={"from_account_id": sender.id, "role": sender.role},
            )
        if recipient.role not in rule.recipient_roles:
            raise InvalidTransfer(
                f"A {recipient.role} account cannot receive a {kind} transfer",
                error_code="TRANSFER_ROLE_NOT_ALLOWED",
                details={"to_account_id": recipient.id, "role": recipient.role},
            )
        if rule.managed_recipient_only and recipient.dealer_id != sender.id:
            raise AccountNotFound(
                "User not found or not managed by this dealer",
                details={"to_account_id": recipient.id, "dealer_id": sender.id},
            )

    @classmethod
    def issue_credit(
        cls,
        account_id: str,
        amount: Decimal,
        kind: str = EntryKind.ADMIN_CREDIT,
        related_entity_id: str | None = None,
        description: str = "",
    ) -> ServiceResult[LedgerEntry]:
        """
        Credit an account with platform money.

        Args:
            account_id: Account to credit
            amount: Positive amount with at most two decimal places
            kind: EntryKind of the credit (admin_credit by default)
            related_entity_id: Optional reference recorded on the entry
            description: Human-readable note

        Returns:
            ServiceResult with the LedgerEntry on success
        """
        return cls.run_atomic(
            cls.post_credit,
            account_id,
            amount,
            kind,
            related_entity_id=related_entity_id,
            description=description,
        )

    @classmethod
    def post_credit(
        cls,
        account_id: str,
        amount: Decimal,
        kind: str,
        related_entity_id: str | None = None,
        description: str = "",
    ) -> LedgerEntry:
        """
        Lock an account, credit it and record one ledger entry.

        Runs inside the caller's unit of work; used by approvals, rebates
        and platform credits alike.
        """
        amount = parse_amount(amount)
        AccountStore.lock_account(account_id)
        balance = AccountStore.apply_delta(account_id, amount)
        entry = LedgerRecorder.record(
            account_id,
            amount,
            kind,
            related_entity_id=related_entity_id,
            balance_after=balance,
            description=description,
        )
        cls.get_logger().info(
            "Credit posted",
            extra={
                "account_id": account_id,
                "amount": str(amount),
                "kind": kind,
                "related_entity_id": related_entity_id,
            },
        )
        return entry
