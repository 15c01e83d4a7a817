"""
Wallet services.

Public API:
    AccountStore: Locked reads and conditional balance updates
    LedgerRecorder: Append-only ledger writer and reader
    CreditTransferService: Account-to-account transfers and platform credit
    AccountService: Account opening and settings
    LedgerReconciliationService: Balance versus ledger consistency check
"""

from wallets.services.account_store import AccountStore
from wallets.services.accounts import AccountService
from wallets.services.ledger_recorder import LedgerRecorder
from wallets.services.reconciliation import LedgerReconciliationService
from wallets.services.transfers import CreditTransferService

__all__ = [
    "AccountStore",
    "AccountService",
    "CreditTransferService",
    "LedgerRecorder",
    "LedgerReconciliationService",
]
