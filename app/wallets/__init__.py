"""
Wallets app: accounts, balances and the ledger.

Every balance change in the system goes through this app. Balances never
go negative, and each account's balance equals the sum of its ledger
entries.

Related apps:
    - betting: Debits stakes, credits rebates
    - approvals: Credits released prizes, commissions and top-ups

Usage:
    from wallets.services import CreditTransferService
    from wallets.types import TransferKind

    CreditTransferService.transfer(dealer_id, user_id, amount, TransferKind.DEALER_TO_USER)
"""
