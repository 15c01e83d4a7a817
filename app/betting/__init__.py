"""
Betting app: wagers, draw declaration and settlement.

Wagers debit the user's wallet when placed. Declaring a draw resolves its
pending wagers exactly once and stages prizes and dealer commissions for
approval; user rebates are credited immediately.

Related apps:
    - wallets: Balances and ledger entries
    - approvals: Releases prizes and dealer commissions
"""
