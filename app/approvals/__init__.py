"""
Approvals app: the pending-to-approved release gate for staged money.

Prizes, dealer commissions and dealer top-up requests are created pending.
Approving one claims it with a conditional update and credits its
recipient in the same unit of work, so each is paid at most once.

Related apps:
    - betting: Creates prizes and commissions at settlement
    - wallets: Balances and ledger entries
"""
