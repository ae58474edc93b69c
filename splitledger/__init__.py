"""
Split Ledger - Source Package

Balance computation and debt netting for groups that share expenses.

DESIGN PRINCIPLES:
1. Balances are always derived from the full history, never stored
2. The engine is a set of pure functions with explicit arguments
3. Amounts within one cent of zero are treated as settled
4. Malformed input degrades gracefully instead of crashing
5. Data sources are swappable
"""

from splitledger.engine import (
    EPSILON,
    apply_settlement_overlay,
    compute_balances,
    compute_debts,
    compute_group_stats,
    is_debt_settled,
    net_balances,
    outstanding_debts,
)

__version__ = "1.0.0"

__all__ = [
    "EPSILON",
    "apply_settlement_overlay",
    "compute_balances",
    "compute_debts",
    "compute_group_stats",
    "is_debt_settled",
    "net_balances",
    "outstanding_debts",
]
