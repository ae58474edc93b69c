"""Balance and debt-netting engine."""

from splitledger.engine.balances import balances_total, compute_balances, is_zero_sum
from splitledger.engine.netting import EPSILON, compute_debts, debts_total, net_balances
from splitledger.engine.overlay import (
    apply_settlement_overlay,
    is_debt_settled,
    outstanding_debts,
)
from splitledger.engine.stats import compute_group_stats

__all__ = [
    "EPSILON",
    "apply_settlement_overlay",
    "balances_total",
    "compute_balances",
    "compute_debts",
    "compute_group_stats",
    "debts_total",
    "is_debt_settled",
    "is_zero_sum",
    "net_balances",
    "outstanding_debts",
]
