"""
Settlement-State Overlay

Marks suggested payments that a locally tracked settlement already covers,
so a group view can show a "settled" badge next to them.

This is display-only. Recorded settlements already feed into the balance
computation; the overlay never changes balances or the netting plan, and
recomputing it from the same inputs always gives the same answer.
"""

from typing import Iterable

from splitledger.engine.netting import EPSILON
from splitledger.models.ledger import Debt, DebtStatus, Settlement


def is_debt_settled(
    debt: Debt,
    settlements: Iterable[Settlement],
    epsilon: float = EPSILON,
) -> bool:
    """True if a settlement between the same pair covers the full amount."""
    return any(
        settlement.from_participant_id == debt.from_id
        and settlement.to_participant_id == debt.to_id
        and settlement.amount >= debt.amount - epsilon
        for settlement in settlements
    )


def apply_settlement_overlay(
    debts: Iterable[Debt],
    settlements: Iterable[Settlement],
    epsilon: float = EPSILON,
) -> list[DebtStatus]:
    """Classify each debt as settled or outstanding, preserving order."""
    tracked = list(settlements)
    return [
        DebtStatus(debt=debt, settled=is_debt_settled(debt, tracked, epsilon))
        for debt in debts
    ]


def outstanding_debts(
    debts: Iterable[Debt],
    settlements: Iterable[Settlement],
    epsilon: float = EPSILON,
) -> list[Debt]:
    return [
        status.debt
        for status in apply_settlement_overlay(debts, settlements, epsilon)
        if not status.settled
    ]
