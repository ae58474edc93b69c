"""
Debt Netting

Turns a balance map into an ordered list of suggested payments that would
bring every balance to zero.

DESIGN DECISION: This is a greedy "smallest-first" matcher, not a
minimum-transaction-count optimiser. Debtors and creditors are both sorted
by ascending absolute balance and matched in that order, so the same
balance map always yields the same plan.
"""

from typing import Iterable

from splitledger.models.ledger import Debt, Participant

# One cent. Anything at or below this is treated as settled.
EPSILON = 0.01


def compute_debts(
    balances: dict[str, float],
    epsilon: float = EPSILON,
) -> list[Debt]:
    """
    Build a netting plan from net balances.

    Args:
        balances: Participant id to signed balance. Not modified.
        epsilon: Balances and payments at or below this size are ignored

    Returns:
        Suggested payments, debtor by debtor in ascending order of what
        they owe. Empty when everyone is within epsilon of zero.
    """
    # sorted() is stable, so ties keep the balance map's insertion order
    creditors = sorted(
        ([pid, amount] for pid, amount in balances.items() if amount > epsilon),
        key=lambda entry: abs(entry[1]),
    )
    debtors = sorted(
        ((pid, amount) for pid, amount in balances.items() if amount < -epsilon),
        key=lambda entry: abs(entry[1]),
    )

    debts: list[Debt] = []
    for debtor_id, debt_amount in debtors:
        remaining = abs(debt_amount)

        for creditor in creditors:
            if remaining <= epsilon:
                break
            creditor_id, credit = creditor
            if credit <= epsilon:
                continue

            settle_amount = min(remaining, credit)
            if settle_amount > epsilon:
                debts.append(Debt(from_id=debtor_id, to_id=creditor_id, amount=settle_amount))

            creditor[1] = credit - settle_amount
            remaining -= settle_amount

    return debts


def net_balances(
    debts: Iterable[Debt],
    participants: Iterable[Participant],
) -> dict[str, float]:
    """
    Re-sum a netting plan into per-participant balances.

    Crediting each payee and debiting each payer reproduces the balance map
    the plan was computed from (within epsilon per participant).
    """
    balances = {participant.id: 0.0 for participant in participants}

    for debt in debts:
        balances[debt.from_id] = balances.get(debt.from_id, 0.0) - debt.amount
        balances[debt.to_id] = balances.get(debt.to_id, 0.0) + debt.amount

    return balances


def debts_total(debts: Iterable[Debt]) -> float:
    """Total money moved by a netting plan."""
    return sum(debt.amount for debt in debts)
