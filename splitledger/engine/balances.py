"""
Balance Accumulation

Folds a group's full transaction history and recorded settlements into one
net balance per participant. Positive means the participant is owed money,
negative means they owe money.

DESIGN DECISION: Balances are recomputed from scratch on every call.
There is no incremental state to drift out of sync with the history.

Ids referenced by a transaction or settlement but missing from the roster
start at zero instead of raising, so the result always sums to zero.
"""

from typing import Iterable

import structlog

from splitledger.models.ledger import (
    Participant,
    Settlement,
    Transaction,
    TransactionKind,
)

logger = structlog.get_logger(__name__)


def _apply(balances: dict[str, float], participant_id: str, delta: float) -> None:
    if participant_id not in balances:
        logger.debug("unknown_participant_initialized", participant_id=participant_id)
        balances[participant_id] = 0.0
    balances[participant_id] += delta


def compute_balances(
    transactions: Iterable[Transaction],
    participants: Iterable[Participant],
    settlements: Iterable[Settlement],
) -> dict[str, float]:
    """
    Compute each participant's net balance.

    Args:
        transactions: Expenses, transfers and income entries
        participants: Group roster; every member appears in the result
        settlements: Payments already made between participants

    Returns:
        Mapping of participant id to signed balance. Empty when the
        roster is empty.
    """
    balances = {participant.id: 0.0 for participant in participants}
    if not balances:
        return {}

    for transaction in transactions:
        if transaction.kind == TransactionKind.INCOME:
            # The receiver holds pooled money and owes each share back
            for split in transaction.splits:
                _apply(balances, transaction.paid_by, -split.amount)
                _apply(balances, split.participant_id, split.amount)
        else:
            _apply(balances, transaction.paid_by, transaction.amount)
            for split in transaction.splits:
                _apply(balances, split.participant_id, -split.amount)

    for settlement in settlements:
        _apply(balances, settlement.from_participant_id, settlement.amount)
        _apply(balances, settlement.to_participant_id, -settlement.amount)

    return balances


def balances_total(balances: dict[str, float]) -> float:
    """Sum of all balances; zero for a consistent history."""
    return sum(balances.values())


def is_zero_sum(balances: dict[str, float], tolerance: float = 1e-9) -> bool:
    """
    Check that balances cancel out.

    The tolerance is relative to the largest absolute balance, with an
    absolute floor of ``tolerance`` itself for small groups.
    """
    scale = max((abs(value) for value in balances.values()), default=0.0)
    return abs(balances_total(balances)) <= tolerance * max(scale, 1.0)
