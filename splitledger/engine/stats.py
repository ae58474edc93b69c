"""Dashboard totals for a group."""

from typing import Iterable, Optional

from splitledger.engine.balances import compute_balances
from splitledger.models.ledger import (
    GroupStats,
    Participant,
    Settlement,
    Transaction,
    TransactionKind,
)


def compute_group_stats(
    transactions: Iterable[Transaction],
    participants: Iterable[Participant],
    settlements: Iterable[Settlement] = (),
    balances: Optional[dict[str, float]] = None,
) -> GroupStats:
    """
    Sum a group's transactions by kind and by participant.

    Only expenses count towards ``paid_by_participant`` and
    ``share_by_participant``; transfers and income move money between
    members rather than spending it.

    ``received_by_participant`` is income a participant took in plus
    settlements paid to them. ``owed_to_participant`` is the positive part
    of each balance; pass ``balances`` when they are already computed.
    """
    transactions = list(transactions)
    participants = list(participants)
    settlements = list(settlements)

    paid = {participant.id: 0.0 for participant in participants}
    share = dict(paid)
    received = dict(paid)
    stats = GroupStats()

    for transaction in transactions:
        stats.transaction_count += 1

        if transaction.kind == TransactionKind.INCOME:
            stats.total_income += transaction.amount
            received[transaction.paid_by] = received.get(transaction.paid_by, 0.0) + transaction.amount
        elif transaction.kind == TransactionKind.TRANSFER:
            stats.total_transfers += transaction.amount
        else:
            stats.total_expenses += transaction.amount
            paid[transaction.paid_by] = paid.get(transaction.paid_by, 0.0) + transaction.amount
            for split in transaction.splits:
                share[split.participant_id] = share.get(split.participant_id, 0.0) + split.amount

    for settlement in settlements:
        pid = settlement.to_participant_id
        received[pid] = received.get(pid, 0.0) + settlement.amount

    if balances is None:
        balances = compute_balances(transactions, participants, settlements)

    stats.paid_by_participant = paid
    stats.share_by_participant = share
    stats.received_by_participant = received
    stats.owed_to_participant = {pid: max(balance, 0.0) for pid, balance in balances.items()}
    return stats
