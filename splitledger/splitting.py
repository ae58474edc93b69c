"""
Split Helpers

Build the ``splits`` list for a new transaction. These back the split editor
in the add-expense form: an even split to start with, then proportional
redistribution as the user pins ("locks") individual shares.
"""

from typing import Iterable, Sequence

from splitledger.models.ledger import Split


def equal_split(amount: float, participant_ids: Sequence[str]) -> list[Split]:
    """Give every participant the same share of ``amount``."""
    if not participant_ids:
        return []
    share = amount / len(participant_ids)
    return [Split(participant_id=pid, amount=share) for pid in participant_ids]


def splits_total(splits: Iterable[Split]) -> float:
    return sum(split.amount for split in splits)


def redistribute(
    amount: float,
    shares: dict[str, float],
    locked: Iterable[str] = (),
) -> dict[str, float]:
    """
    Rebalance shares so they add up to ``amount``.

    Locked shares are kept as they are. Whatever is left goes to the
    unlocked participants in proportion to their current shares, or evenly
    if those shares are all zero. A single unlocked participant takes the
    whole remainder. No share goes below zero.

    Args:
        amount: The transaction total
        shares: Current share per participant id (insertion order is kept)
        locked: Ids whose share the user has pinned

    Returns:
        A new mapping; ``shares`` is not modified.
    """
    locked_ids = set(locked)
    unlocked_ids = [pid for pid in shares if pid not in locked_ids]

    if not unlocked_ids:
        return dict(shares)

    locked_total = sum(value for pid, value in shares.items() if pid in locked_ids)
    remaining = amount - locked_total

    result = dict(shares)

    if len(unlocked_ids) == 1:
        result[unlocked_ids[0]] = max(0.0, remaining)
        return result

    unlocked_total = sum(shares[pid] for pid in unlocked_ids)
    for pid in unlocked_ids:
        if unlocked_total > 0:
            proportion = shares[pid] / unlocked_total
        else:
            proportion = 1 / len(unlocked_ids)
        result[pid] = max(0.0, remaining * proportion)

    return result


def split_from_shares(shares: dict[str, float]) -> list[Split]:
    """Turn an editor's share mapping into transaction splits."""
    return [Split(participant_id=pid, amount=value) for pid, value in shares.items()]
