"""
Mock Group Generator

Builds synthetic groups for load tests and demos. Participants are named
``P1`` .. ``Pn`` and every expense is 100 paid by participants in rotation.

Pass ``seed`` for reproducible random splits and settlements.
"""

import random
from typing import Literal, Optional

from pydantic import BaseModel, Field

from splitledger.models.ledger import Participant, Settlement, Split, Transaction

EXPENSE_AMOUNT = 100.0


class MockGroup(BaseModel):
    """A generated roster with its transactions and settlements."""

    participants: list[Participant] = Field(default_factory=list)
    transactions: list[Transaction] = Field(default_factory=list)
    settlements: list[Settlement] = Field(default_factory=list)


def _random_splits(
    participants: list[Participant],
    amount: float,
    rng: random.Random,
) -> list[Split]:
    splits = []
    remaining = amount
    for index, participant in enumerate(participants):
        if index == len(participants) - 1:
            share = remaining
        else:
            share = float(round(rng.random() * remaining * 0.7))
        splits.append(Split(participant_id=participant.id, amount=share))
        remaining -= share
    return splits


def generate_mock_data(
    num_participants: int,
    split_mode: Literal["equal", "random"] = "equal",
    num_expenses: Optional[int] = None,
    num_settlements: int = 0,
    seed: Optional[int] = None,
) -> MockGroup:
    """
    Generate a group.

    Args:
        num_participants: Roster size (must be at least 1)
        split_mode: "equal" splits each expense evenly; "random" draws
            shares with the last participant taking the remainder
        num_expenses: Defaults to half the roster, at least one
        num_settlements: Random payments between distinct participants
        seed: Seed for the random generator

    Raises:
        ValueError: If the roster is empty, or settlements are requested
            for a single participant
    """
    if num_participants < 1:
        raise ValueError("At least one participant is required")
    if num_settlements and num_participants < 2:
        raise ValueError("Settlements need at least two participants")

    rng = random.Random(seed)
    participants = [Participant(id=f"P{i + 1}") for i in range(num_participants)]

    if num_expenses is None:
        num_expenses = max(1, num_participants // 2)

    transactions = []
    for index in range(num_expenses):
        paid_by = participants[index % num_participants].id
        if split_mode == "equal":
            share = EXPENSE_AMOUNT / num_participants
            splits = [Split(participant_id=p.id, amount=share) for p in participants]
        else:
            splits = _random_splits(participants, EXPENSE_AMOUNT, rng)
        transactions.append(
            Transaction(paid_by=paid_by, amount=EXPENSE_AMOUNT, splits=splits)
        )

    settlements = []
    for _ in range(num_settlements):
        sender, receiver = rng.sample(participants, 2)
        settlements.append(
            Settlement(
                from_participant_id=sender.id,
                to_participant_id=receiver.id,
                amount=float(round(rng.random() * 50)),
            )
        )

    return MockGroup(
        participants=participants,
        transactions=transactions,
        settlements=settlements,
    )
