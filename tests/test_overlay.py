"""Tests for the settlement-state overlay."""

from splitledger.engine import apply_settlement_overlay, is_debt_settled, outstanding_debts
from splitledger.models.ledger import Debt, Settlement


def settle(from_id, to_id, amount):
    return Settlement(from_participant_id=from_id, to_participant_id=to_id, amount=amount)


class TestIsDebtSettled:

    def test_matching_pair_and_full_amount(self):
        debt = Debt(from_id="B", to_id="A", amount=30)
        assert is_debt_settled(debt, [settle("B", "A", 30)])

    def test_larger_settlement_covers(self):
        debt = Debt(from_id="B", to_id="A", amount=30)
        assert is_debt_settled(debt, [settle("B", "A", 45)])

    def test_within_a_cent_counts(self):
        debt = Debt(from_id="B", to_id="A", amount=30.004)
        assert is_debt_settled(debt, [settle("B", "A", 30.0)])

    def test_partial_amount_does_not_count(self):
        debt = Debt(from_id="B", to_id="A", amount=30)
        assert not is_debt_settled(debt, [settle("B", "A", 20)])

    def test_reverse_direction_does_not_count(self):
        debt = Debt(from_id="B", to_id="A", amount=30)
        assert not is_debt_settled(debt, [settle("A", "B", 30)])

    def test_no_settlements(self):
        assert not is_debt_settled(Debt(from_id="B", to_id="A", amount=1), [])


class TestApplySettlementOverlay:

    def test_classifies_in_order(self):
        debts = [
            Debt(from_id="C", to_id="B", amount=25),
            Debt(from_id="D", to_id="B", amount=10),
            Debt(from_id="D", to_id="A", amount=55),
        ]
        statuses = apply_settlement_overlay(debts, [settle("D", "B", 10)])

        assert [s.debt for s in statuses] == debts
        assert [s.settled for s in statuses] == [False, True, False]

    def test_idempotent(self):
        debts = [Debt(from_id="B", to_id="A", amount=30), Debt(from_id="C", to_id="A", amount=30)]
        settlements = [settle("C", "A", 30)]

        first = apply_settlement_overlay(debts, settlements)
        second = apply_settlement_overlay(debts, settlements)

        assert first == second

    def test_accepts_generators(self):
        debts = [Debt(from_id="B", to_id="A", amount=30), Debt(from_id="C", to_id="A", amount=30)]
        statuses = apply_settlement_overlay(debts, (s for s in [settle("C", "A", 30)]))
        assert [s.settled for s in statuses] == [False, True]

    def test_outstanding_debts(self):
        open_debt = Debt(from_id="B", to_id="A", amount=30)
        paid = Debt(from_id="C", to_id="A", amount=30)
        assert outstanding_debts([open_debt, paid], [settle("C", "A", 30)]) == [open_debt]
