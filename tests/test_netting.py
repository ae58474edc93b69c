"""Tests for debt netting."""

import pytest

from splitledger.engine import EPSILON, compute_balances, compute_debts, debts_total, net_balances
from splitledger.mock_data import generate_mock_data
from splitledger.models.ledger import Debt, Participant


def roster(balances):
    return [Participant(id=pid) for pid in balances]


def assert_round_trip(balances):
    debts = compute_debts(balances)
    rebuilt = net_balances(debts, roster(balances))
    for pid, value in balances.items():
        assert rebuilt[pid] == pytest.approx(value, abs=EPSILON)


class TestComputeDebts:
    """Greedy smallest-first matching."""

    def test_equal_split_gives_two_debts_to_payer(self):
        debts = compute_debts({"A": 60.0, "B": -30.0, "C": -30.0})

        assert len(debts) == 2
        assert {d.from_id for d in debts} == {"B", "C"}
        assert all(d.to_id == "A" for d in debts)
        assert debts_total(debts) == pytest.approx(60)

    def test_single_pair_gives_one_full_debt(self):
        assert compute_debts({"A": 42.5, "B": -42.5}) == [
            Debt(from_id="B", to_id="A", amount=42.5)
        ]

    def test_no_creditors_or_no_debtors(self):
        assert compute_debts({}) == []
        assert compute_debts({"A": 10.0}) == []
        assert compute_debts({"A": -10.0}) == []

    def test_all_within_epsilon_is_settled(self):
        assert compute_debts({"A": 0.004, "B": -0.009, "C": 0.005}) == []

    def test_exactly_epsilon_is_settled(self):
        assert compute_debts({"A": 0.01, "B": -0.01}) == []

    def test_smallest_debtor_matched_to_smallest_creditor_first(self):
        balances = {"A": 55.0, "B": 35.0, "C": -25.0, "D": -65.0}

        debts = compute_debts(balances)

        assert debts == [
            Debt(from_id="C", to_id="B", amount=25.0),
            Debt(from_id="D", to_id="B", amount=10.0),
            Debt(from_id="D", to_id="A", amount=55.0),
        ]

    def test_mixed_history_plan(self):
        """B owes the most; the smaller creditor C is paid first."""
        debts = compute_debts({"A": 60.0, "B": -95.0, "C": 35.0})

        assert debts == [
            Debt(from_id="B", to_id="C", amount=35.0),
            Debt(from_id="B", to_id="A", amount=60.0),
        ]
        assert not any(d.from_id == "A" and d.to_id == "B" for d in debts)

    def test_ties_keep_insertion_order(self):
        debts = compute_debts({"A": 60.0, "C": -30.0, "B": -30.0})
        assert [d.from_id for d in debts] == ["C", "B"]

    def test_input_is_not_mutated(self):
        balances = {"A": 60.0, "B": -30.0, "C": -30.0}
        snapshot = dict(balances)
        compute_debts(balances)
        assert balances == snapshot

    def test_same_input_same_plan(self):
        balances = {"A": 12.5, "B": -40.0, "C": 30.0, "D": -2.5}
        assert compute_debts(balances) == compute_debts(dict(balances))

    def test_sub_cent_residue_is_dropped(self):
        """A debtor left with less than a cent after all creditors are paid."""
        debts = compute_debts({"A": 10.0, "B": -10.005})
        assert debts == [Debt(from_id="B", to_id="A", amount=10.0)]

    def test_float_drift_amounts(self):
        debts = compute_debts({"A": 10.0, "B": 0.1 + 0.2, "C": -10.3})
        assert all(d.amount > EPSILON for d in debts)
        assert debts_total(debts) == pytest.approx(10.3)

    def test_custom_epsilon(self):
        assert compute_debts({"A": 0.5, "B": -0.5}, epsilon=1.0) == []
        assert len(compute_debts({"A": 0.5, "B": -0.5}, epsilon=0.0)) == 1


class TestNetBalances:
    """Re-summing a plan."""

    def test_credits_payee_and_debits_payer(self):
        debts = [Debt(from_id="B", to_id="A", amount=30), Debt(from_id="C", to_id="A", amount=30)]
        participants = [Participant(id=pid) for pid in "ABC"]
        assert net_balances(debts, participants) == pytest.approx({"A": 60, "B": -30, "C": -30})

    def test_empty_plan_gives_zeros(self):
        assert net_balances([], [Participant(id="A")]) == {"A": 0.0}

    def test_unknown_ids_start_at_zero(self):
        rebuilt = net_balances([Debt(from_id="X", to_id="A", amount=5)], [Participant(id="A")])
        assert rebuilt == pytest.approx({"A": 5, "X": -5})


class TestRoundTrip:
    """Applying a plan reproduces the balances it came from."""

    @pytest.mark.parametrize("balances", [
        {"A": 60.0, "B": -30.0, "C": -30.0},
        {"A": 55.0, "B": 35.0, "C": -25.0, "D": -65.0},
        {"A": 60.0, "B": -95.0, "C": 35.0},
        {"A": 33.33, "B": 33.34, "C": -66.67},
    ])
    def test_known_maps(self, balances):
        assert_round_trip(balances)

    @pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
    def test_random_groups(self, seed):
        group = generate_mock_data(15, split_mode="random", num_expenses=25, num_settlements=10, seed=seed)
        balances = compute_balances(group.transactions, group.participants, group.settlements)
        assert_round_trip(balances)
