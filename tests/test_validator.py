"""Tests for ledger record validation."""

import pytest

from splitledger.models.ledger import Settlement, Split, Transaction, TransactionKind
from splitledger.validation import LedgerValidator

MEMBERS = ["A", "B", "C"]


@pytest.fixture
def validator():
    return LedgerValidator()


def issue_types(result):
    return {issue.issue_type for issue in result.issues}


class TestValidateTransaction:

    def test_valid_expense(self, validator):
        tx = Transaction(
            paid_by="A", amount=90,
            splits=[Split(participant_id=p, amount=30) for p in MEMBERS],
        )
        result = validator.validate_transaction(tx, MEMBERS)

        assert result.is_valid is True
        assert result.issues == []
        assert result.record_type == "transaction"
        assert validator.get_user_friendly_summary(result) == "✅ All checks passed!"

    def test_non_positive_amount(self, validator):
        tx = Transaction(paid_by="A", amount=0, splits=[Split(participant_id="B", amount=0)])
        result = validator.validate_transaction(tx, MEMBERS)

        assert result.is_valid is False
        assert "non_positive" in issue_types(result)

    def test_missing_splits(self, validator):
        result = validator.validate_transaction(Transaction(paid_by="A", amount=10), MEMBERS)
        assert "missing" in issue_types(result)
        assert result.has_errors

    def test_split_mismatch(self, validator):
        tx = Transaction(
            paid_by="A", amount=100,
            splits=[Split(participant_id="A", amount=30), Split(participant_id="B", amount=30)],
        )
        result = validator.validate_transaction(tx, MEMBERS)

        assert result.is_valid is False
        assert "split_mismatch" in issue_types(result)
        assert "$60.00" in validator.get_user_friendly_summary(result)

    def test_sub_cent_mismatch_allowed(self, validator):
        tx = Transaction(
            paid_by="A", amount=100,
            splits=[Split(participant_id=p, amount=33.333) for p in MEMBERS],
        )
        assert validator.validate_transaction(tx, MEMBERS).is_valid is True

    def test_negative_share(self, validator):
        tx = Transaction(
            paid_by="A", amount=10,
            splits=[Split(participant_id="B", amount=20), Split(participant_id="C", amount=-10)],
        )
        assert "negative_share" in issue_types(validator.validate_transaction(tx, MEMBERS))

    def test_unknown_participant_is_warning(self, validator):
        tx = Transaction(paid_by="A", amount=10, splits=[Split(participant_id="Z", amount=10)])
        result = validator.validate_transaction(tx, MEMBERS)

        assert result.is_valid is True
        assert result.warnings == ["Participant Z is not a member of this group"]

    def test_payer_only_split_is_warning(self, validator):
        tx = Transaction(paid_by="A", amount=10, splits=[Split(participant_id="A", amount=10)])
        result = validator.validate_transaction(tx, MEMBERS)

        assert result.is_valid is True
        assert "self_only" in issue_types(result)

    def test_payer_only_income_is_fine(self, validator):
        tx = Transaction(
            kind=TransactionKind.INCOME, paid_by="A", amount=10,
            splits=[Split(participant_id="A", amount=10)],
        )
        assert validator.validate_transaction(tx, MEMBERS).issues == []

    def test_custom_epsilon(self):
        tx = Transaction(paid_by="A", amount=100, splits=[Split(participant_id="B", amount=99.5)])
        assert LedgerValidator(epsilon=1.0).validate_transaction(tx, MEMBERS).is_valid is True


class TestValidateSettlement:

    def test_valid(self, validator):
        s = Settlement(from_participant_id="B", to_participant_id="A", amount=25)
        result = validator.validate_settlement(s, MEMBERS)
        assert result.is_valid is True
        assert result.record_type == "settlement"

    def test_self_settlement(self, validator):
        s = Settlement(from_participant_id="A", to_participant_id="A", amount=25)
        result = validator.validate_settlement(s, MEMBERS)

        assert result.is_valid is False
        assert "self_settlement" in issue_types(result)
        summary = validator.get_user_friendly_summary(result)
        assert summary.startswith("❌ This settlement cannot be saved yet:")

    def test_non_positive_amount(self, validator):
        s = Settlement(from_participant_id="B", to_participant_id="A", amount=-5)
        assert "non_positive" in issue_types(validator.validate_settlement(s, MEMBERS))

    def test_unknown_participants_warn(self, validator):
        s = Settlement(from_participant_id="X", to_participant_id="Y", amount=5)
        result = validator.validate_settlement(s, MEMBERS)
        assert result.is_valid is True
        assert len(result.warnings) == 2
