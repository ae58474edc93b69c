"""
Ledger Record Validation

Checks transactions and settlements before they are saved upstream.

DESIGN DECISION: The engine itself never validates; it processes whatever
it is given as signed deltas. Validation lives here so the form layer can
show problems to the user before a bad record enters the history.

Two kinds of check run on each record:

STRUCTURAL:
- Amounts must be positive
- A transaction needs at least one split
- Split shares cannot be negative

CONSISTENCY:
- Splits must add up to the transaction amount (within one cent)
- Referenced participants should belong to the group
- A settlement cannot go from a participant to themselves

IMPORTANT: Validation NEVER silently fixes issues.
It reports them for human review.
"""

from typing import Iterable, Optional

from splitledger.config import get_settings
from splitledger.models.ledger import (
    Settlement,
    Transaction,
    TransactionKind,
    ValidationIssue,
    ValidationResult,
)


class LedgerValidator:
    """Validates transactions and settlements against a group roster."""

    def __init__(self, epsilon: Optional[float] = None):
        """
        Initialize validator.

        Args:
            epsilon: Allowed gap between a transaction amount and the sum of
                     its splits. Defaults to the configured settle epsilon.
        """
        ledger_settings = get_settings().ledger
        self._epsilon = ledger_settings.settle_epsilon if epsilon is None else epsilon
        self._currency = ledger_settings.currency_symbol

    def _check_structure(self, transaction: Transaction) -> list[ValidationIssue]:
        issues = []

        if transaction.amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="non_positive",
                message="Amount must be greater than zero",
                severity="error",
                suggested_fix="Enter the total that was paid",
            ))

        if not transaction.splits:
            issues.append(ValidationIssue(
                field="splits",
                issue_type="missing",
                message="At least one participant must share this transaction",
                severity="error",
                suggested_fix="Select who the transaction is split between",
            ))

        for split in transaction.splits:
            if split.amount < 0:
                issues.append(ValidationIssue(
                    field="splits",
                    issue_type="negative_share",
                    message=f"Share for {split.participant_id} is negative",
                    severity="error",
                ))

        return issues

    def _check_consistency(
        self,
        transaction: Transaction,
        participant_ids: set[str],
    ) -> list[ValidationIssue]:
        issues = []

        total = transaction.splits_total
        if transaction.splits and abs(total - transaction.amount) > self._epsilon:
            issues.append(ValidationIssue(
                field="splits",
                issue_type="split_mismatch",
                message=(
                    f"Shares add up to {self._currency}{total:.2f} but the amount is "
                    f"{self._currency}{transaction.amount:.2f}"
                ),
                severity="error",
                suggested_fix="Adjust the shares so they match the amount",
            ))

        referenced = [transaction.paid_by] + [s.participant_id for s in transaction.splits]
        for pid in dict.fromkeys(referenced):
            if pid not in participant_ids:
                issues.append(ValidationIssue(
                    field="participant",
                    issue_type="unknown_participant",
                    message=f"Participant {pid} is not a member of this group",
                    severity="warning",
                ))

        if (
            transaction.kind != TransactionKind.INCOME
            and transaction.splits
            and all(s.participant_id == transaction.paid_by for s in transaction.splits)
        ):
            issues.append(ValidationIssue(
                field="splits",
                issue_type="self_only",
                message="Only the payer shares this transaction, so nobody owes anything",
                severity="warning",
            ))

        return issues

    def validate_transaction(
        self,
        transaction: Transaction,
        participant_ids: Iterable[str],
    ) -> ValidationResult:
        """
        Run all checks on a transaction.

        Args:
            transaction: The transaction to validate
            participant_ids: Ids of the group's members

        Returns:
            ValidationResult with all issues found
        """
        issues = self._check_structure(transaction)
        issues.extend(self._check_consistency(transaction, set(participant_ids)))
        return self._result(transaction.id, "transaction", issues)

    def validate_settlement(
        self,
        settlement: Settlement,
        participant_ids: Iterable[str],
    ) -> ValidationResult:
        """Run all checks on a settlement."""
        issues = []
        members = set(participant_ids)

        if settlement.amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="non_positive",
                message="Settlement amount must be greater than zero",
                severity="error",
            ))

        if settlement.from_participant_id == settlement.to_participant_id:
            issues.append(ValidationIssue(
                field="to_participant_id",
                issue_type="self_settlement",
                message="A participant cannot settle with themselves",
                severity="error",
                suggested_fix="Pick a different recipient",
            ))

        for pid in dict.fromkeys([settlement.from_participant_id, settlement.to_participant_id]):
            if pid not in members:
                issues.append(ValidationIssue(
                    field="participant",
                    issue_type="unknown_participant",
                    message=f"Participant {pid} is not a member of this group",
                    severity="warning",
                ))

        return self._result(settlement.id, "settlement", issues)

    def _result(
        self,
        record_id: str,
        record_type: str,
        issues: list[ValidationIssue],
    ) -> ValidationResult:
        return ValidationResult(
            record_id=record_id,
            record_type=record_type,
            is_valid=not any(issue.severity == "error" for issue in issues),
            issues=issues,
            warnings=[issue.message for issue in issues if issue.severity == "warning"],
        )

    def get_user_friendly_summary(
        self,
        result: ValidationResult,
    ) -> str:
        """
        Generate a user-friendly summary of validation results.

        This is what we show next to the form.
        """
        if result.is_valid and not result.warnings:
            return "✅ All checks passed!"

        lines = []

        if result.has_errors:
            lines.append(f"❌ This {result.record_type} cannot be saved yet:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     💡 {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please verify the following:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
