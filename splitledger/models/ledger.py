"""
Core Data Models for Split Ledger

These models describe the records a group produces (participants,
transactions, settlements) and the results the engine derives from them
(debts, statistics, summaries).

DESIGN DECISION: Amounts are plain floats and the models do NOT range-check
them. Input validation is a separate concern (see splitledger.validation);
the engine treats any amount it receives as an ordinary signed delta.
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


def _new_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# ENUMS
# =============================================================================

class TransactionKind(str, Enum):
    """
    Kinds of group transaction.

    EXPENSE and TRANSFER both mean "paid_by fronted money that the split
    participants owe back". INCOME inverts the direction: paid_by received
    pooled money and owes each split participant their share.
    """
    EXPENSE = "expense"
    TRANSFER = "transfer"
    INCOME = "income"


# =============================================================================
# GROUP RECORDS
# =============================================================================

class Participant(BaseModel):
    """A member of a group. The id is opaque and unique within the group."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(..., min_length=1)
    name: Optional[str] = Field(default=None, max_length=100)


class Split(BaseModel):
    """One participant's share of a transaction."""
    model_config = ConfigDict(str_strip_whitespace=True)

    participant_id: str = Field(..., min_length=1)
    amount: float


class Transaction(BaseModel):
    """
    An expense, transfer or income entry.

    Rows coming from the group store use ``expense_type`` and
    ``expense_splits``; both names are accepted on input.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(default_factory=_new_id)
    kind: TransactionKind = Field(
        default=TransactionKind.EXPENSE,
        validation_alias=AliasChoices("kind", "expense_type"),
    )
    paid_by: str = Field(..., min_length=1)
    amount: float
    splits: list[Split] = Field(
        default_factory=list,
        validation_alias=AliasChoices("splits", "expense_splits"),
    )
    description: Optional[str] = Field(default=None, max_length=500)
    created_at: Optional[datetime] = None

    @field_validator('kind', mode='before')
    @classmethod
    def missing_kind_is_expense(cls, v):
        """Rows written before the kind column existed have no kind."""
        if v is None or v == "":
            return TransactionKind.EXPENSE
        return v

    @property
    def splits_total(self) -> float:
        return sum(split.amount for split in self.splits)


class Settlement(BaseModel):
    """A completed payment that reduces what `from` owes `to`."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(default_factory=_new_id)
    from_participant_id: str = Field(..., min_length=1)
    to_participant_id: str = Field(..., min_length=1)
    amount: float
    description: Optional[str] = Field(default=None, max_length=500)
    settlement_date: Optional[date] = None
    created_at: Optional[datetime] = None


# =============================================================================
# DERIVED RESULTS
# =============================================================================

class Debt(BaseModel):
    """
    A suggested payment in a netting plan.

    Serialises as ``fromId`` / ``toId`` when dumped by alias, which is the
    shape the presentation layer consumes.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    from_id: str = Field(..., alias="fromId")
    to_id: str = Field(..., alias="toId")
    amount: float = Field(..., gt=0)


class DebtStatus(BaseModel):
    """A suggested payment plus whether a tracked settlement already covers it."""

    debt: Debt
    settled: bool = False


class GroupStats(BaseModel):
    """Totals shown on a group dashboard."""

    total_expenses: float = 0.0
    total_income: float = 0.0
    total_transfers: float = 0.0
    transaction_count: int = 0
    paid_by_participant: dict[str, float] = Field(default_factory=dict)
    share_by_participant: dict[str, float] = Field(default_factory=dict)
    received_by_participant: dict[str, float] = Field(default_factory=dict)
    owed_to_participant: dict[str, float] = Field(default_factory=dict)


class GroupSummary(BaseModel):
    """
    Everything a group view needs after one recompute.

    Produced fresh on every call; never stored.
    """

    group_id: str
    computed_at: datetime = Field(default_factory=_utcnow)
    correlation_id: Optional[UUID] = None

    balances: dict[str, float] = Field(default_factory=dict)
    debts: list[DebtStatus] = Field(default_factory=list)
    stats: GroupStats = Field(default_factory=GroupStats)

    @property
    def outstanding(self) -> list[Debt]:
        """Suggested payments not yet covered by a tracked settlement."""
        return [status.debt for status in self.debts if not status.settled]

    @property
    def all_settled(self) -> bool:
        return not self.debts


# =============================================================================
# HISTORY QUERIES
# =============================================================================

class HistoryQuery(BaseModel):
    """
    Filters for the group's transaction history list.

    ``kind`` is one of the transaction kinds or ``"settlement"``. The
    ``"expense"`` kind keeps every transaction, matching the history view's
    "expenses" tab which lists transfers and income alongside expenses.
    """

    participant_id: Optional[str] = None
    kind: Optional[str] = Field(
        default=None,
        pattern="^(expense|transfer|income|settlement)$",
    )
    min_amount: Optional[float] = None
    max_amount: Optional[float] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    limit: Optional[int] = Field(default=None, ge=1)

    @model_validator(mode='after')
    def validate_ranges(self) -> 'HistoryQuery':
        """Validate range bounds."""
        if self.min_amount is not None and self.max_amount is not None:
            if self.max_amount < self.min_amount:
                raise ValueError("Maximum amount cannot be below minimum amount")

        if self.date_from and self.date_to:
            if self.date_to < self.date_from:
                raise ValueError("End date cannot be before start date")

        return self


class HistoryEntry(BaseModel):
    """One row of the merged transaction/settlement history."""

    entry_type: str = Field(..., pattern="^(transaction|settlement)$")
    amount: float
    created_at: Optional[datetime] = None
    transaction: Optional[Transaction] = None
    settlement: Optional[Settlement] = None

    @property
    def record_id(self) -> str:
        record = self.transaction or self.settlement
        return record.id


# =============================================================================
# VALIDATION
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'non_positive', 'split_mismatch', 'unknown_participant')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of validating one transaction or settlement.

    Errors block the record from being saved upstream; warnings are shown
    but do not block.
    """

    record_id: str = Field(
        ...,
        description="ID of the transaction or settlement being validated"
    )
    record_type: str = Field(
        ...,
        pattern="^(transaction|settlement)$",
    )
    validated_at: datetime = Field(default_factory=_utcnow)

    is_valid: bool = Field(
        ...,
        description="True when no error-severity issue was found"
    )
    issues: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking warnings"
    )

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")
