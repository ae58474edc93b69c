"""
Data Models Package

This package contains all Pydantic models used in Split Ledger.
All data flowing through the system must conform to these schemas.
"""

from splitledger.models.ledger import (
    Debt,
    DebtStatus,
    GroupStats,
    GroupSummary,
    HistoryEntry,
    HistoryQuery,
    Participant,
    Settlement,
    Split,
    Transaction,
    TransactionKind,
    ValidationIssue,
    ValidationResult,
)
from splitledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Debt",
    "DebtStatus",
    "GroupStats",
    "GroupSummary",
    "HistoryEntry",
    "HistoryQuery",
    "Participant",
    "Settlement",
    "Split",
    "Transaction",
    "TransactionKind",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
