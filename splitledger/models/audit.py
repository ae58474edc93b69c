"""
Audit Models for Split Ledger

Every group summary recompute leaves a trail of audit events. This provides:
1. Traceability of which inputs produced which suggested payments
2. Debugging information when balances look wrong
3. A record of invariant violations (e.g. balances not summing to zero)

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Summary flow
    SUMMARY_REQUESTED = "summary_requested"
    GROUP_DATA_LOADED = "group_data_loaded"
    BALANCES_COMPUTED = "balances_computed"
    ZERO_SUM_VIOLATION = "zero_sum_violation"
    DEBTS_COMPUTED = "debts_computed"
    SETTLEMENT_OVERLAY_APPLIED = "settlement_overlay_applied"

    # Input checks
    VALIDATION_FAILED = "validation_failed"

    # System events
    DATA_SOURCE_ERROR = "data_source_error"
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'group', 'transaction', 'settlement')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., all events in one recompute)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.summary_requested(group_id, correlation_id)
        event = AuditEventBuilder.debts_computed(group_id, 3, 120.0, correlation_id)
    """

    @staticmethod
    def summary_requested(
        group_id: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUMMARY_REQUESTED,
            entity_type="group",
            entity_id=group_id,
            correlation_id=correlation_id,
            description=f"Summary requested for group {group_id}",
        )

    @staticmethod
    def group_data_loaded(
        group_id: str,
        participant_count: int,
        transaction_count: int,
        settlement_count: int,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.GROUP_DATA_LOADED,
            severity=AuditSeverity.DEBUG,
            entity_type="group",
            entity_id=group_id,
            correlation_id=correlation_id,
            description=(
                f"Loaded {participant_count} participants, "
                f"{transaction_count} transactions and "
                f"{settlement_count} settlements"
            ),
            details={
                "participant_count": participant_count,
                "transaction_count": transaction_count,
                "settlement_count": settlement_count,
            },
        )

    @staticmethod
    def balances_computed(
        group_id: str,
        balances: dict[str, float],
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BALANCES_COMPUTED,
            entity_type="group",
            entity_id=group_id,
            correlation_id=correlation_id,
            description=f"Computed balances for {len(balances)} participants",
            details={"balances": dict(balances)},
        )

    @staticmethod
    def zero_sum_violation(
        group_id: str,
        total: float,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ZERO_SUM_VIOLATION,
            severity=AuditSeverity.WARNING,
            entity_type="group",
            entity_id=group_id,
            correlation_id=correlation_id,
            description=f"Balances sum to {total:.6f} instead of zero",
            details={"total": total},
        )

    @staticmethod
    def debts_computed(
        group_id: str,
        debt_count: int,
        total_amount: float,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DEBTS_COMPUTED,
            entity_type="group",
            entity_id=group_id,
            correlation_id=correlation_id,
            description=f"Suggested {debt_count} payments totalling {total_amount:.2f}",
            details={
                "debt_count": debt_count,
                "total_amount": total_amount,
            },
        )

    @staticmethod
    def settlement_overlay_applied(
        group_id: str,
        settled_count: int,
        outstanding_count: int,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SETTLEMENT_OVERLAY_APPLIED,
            entity_type="group",
            entity_id=group_id,
            correlation_id=correlation_id,
            description=(
                f"{settled_count} suggested payments already settled, "
                f"{outstanding_count} outstanding"
            ),
            details={
                "settled_count": settled_count,
                "outstanding_count": outstanding_count,
            },
        )

    @staticmethod
    def validation_failed(
        record_type: str,
        record_id: str,
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type=record_type,
            entity_id=record_id,
            correlation_id=correlation_id,
            description=f"Validation failed for {record_type} {record_id}",
            details={"issues": issues},
        )

    @staticmethod
    def data_source_error(
        group_id: str,
        error_message: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_SOURCE_ERROR,
            severity=AuditSeverity.ERROR,
            entity_type="group",
            entity_id=group_id,
            correlation_id=correlation_id,
            description=f"Could not load records for group {group_id}",
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"System error: {error_type}",
            details=details or {},
            error_code=error_type,
            error_message=error_message,
        )
