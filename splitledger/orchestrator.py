"""
Main Orchestrator for Split Ledger

This module ties together all the components and defines the flows for:
1. Group summary (records → balances → suggested payments → overlay)
2. History (records → filtered, newest-first timeline)
3. Record checks (transaction/settlement → validation result)

DESIGN DECISION: The orchestrator is the only place that does I/O.
It loads the group's full history on every call and hands it to the pure
engine functions; nothing is cached or updated incrementally.
"""

from typing import Iterable, Optional
from uuid import UUID

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from splitledger.audit import AuditLogger, configure_logging, create_correlation_id
from splitledger.config import DataSourceSettings, LedgerSettings, get_settings
from splitledger.engine import (
    apply_settlement_overlay,
    balances_total,
    compute_balances,
    compute_debts,
    compute_group_stats,
    debts_total,
    is_zero_sum,
)
from splitledger.models.audit import AuditEventBuilder
from splitledger.models.ledger import (
    GroupSummary,
    HistoryEntry,
    HistoryQuery,
    Participant,
    Settlement,
    Transaction,
    ValidationResult,
)
from splitledger.queries import HistoryFilter
from splitledger.services.storage import (
    AuditStorageInterface,
    GroupDataSource,
    InMemoryGroupDataSource,
    StorageError,
)
from splitledger.services.storage.interface import ConnectionError as SourceConnectionError
from splitledger.validation import LedgerValidator


class SummaryError(Exception):
    """Group records could not be loaded."""
    pass


def summarize_records(
    group_id: str,
    participants: list[Participant],
    transactions: list[Transaction],
    settlements: list[Settlement],
    local_settlements: Optional[Iterable[Settlement]] = None,
    epsilon: Optional[float] = None,
) -> GroupSummary:
    """
    Build a group summary from records that are already loaded.

    Pure: no I/O and no audit events.

    Args:
        group_id: Group the records belong to
        participants: Group roster
        transactions: Full transaction history
        settlements: Recorded settlements (these change balances)
        local_settlements: Locally tracked settlements used only to mark
            suggested payments as settled
        epsilon: Settle threshold; defaults to the configured value
    """
    if epsilon is None:
        epsilon = get_settings().ledger.settle_epsilon

    balances = compute_balances(transactions, participants, settlements)
    debts = compute_debts(balances, epsilon=epsilon)

    return GroupSummary(
        group_id=group_id,
        balances=balances,
        debts=apply_settlement_overlay(debts, local_settlements or [], epsilon=epsilon),
        stats=compute_group_stats(transactions, participants, settlements, balances),
    )


class GroupSummaryFlow:
    """
    Orchestrates the group summary flow.

    Flow:
    1. Load → roster, transactions and settlements (retried on connection errors)
    2. Accumulate → one balance per participant
    3. Check → balances must sum to zero (violations are logged, not raised)
    4. Net → ordered suggested payments
    5. Overlay → mark payments covered by locally tracked settlements
    6. Stats → dashboard totals
    """

    def __init__(
        self,
        data_source: GroupDataSource,
        audit_logger: Optional[AuditLogger] = None,
        ledger_settings: Optional[LedgerSettings] = None,
        data_source_settings: Optional[DataSourceSettings] = None,
    ):
        settings = get_settings()
        self._data_source = data_source
        self._audit_logger = audit_logger
        self._ledger = ledger_settings or settings.ledger
        self._retry = data_source_settings or settings.data_source

    async def load_group(
        self,
        group_id: str,
    ) -> tuple[list[Participant], list[Transaction], list[Settlement]]:
        """
        Read a group's records, retrying while the backend is unreachable.

        Raises:
            StorageError: If the group is unknown or every attempt failed
        """
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._retry.fetch_attempts),
            wait=wait_exponential(
                multiplier=self._retry.retry_wait_multiplier,
                max=self._retry.retry_wait_max,
            ),
            retry=retry_if_exception_type(SourceConnectionError),
            reraise=True,
        ):
            with attempt:
                participants = await self._data_source.get_participants(group_id)
                transactions = await self._data_source.list_transactions(group_id)
                settlements = await self._data_source.list_settlements(group_id)

        return participants, transactions, settlements

    async def summarize(
        self,
        group_id: str,
        local_settlements: Optional[Iterable[Settlement]] = None,
        correlation_id: Optional[UUID] = None,
    ) -> GroupSummary:
        """
        Recompute a group's balances and suggested payments.

        Raises:
            SummaryError: If the group's records could not be loaded

        Any other failure while computing is audited as a system error
        and re-raised unchanged.
        """
        correlation_id = correlation_id or create_correlation_id()

        if self._audit_logger:
            await self._audit_logger.log(
                AuditEventBuilder.summary_requested(group_id, correlation_id)
            )

        try:
            participants, transactions, settlements = await self.load_group(group_id)
        except StorageError as e:
            if self._audit_logger:
                await self._audit_logger.log_data_source_error(
                    group_id=group_id,
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise SummaryError(f"Could not load group {group_id}: {e}") from e

        if self._audit_logger:
            await self._audit_logger.log(
                AuditEventBuilder.group_data_loaded(
                    group_id=group_id,
                    participant_count=len(participants),
                    transaction_count=len(transactions),
                    settlement_count=len(settlements),
                    correlation_id=correlation_id,
                )
            )

        try:
            return await self._compute(
                group_id, participants, transactions, settlements,
                local_settlements, correlation_id,
            )
        except Exception as e:
            if self._audit_logger:
                await self._audit_logger.log_error(
                    error_type=type(e).__name__,
                    error_message=str(e),
                    details={"group_id": group_id},
                    correlation_id=correlation_id,
                )
            raise

    async def _compute(
        self,
        group_id: str,
        participants: list[Participant],
        transactions: list[Transaction],
        settlements: list[Settlement],
        local_settlements: Optional[Iterable[Settlement]],
        correlation_id: UUID,
    ) -> GroupSummary:
        epsilon = self._ledger.settle_epsilon
        balances = compute_balances(transactions, participants, settlements)

        if self._audit_logger:
            await self._audit_logger.log(
                AuditEventBuilder.balances_computed(group_id, balances, correlation_id)
            )
            if not is_zero_sum(balances, self._ledger.zero_sum_tolerance):
                await self._audit_logger.log(
                    AuditEventBuilder.zero_sum_violation(
                        group_id, balances_total(balances), correlation_id
                    )
                )

        debts = compute_debts(balances, epsilon=epsilon)

        if self._audit_logger:
            await self._audit_logger.log(
                AuditEventBuilder.debts_computed(
                    group_id, len(debts), debts_total(debts), correlation_id
                )
            )

        statuses = apply_settlement_overlay(debts, local_settlements or [], epsilon=epsilon)

        if self._audit_logger and local_settlements:
            settled_count = sum(1 for status in statuses if status.settled)
            await self._audit_logger.log(
                AuditEventBuilder.settlement_overlay_applied(
                    group_id,
                    settled_count=settled_count,
                    outstanding_count=len(statuses) - settled_count,
                    correlation_id=correlation_id,
                )
            )

        return GroupSummary(
            group_id=group_id,
            correlation_id=correlation_id,
            balances=balances,
            debts=statuses,
            stats=compute_group_stats(transactions, participants, settlements, balances),
        )


class HistoryFlow:
    """Loads a group's records and filters them for the history view."""

    def __init__(
        self,
        summary_flow: GroupSummaryFlow,
        history_filter: Optional[HistoryFilter] = None,
    ):
        self._summary_flow = summary_flow
        self._filter = history_filter or HistoryFilter()

    async def history(
        self,
        group_id: str,
        query: Optional[HistoryQuery] = None,
    ) -> list[HistoryEntry]:
        _, transactions, settlements = await self._summary_flow.load_group(group_id)
        return self._filter.run(query or HistoryQuery(), transactions, settlements)


class RecordCheckFlow:
    """
    Validates new records against the group roster before the host saves them.

    Failed checks are audited; the result is always returned to the caller
    so the form can show what needs fixing.
    """

    def __init__(
        self,
        summary_flow: GroupSummaryFlow,
        validator: Optional[LedgerValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._summary_flow = summary_flow
        self._validator = validator or LedgerValidator()
        self._audit_logger = audit_logger

    async def _roster_ids(self, group_id: str) -> list[str]:
        participants, _, _ = await self._summary_flow.load_group(group_id)
        return [p.id for p in participants]

    async def check_transaction(
        self,
        group_id: str,
        transaction: Transaction,
        correlation_id: Optional[UUID] = None,
    ) -> ValidationResult:
        result = self._validator.validate_transaction(
            transaction, await self._roster_ids(group_id)
        )
        await self._audit_failure(result, correlation_id)
        return result

    async def check_settlement(
        self,
        group_id: str,
        settlement: Settlement,
        correlation_id: Optional[UUID] = None,
    ) -> ValidationResult:
        result = self._validator.validate_settlement(
            settlement, await self._roster_ids(group_id)
        )
        await self._audit_failure(result, correlation_id)
        return result

    async def _audit_failure(
        self,
        result: ValidationResult,
        correlation_id: Optional[UUID],
    ) -> None:
        if self._audit_logger and not result.is_valid:
            await self._audit_logger.log_validation_failed(
                record_type=result.record_type,
                record_id=result.record_id,
                issues=[issue.model_dump() for issue in result.issues],
                correlation_id=correlation_id,
            )


def create_app_components(
    data_source: Optional[GroupDataSource] = None,
    audit_storage: Optional[AuditStorageInterface] = None,
) -> tuple[GroupSummaryFlow, HistoryFlow, RecordCheckFlow]:
    """
    Factory function to create all application components.

    Args:
        data_source: Where group records come from. Defaults to an empty
                     in-memory source.
        audit_storage: Where audit events are kept. If None, events are
                       only logged locally.

    Returns:
        (summary_flow, history_flow, record_check_flow)
    """
    configure_logging(get_settings().app.effective_log_level)

    audit_logger = AuditLogger(audit_storage)
    summary_flow = GroupSummaryFlow(
        data_source or InMemoryGroupDataSource(),
        audit_logger=audit_logger,
    )
    history_flow = HistoryFlow(summary_flow)
    record_check_flow = RecordCheckFlow(summary_flow, audit_logger=audit_logger)

    return summary_flow, history_flow, record_check_flow
