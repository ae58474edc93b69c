"""
In-Memory Data Sources

Process-local implementations of the storage interfaces. Used by tests and
by hosts that already hold a group's records in memory (for example a
client-side store that hands over its current snapshot).

Nothing here survives the process.
"""

from typing import Optional
from uuid import UUID

from splitledger.models.audit import AuditEvent
from splitledger.models.ledger import Participant, Settlement, Transaction
from splitledger.services.storage.interface import (
    AuditStorageInterface,
    GroupDataSource,
    NotFoundError,
)


class InMemoryGroupDataSource(GroupDataSource):
    """Holds group records in dictionaries keyed by group id."""

    def __init__(self):
        self._participants: dict[str, list[Participant]] = {}
        self._transactions: dict[str, list[Transaction]] = {}
        self._settlements: dict[str, list[Settlement]] = {}

    def add_group(
        self,
        group_id: str,
        participants: list[Participant],
        transactions: Optional[list[Transaction]] = None,
        settlements: Optional[list[Settlement]] = None,
    ) -> None:
        """Register (or replace) a group's full snapshot."""
        self._participants[group_id] = list(participants)
        self._transactions[group_id] = list(transactions or [])
        self._settlements[group_id] = list(settlements or [])

    def add_transaction(self, group_id: str, transaction: Transaction) -> None:
        self._require(group_id)
        self._transactions[group_id].append(transaction)

    def add_settlement(self, group_id: str, settlement: Settlement) -> None:
        self._require(group_id)
        self._settlements[group_id].append(settlement)

    def _require(self, group_id: str) -> None:
        if group_id not in self._participants:
            raise NotFoundError(f"Group {group_id} not found")

    async def get_participants(self, group_id: str) -> list[Participant]:
        self._require(group_id)
        return list(self._participants[group_id])

    async def list_transactions(self, group_id: str) -> list[Transaction]:
        self._require(group_id)
        return list(self._transactions[group_id])

    async def list_settlements(self, group_id: str) -> list[Settlement]:
        self._require(group_id)
        return list(self._settlements[group_id])


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only list of audit events."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    async def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
