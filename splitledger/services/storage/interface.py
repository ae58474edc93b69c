"""
Abstract Data Source Interface

DESIGN DECISION: The engine never talks to a database. Group records come
from whatever system of record the host application uses, behind the
interfaces below. This allows us to:
1. Swap the hosted database for anything else
2. Use in-memory sources for testing
3. Keep business logic decoupled from storage

The interfaces are read-only for group data: this package never writes
transactions or settlements back.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from splitledger.models.audit import AuditEvent
from splitledger.models.ledger import Participant, Settlement, Transaction


class GroupDataSource(ABC):
    """
    Supplies a group's roster and history.

    Implementations raise NotFoundError for unknown groups and
    ConnectionError when the backend cannot be reached.
    """

    @abstractmethod
    async def get_participants(self, group_id: str) -> list[Participant]:
        """
        Get the group's roster.

        Args:
            group_id: The group's identifier

        Returns:
            Participants in roster order

        Raises:
            NotFoundError: If the group doesn't exist
        """
        pass

    @abstractmethod
    async def list_transactions(self, group_id: str) -> list[Transaction]:
        """
        Get every expense, transfer and income entry of the group.

        Raises:
            NotFoundError: If the group doesn't exist
        """
        pass

    @abstractmethod
    async def list_settlements(self, group_id: str) -> list[Settlement]:
        """
        Get every recorded settlement of the group.

        Raises:
            NotFoundError: If the group doesn't exist
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a correlation ID (e.g., one summary recompute).

        Returns:
            List of related events in chronological order
        """
        pass

    @abstractmethod
    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for data source operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in the data source."""
    pass


class ConnectionError(StorageError):
    """Could not reach the data source backend."""
    pass
