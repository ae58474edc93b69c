"""
Storage Services Package

Provides the read-side interfaces the orchestration layer depends on, plus
in-memory implementations. Concrete database adapters live in the host
application.
"""

from splitledger.services.storage.interface import (
    AuditStorageInterface,
    ConnectionError,
    GroupDataSource,
    NotFoundError,
    StorageError,
)
from splitledger.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryGroupDataSource,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "GroupDataSource",
    # Exceptions
    "ConnectionError",
    "NotFoundError",
    "StorageError",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryGroupDataSource",
]
