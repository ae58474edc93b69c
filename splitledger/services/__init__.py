"""Services package."""

from splitledger.services.storage import (
    AuditStorageInterface,
    ConnectionError,
    GroupDataSource,
    InMemoryAuditStorage,
    InMemoryGroupDataSource,
    NotFoundError,
    StorageError,
)

__all__ = [
    "AuditStorageInterface",
    "ConnectionError",
    "GroupDataSource",
    "InMemoryAuditStorage",
    "InMemoryGroupDataSource",
    "NotFoundError",
    "StorageError",
]
