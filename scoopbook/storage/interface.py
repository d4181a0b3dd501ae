"""
Abstract Storage Interface

DESIGN DECISION: Features talk to storage only through these interfaces,
and receive the store they use as a constructor argument. The same
`RecordStoreInterface` serves recipes and budget entries; a store holds
one record type.

The interface is intentionally small - we're not building a full ORM.
Just insert, delete, ordered listing and single-field updates.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Iterator, Optional, TypeVar
from uuid import UUID

from scoopbook.models.audit import AuditEvent
from scoopbook.models.base import Record


RecordT = TypeVar("RecordT", bound=Record)


class RecordStoreInterface(ABC, Generic[RecordT]):
    """
    Abstract interface for a local record store.

    Any storage implementation (JSON files, Google Sheets, memory)
    must implement these methods.
    """

    @abstractmethod
    def insert(self, record: RecordT) -> RecordT:
        """
        Persist a new record.

        The record's `created_at` is its creation timestamp.

        Args:
            record: The record to save

        Returns:
            The stored record

        Raises:
            DuplicateError: If a record with the same id already exists
            StorageError: If save fails
        """
        pass

    @abstractmethod
    def delete(self, record: RecordT) -> bool:
        """
        Remove a record by identity.

        Args:
            record: The record to remove (matched on `id`)

        Returns:
            True if a record was removed, False if it was not stored
        """
        pass

    @abstractmethod
    def query_all(self, sort_by_creation_descending: bool = True) -> Iterator[RecordT]:
        """
        Iterate over every stored record.

        Args:
            sort_by_creation_descending: Newest first when True,
                oldest first when False

        Returns:
            A lazy iterator over the ordered records
        """
        pass

    @abstractmethod
    def update(self, record: RecordT, field: str, value: Any) -> RecordT:
        """
        Change one field of a stored record in place.

        Args:
            record: The record to change (matched on `id`)
            field: Name of the field
            value: New value, validated by the record model

        Returns:
            The stored record; every holder of it sees the change

        Raises:
            NotFoundError: If the record is not stored
            StorageError: If the field is unknown or the value invalid
        """
        pass

    @abstractmethod
    def get(self, record_id: UUID) -> Optional[RecordT]:
        """Retrieve a record by id, or None."""
        pass

    def count(self) -> int:
        """Number of stored records."""
        return sum(1 for _ in self.query_all())


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a specific entity.

        Returns:
            List of events in chronological order
        """
        pass

    @abstractmethod
    def get_recent_events(
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
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass


class StorageConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
