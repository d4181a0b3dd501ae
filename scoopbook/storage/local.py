"""
Local Storage Implementations

- InMemoryRecordStore: records in a dict, gone when the process exits
- JsonFileRecordStore: the same, mirrored to one JSON file per collection
- InMemoryAuditStorage / JsonLinesAuditStorage: append-only audit logs

DESIGN DECISION: The JSON store rewrites its whole file on every change,
through a temporary file and an atomic rename. Collections here hold
tens of records, so there is no incremental format.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Iterator, Optional
from uuid import UUID

import structlog
from pydantic import ValidationError

from scoopbook.models.audit import AuditEvent
from scoopbook.storage.interface import (
    AuditStorageInterface,
    DuplicateError,
    NotFoundError,
    RecordStoreInterface,
    RecordT,
    StorageError,
)


logger = structlog.get_logger(__name__)

READ_ONLY_FIELDS = frozenset({"id", "created_at"})


class InMemoryRecordStore(RecordStoreInterface[RecordT]):
    """
    Records kept in process memory.

    Stored records are the very objects handed to `insert`, so an
    `update` is visible through every reference to them.
    """

    def __init__(self, record_type: type[RecordT]):
        self._record_type = record_type
        self._records: dict[UUID, RecordT] = {}

    @property
    def record_type(self) -> type[RecordT]:
        return self._record_type

    def insert(self, record: RecordT) -> RecordT:
        if not isinstance(record, self._record_type):
            raise StorageError(
                f"Expected {self._record_type.__name__}, got {type(record).__name__}"
            )
        if record.id in self._records:
            raise DuplicateError(f"{self._record_type.__name__} already stored: {record.id}")
        self._records[record.id] = record
        return record

    def delete(self, record: RecordT) -> bool:
        return self._records.pop(record.id, None) is not None

    def query_all(self, sort_by_creation_descending: bool = True) -> Iterator[RecordT]:
        # Snapshot on first iteration; later inserts/deletes don't disturb it
        records = sorted(
            self._records.values(),
            key=lambda r: r.created_at,
            reverse=sort_by_creation_descending,
        )
        yield from records

    def update(self, record: RecordT, field: str, value: Any) -> RecordT:
        stored = self._records.get(record.id)
        if stored is None:
            raise NotFoundError(f"{self._record_type.__name__} not found: {record.id}")
        if field not in self._record_type.model_fields or field in READ_ONLY_FIELDS:
            raise StorageError(
                f"Cannot update field '{field}' of {self._record_type.__name__}"
            )

        try:
            setattr(stored, field, value)
        except ValidationError as e:
            raise StorageError(f"Invalid value for '{field}': {e}") from e

        if record is not stored:
            setattr(record, field, getattr(stored, field))
        return stored

    def get(self, record_id: UUID) -> Optional[RecordT]:
        return self._records.get(record_id)

    def count(self) -> int:
        return len(self._records)


class JsonFileRecordStore(InMemoryRecordStore[RecordT]):
    """
    In-memory store mirrored to a JSON file.

    The file holds a JSON array of records. It is read once at
    construction and rewritten after every change; a change that
    cannot be written is rolled back in memory and raised.
    """

    def __init__(self, record_type: type[RecordT], path: Path):
        super().__init__(record_type)
        self._path = Path(path)
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8") or "[]")
            records = [self._record_type.model_validate(item) for item in raw]
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to load {self._path}: {e}") from e

        for record in records:
            self._records[record.id] = record
        logger.debug("records_loaded", path=str(self._path), count=len(records))

    def _save(self) -> None:
        payload = [
            record.model_dump(mode="json")
            for record in self.query_all(sort_by_creation_descending=False)
        ]
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(payload, fh, indent=2, ensure_ascii=False)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}") from e

    def insert(self, record: RecordT) -> RecordT:
        stored = super().insert(record)
        try:
            self._save()
        except StorageError:
            self._records.pop(record.id, None)
            raise
        return stored

    def delete(self, record: RecordT) -> bool:
        removed = self._records.pop(record.id, None)
        if removed is None:
            return False
        try:
            self._save()
        except StorageError:
            self._records[removed.id] = removed
            raise
        return True

    def update(self, record: RecordT, field: str, value: Any) -> RecordT:
        stored = self._records.get(record.id)
        old_value = getattr(stored, field, None) if stored is not None else None
        updated = super().update(record, field, value)
        try:
            self._save()
        except StorageError:
            setattr(updated, field, old_value)
            if record is not updated:
                setattr(record, field, old_value)
            raise
        return updated


class InMemoryAuditStorage(AuditStorageInterface):
    """Audit events kept in a list."""

    def __init__(self) -> None:
        self._events: list[AuditEvent] = []

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_events_by_entity(self, entity_type: str, entity_id: UUID) -> list[AuditEvent]:
        events = [
            e for e in self._events
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]
        return sorted(events, key=lambda e: e.timestamp)

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        events = sorted(self._events, key=lambda e: e.timestamp, reverse=True)
        return events[:limit]


class JsonLinesAuditStorage(AuditStorageInterface):
    """Audit events appended to a file, one JSON object per line."""

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def append_event(self, event: AuditEvent) -> bool:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as fh:
                fh.write(event.model_dump_json() + "\n")
        except OSError as e:
            raise StorageError(f"Failed to append audit event: {e}") from e
        return True

    def _read_events(self) -> list[AuditEvent]:
        if not self._path.exists():
            return []
        try:
            lines = self._path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            raise StorageError(f"Failed to read audit log: {e}") from e

        events = []
        for line in lines:
            if not line.strip():
                continue
            try:
                events.append(AuditEvent.model_validate_json(line))
            except ValidationError:
                logger.warning("audit_line_skipped", path=str(self._path))
                continue
        return events

    def get_events_by_entity(self, entity_type: str, entity_id: UUID) -> list[AuditEvent]:
        events = [
            e for e in self._read_events()
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]
        return sorted(events, key=lambda e: e.timestamp)

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        events = sorted(self._read_events(), key=lambda e: e.timestamp, reverse=True)
        return events[:limit]
