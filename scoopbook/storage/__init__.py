"""
Storage Package

Provides the record-store interfaces and their implementations.
Local JSON files are the default backend; Google Sheets is optional.
"""

from scoopbook.storage.interface import (
    AuditStorageInterface,
    DuplicateError,
    NotFoundError,
    RecordStoreInterface,
    StorageConnectionError,
    StorageError,
)
from scoopbook.storage.local import (
    InMemoryAuditStorage,
    InMemoryRecordStore,
    JsonFileRecordStore,
    JsonLinesAuditStorage,
)
from scoopbook.storage.google_sheets import (
    GoogleSheetsAuditStorage,
    GoogleSheetsClient,
    GoogleSheetsRecordStore,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "RecordStoreInterface",
    # Exceptions
    "DuplicateError",
    "NotFoundError",
    "StorageConnectionError",
    "StorageError",
    # Local implementations
    "InMemoryAuditStorage",
    "InMemoryRecordStore",
    "JsonFileRecordStore",
    "JsonLinesAuditStorage",
    # Google Sheets implementation
    "GoogleSheetsAuditStorage",
    "GoogleSheetsClient",
    "GoogleSheetsRecordStore",
]
