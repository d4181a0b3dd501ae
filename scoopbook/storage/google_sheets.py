"""
Google Sheets Storage Implementation

An optional backend for people who want to look at their recipes and
budget in a spreadsheet. Each record type lives in its own worksheet,
one record per row, with the model's field names as the header row.

TRADEOFFS:
- No transactions (each call is a separate API request)
- Listing reads the whole sheet and sorts in Python
- Stored records are copies; `update` also patches the caller's object
"""

from typing import Any, Iterator, Optional
from uuid import UUID

import gspread
import structlog
from google.oauth2.service_account import Credentials
from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from scoopbook.config import GoogleSheetsSettings, get_settings
from scoopbook.models.audit import AUDIT_COLUMNS, AuditEvent
from scoopbook.storage.interface import (
    AuditStorageInterface,
    DuplicateError,
    NotFoundError,
    RecordStoreInterface,
    RecordT,
    StorageConnectionError,
    StorageError,
)


logger = structlog.get_logger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]

_write_retry = retry(
    retry=retry_if_not_exception_type((DuplicateError, NotFoundError)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    reraise=True,
)


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and provides retry logic for API calls.
    """

    def __init__(self, settings: Optional[GoogleSheetsSettings] = None):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = settings or get_settings().google_sheets

    @property
    def settings(self) -> GoogleSheetsSettings:
        return self._settings

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=SCOPES,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise StorageConnectionError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise StorageConnectionError(f"Failed to connect to Google Sheets: {e}")

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound:
                raise StorageConnectionError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
        return self._spreadsheet

    def get_worksheet(self, title: str, columns: list[str], rows: int = 1000) -> gspread.Worksheet:
        """Get or create a worksheet whose first row is `columns`."""
        spreadsheet = self.get_spreadsheet()
        try:
            sheet = spreadsheet.worksheet(title)
        except gspread.WorksheetNotFound:
            sheet = spreadsheet.add_worksheet(
                title=title,
                rows=rows,
                cols=len(columns),
            )
            sheet.append_row(columns)
        return sheet


class GoogleSheetsRecordStore(RecordStoreInterface[RecordT]):
    """
    Google Sheets implementation of a record store.

    Cell values are the JSON-mode dump of each field; pydantic
    converts them back when a row is read.
    """

    def __init__(
        self,
        record_type: type[RecordT],
        sheet_name: str,
        client: Optional[GoogleSheetsClient] = None,
    ):
        self._record_type = record_type
        self._sheet_name = sheet_name
        self._client = client or GoogleSheetsClient()
        self._columns = list(record_type.model_fields)

    @property
    def columns(self) -> list[str]:
        return list(self._columns)

    def _sheet(self) -> gspread.Worksheet:
        return self._client.get_worksheet(self._sheet_name, self._columns)

    def _record_to_row(self, record: RecordT) -> list[str]:
        data = record.model_dump(mode="json")
        return [str(data[column]) for column in self._columns]

    def _row_to_record(self, row: list[str]) -> RecordT:
        padded = list(row) + [""] * (len(self._columns) - len(row))
        return self._record_type.model_validate(dict(zip(self._columns, padded)))

    def _find_row(self, sheet: gspread.Worksheet, record_id: UUID) -> tuple[int, list[str]] | None:
        """Return (1-based sheet row index, row) for a record id."""
        for idx, row in enumerate(sheet.get_all_values()[1:], start=2):
            if row and row[0] == str(record_id):
                return idx, row
        return None

    @_write_retry
    def insert(self, record: RecordT) -> RecordT:
        try:
            sheet = self._sheet()
            if self._find_row(sheet, record.id) is not None:
                raise DuplicateError(f"{self._record_type.__name__} already stored: {record.id}")
            sheet.append_row(self._record_to_row(record), value_input_option="RAW")
            return record
        except DuplicateError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to save {self._record_type.__name__}: {e}")

    def delete(self, record: RecordT) -> bool:
        try:
            sheet = self._sheet()
            found = self._find_row(sheet, record.id)
            if found is None:
                return False
            sheet.delete_rows(found[0])
            return True
        except Exception as e:
            raise StorageError(f"Failed to delete {self._record_type.__name__}: {e}")

    def query_all(self, sort_by_creation_descending: bool = True) -> Iterator[RecordT]:
        try:
            all_rows = self._sheet().get_all_values()[1:]  # Skip header
        except Exception as e:
            raise StorageError(f"Failed to list {self._record_type.__name__}: {e}")

        records = []
        for row in all_rows:
            if not row or not row[0]:  # Skip empty rows
                continue
            try:
                records.append(self._row_to_record(row))
            except ValidationError:
                logger.warning("malformed_row_skipped", sheet=self._sheet_name, id=row[0])
                continue

        records.sort(key=lambda r: r.created_at, reverse=sort_by_creation_descending)
        yield from records

    def update(self, record: RecordT, field: str, value: Any) -> RecordT:
        if field not in self._columns or field in ("id", "created_at"):
            raise StorageError(
                f"Cannot update field '{field}' of {self._record_type.__name__}"
            )
        # Validate before touching the sheet; bad values are not retried
        candidate = record.model_copy()
        try:
            setattr(candidate, field, value)
        except ValidationError as e:
            raise StorageError(f"Invalid value for '{field}': {e}") from e

        self._write_cell(record.id, field, candidate)
        setattr(record, field, getattr(candidate, field))
        return record

    @_write_retry
    def _write_cell(self, record_id: UUID, field: str, source: RecordT) -> None:
        column = self._columns.index(field)
        try:
            sheet = self._sheet()
            found = self._find_row(sheet, record_id)
            if found is None:
                raise NotFoundError(f"{self._record_type.__name__} not found: {record_id}")
            sheet.update_cell(found[0], column + 1, self._record_to_row(source)[column])
        except NotFoundError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to update {self._record_type.__name__}: {e}")

    def get(self, record_id: UUID) -> Optional[RecordT]:
        try:
            found = self._find_row(self._sheet(), record_id)
        except Exception as e:
            raise StorageError(f"Failed to get {self._record_type.__name__}: {e}")
        return self._row_to_record(found[1]) if found else None


class GoogleSheetsAuditStorage(AuditStorageInterface):
    """
    Google Sheets implementation of audit log storage.

    Audit events are append-only.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    def _sheet(self) -> gspread.Worksheet:
        return self._client.get_worksheet(
            self._client.settings.audit_sheet_name,
            AUDIT_COLUMNS,
            rows=5000,  # More rows for audit log
        )

    def _read_events(self) -> list[AuditEvent]:
        try:
            all_rows = self._sheet().get_all_values()[1:]
        except Exception as e:
            raise StorageError(f"Failed to get audit events: {e}")

        events = []
        for row in all_rows:
            if row and row[0]:
                try:
                    events.append(AuditEvent.from_row(row))
                except (ValueError, ValidationError):
                    continue
        return events

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def append_event(self, event: AuditEvent) -> bool:
        """Append an audit event."""
        try:
            self._sheet().append_row(event.to_row(), value_input_option="RAW")
            return True
        except Exception as e:
            # Don't raise - audit logging should not break the main flow
            logger.warning("audit_append_failed", error=str(e), event_id=str(event.event_id))
            return False

    def get_events_by_entity(self, entity_type: str, entity_id: UUID) -> list[AuditEvent]:
        events = [
            e for e in self._read_events()
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]
        events.sort(key=lambda e: e.timestamp)
        return events

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        events = self._read_events()
        # Sort newest first
        events.sort(key=lambda e: e.timestamp, reverse=True)
        return events[:limit]
