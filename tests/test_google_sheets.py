"""
Tests for the Google Sheets backend.

No real API calls: the client and worksheets are mocks.
"""

from decimal import Decimal
from unittest.mock import MagicMock, patch

import gspread
import pytest

from scoopbook.config import GoogleSheetsSettings
from scoopbook.models import AuditEventBuilder, Expense, Recipe
from scoopbook.models.audit import AUDIT_COLUMNS
from scoopbook.storage import (
    DuplicateError,
    GoogleSheetsAuditStorage,
    GoogleSheetsClient,
    GoogleSheetsRecordStore,
    NotFoundError,
    StorageError,
)


@pytest.fixture
def worksheet():
    sheet = MagicMock()
    sheet.get_all_values.return_value = []
    return sheet


@pytest.fixture
def client(worksheet):
    mock_client = MagicMock()
    mock_client.get_worksheet.return_value = worksheet
    return mock_client


def with_rows(store, worksheet, *records):
    """Make the mock sheet hold a header row plus the given records."""
    rows = [store.columns] + [store._record_to_row(r) for r in records]
    worksheet.get_all_values.return_value = rows


class TestGoogleSheetsRecordStore:
    """Tests for the row-per-record sheet store."""

    def test_columns_follow_model_fields(self, client):
        store = GoogleSheetsRecordStore(Recipe, "Recipes", client)
        assert store.columns[:2] == ["id", "created_at"]
        assert "tutorial_link" in store.columns

    def test_insert_appends_row(self, client, worksheet):
        store = GoogleSheetsRecordStore(Recipe, "Recipes", client)
        recipe = Recipe(name="Vanilla")

        store.insert(recipe)

        client.get_worksheet.assert_called_with("Recipes", store.columns)
        row = worksheet.append_row.call_args[0][0]
        assert row[0] == str(recipe.id)
        assert row[store.columns.index("name")] == "Vanilla"

    def test_insert_duplicate_rejected(self, client, worksheet):
        store = GoogleSheetsRecordStore(Recipe, "Recipes", client)
        recipe = Recipe(name="Vanilla")
        with_rows(store, worksheet, recipe)

        with pytest.raises(DuplicateError):
            store.insert(recipe)
        worksheet.append_row.assert_not_called()

    def test_query_all_reads_rows_back(self, client, worksheet):
        store = GoogleSheetsRecordStore(Expense, "Expenses", client)
        cones = Expense(name="Cones", cost=Decimal("-4.99"))
        sale = Expense(name="Bake sale", cost=Decimal("30"))
        sale.created_at = cones.created_at.replace(year=cones.created_at.year + 1)
        with_rows(store, worksheet, cones, sale)

        entries = list(store.query_all())
        assert [e.name for e in entries] == ["Bake sale", "Cones"]
        assert entries[1].cost == Decimal("-4.99")

    def test_query_all_skips_blank_and_malformed_rows(self, client, worksheet):
        store = GoogleSheetsRecordStore(Recipe, "Recipes", client)
        recipe = Recipe(name="Vanilla")
        with_rows(store, worksheet, recipe)
        worksheet.get_all_values.return_value += [[], ["", "x"], ["not-a-uuid", "bad"]]

        assert [r.id for r in store.query_all()] == [recipe.id]

    def test_delete(self, client, worksheet):
        store = GoogleSheetsRecordStore(Recipe, "Recipes", client)
        first, second = Recipe(name="A"), Recipe(name="B")
        with_rows(store, worksheet, first, second)

        assert store.delete(second) is True
        worksheet.delete_rows.assert_called_once_with(3)

    def test_delete_missing(self, client, worksheet):
        store = GoogleSheetsRecordStore(Recipe, "Recipes", client)
        assert store.delete(Recipe(name="Ghost")) is False

    def test_update_writes_one_cell(self, client, worksheet):
        store = GoogleSheetsRecordStore(Recipe, "Recipes", client)
        recipe = Recipe(name="Vanilla")
        with_rows(store, worksheet, recipe)

        store.update(recipe, "notes", "Extra vanilla")

        column = store.columns.index("notes") + 1
        worksheet.update_cell.assert_called_once_with(2, column, "Extra vanilla")
        assert recipe.notes == "Extra vanilla"

    def test_update_missing_record(self, client, worksheet):
        store = GoogleSheetsRecordStore(Recipe, "Recipes", client)
        with pytest.raises(NotFoundError):
            store.update(Recipe(name="Ghost"), "notes", "boo")

    def test_update_rejects_read_only_field(self, client):
        store = GoogleSheetsRecordStore(Recipe, "Recipes", client)
        with pytest.raises(StorageError):
            store.update(Recipe(name="Vanilla"), "id", "x")

    def test_update_rejects_invalid_value(self, client, worksheet):
        store = GoogleSheetsRecordStore(Recipe, "Recipes", client)
        recipe = Recipe(name="Vanilla")
        with_rows(store, worksheet, recipe)

        with pytest.raises(StorageError):
            store.update(recipe, "name", "")
        worksheet.update_cell.assert_not_called()
        assert recipe.name == "Vanilla"

    def test_get(self, client, worksheet):
        store = GoogleSheetsRecordStore(Recipe, "Recipes", client)
        recipe = Recipe(name="Vanilla")
        with_rows(store, worksheet, recipe)

        assert store.get(recipe.id).name == "Vanilla"
        assert store.get(Recipe(name="Other").id) is None


class TestGoogleSheetsAuditStorage:
    """Tests for the audit sheet."""

    def test_append_event(self, client, worksheet):
        storage = GoogleSheetsAuditStorage(client)
        event = AuditEventBuilder.division_by_zero(7)

        assert storage.append_event(event) is True
        row = worksheet.append_row.call_args[0][0]
        assert row == event.to_row()

    def test_append_failure_returns_false(self, client, worksheet):
        worksheet.append_row.side_effect = RuntimeError("quota exceeded")
        storage = GoogleSheetsAuditStorage(client)

        assert storage.append_event(AuditEventBuilder.division_by_zero(7)) is False

    def test_reads_events_back(self, client, worksheet):
        recipe = Recipe(name="Vanilla")
        event = AuditEventBuilder.recipe_created(recipe.id, recipe.name)
        worksheet.get_all_values.return_value = [AUDIT_COLUMNS, event.to_row(), ["garbage"]]
        storage = GoogleSheetsAuditStorage(client)

        assert [e.event_id for e in storage.get_events_by_entity("recipe", recipe.id)] == [event.event_id]
        assert len(storage.get_recent_events()) == 1


class TestGoogleSheetsClient:
    """Tests for worksheet lookup."""

    @pytest.fixture
    def settings(self, tmp_path):
        credentials = tmp_path / "credentials.json"
        credentials.write_text("{}", encoding="utf-8")
        return GoogleSheetsSettings(
            credentials_path=str(credentials),
            spreadsheet_id="sheet-123",
        )

    def test_existing_worksheet_is_returned(self, settings):
        spreadsheet = MagicMock()
        sheets_client = GoogleSheetsClient(settings)

        with patch.object(sheets_client, "get_spreadsheet", return_value=spreadsheet):
            sheet = sheets_client.get_worksheet("Recipes", ["id", "name"])

        assert sheet is spreadsheet.worksheet.return_value
        spreadsheet.add_worksheet.assert_not_called()

    def test_missing_worksheet_is_created_with_header(self, settings):
        spreadsheet = MagicMock()
        spreadsheet.worksheet.side_effect = gspread.WorksheetNotFound("Recipes")
        sheets_client = GoogleSheetsClient(settings)

        with patch.object(sheets_client, "get_spreadsheet", return_value=spreadsheet):
            sheet = sheets_client.get_worksheet("Recipes", ["id", "name"])

        spreadsheet.add_worksheet.assert_called_once_with(title="Recipes", rows=1000, cols=2)
        sheet.append_row.assert_called_once_with(["id", "name"])
