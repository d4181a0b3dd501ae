"""
Tests for the audit logger.
"""

from decimal import Decimal
from unittest.mock import MagicMock

from scoopbook.audit import AuditLogger
from scoopbook.models import AuditEventBuilder, AuditEventType, AuditSeverity, Expense, Recipe
from scoopbook.storage import InMemoryAuditStorage, StorageError


class TestAuditLogger:
    """Tests for local logging plus audit store persistence."""

    def test_log_without_storage(self):
        """Test that logging works with no audit store configured."""
        audit_logger = AuditLogger()
        assert audit_logger.storage is None
        audit_logger.log_division_by_zero(5)

    def test_events_reach_storage(self):
        storage = InMemoryAuditStorage()
        audit_logger = AuditLogger(storage)
        recipe = Recipe(name="Vanilla")
        entry = Expense(name="Cones", cost=Decimal("-4.99"))

        audit_logger.log_recipe_created(recipe)
        audit_logger.log_recipe_updated(recipe, "notes", "", "salted")
        audit_logger.log_recipe_deleted(recipe)
        audit_logger.log_entry_created(entry)
        audit_logger.log_entry_deleted(entry)
        audit_logger.log_division_by_zero(12)

        types = {e.event_type for e in storage.get_recent_events()}
        assert types == {
            AuditEventType.RECIPE_CREATED,
            AuditEventType.RECIPE_UPDATED,
            AuditEventType.RECIPE_DELETED,
            AuditEventType.ENTRY_CREATED,
            AuditEventType.ENTRY_DELETED,
            AuditEventType.DIVISION_BY_ZERO,
        }

    def test_entry_cost_is_recorded(self):
        storage = InMemoryAuditStorage()
        entry = Expense(name="Cones", cost=Decimal("-4.99"))

        AuditLogger(storage).log_entry_created(entry)

        event = storage.get_events_by_entity("expense", entry.id)[0]
        assert event.details == {"name": "Cones", "cost": "-4.99"}

    def test_error_events(self):
        storage = InMemoryAuditStorage()
        audit_logger = AuditLogger(storage)

        audit_logger.log_storage_error("insert", "disk full", entity_type="recipe")
        audit_logger.log_error("UnexpectedError", "boom", {"page": "Budget"})

        events = storage.get_recent_events()
        assert all(e.severity == AuditSeverity.ERROR for e in events)
        assert {e.error_message for e in events} == {"disk full", "boom"}
        system_error = next(e for e in events if e.event_type == AuditEventType.SYSTEM_ERROR)
        assert system_error.details == {"page": "Budget"}

    def test_storage_failure_does_not_raise(self):
        """Test that a failing audit store never breaks the audited action."""
        storage = MagicMock()
        storage.append_event.side_effect = StorageError("audit log unwritable")

        event = AuditEventBuilder.division_by_zero(1)
        assert AuditLogger(storage).log(event) is False

    def test_storage_result_is_returned(self):
        storage = MagicMock()
        storage.append_event.return_value = True
        audit_logger = AuditLogger(storage)

        audit_logger.log_division_by_zero(3)

        event = storage.append_event.call_args[0][0]
        assert event.event_type == AuditEventType.DIVISION_BY_ZERO
