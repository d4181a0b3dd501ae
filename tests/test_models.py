"""
Tests for Scoopbook models

Test strategy:
1. Unit tests for the record models and their form drafts
2. Integration tests for the feature services over in-memory stores
3. No real API calls in tests (use mocks)
"""

import pytest
from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from pydantic import ValidationError

from scoopbook.models import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    EntryKind,
    Expense,
    ExpenseDraft,
    Recipe,
    RecipeDraft,
    format_amount,
    parse_amount,
)
from scoopbook.models.audit import AUDIT_COLUMNS
from scoopbook.models.recipe import LINK_LABEL, NO_LINK_LABEL


class TestRecipeModels:
    """Tests for recipe models."""

    def test_recipe_creation(self):
        """Test Recipe model creation with defaults."""
        recipe = Recipe(name="Vanilla")
        assert recipe.name == "Vanilla"
        assert recipe.ingredients == ""
        assert recipe.notes == ""
        assert recipe.created_at.tzinfo is not None

    def test_recipe_strips_whitespace(self):
        """Test that whitespace is stripped from the name."""
        recipe = Recipe(name="  Mint Chip  ")
        assert recipe.name == "Mint Chip"

    def test_recipe_requires_name(self):
        with pytest.raises(ValidationError):
            Recipe(name="")

    def test_recipe_ids_are_unique(self):
        assert Recipe(name="A").id != Recipe(name="A").id

    def test_tutorial_label(self):
        """Test the label shown in place of the tutorial link."""
        assert Recipe(name="Vanilla").tutorial_label == NO_LINK_LABEL
        linked = Recipe(name="Vanilla", tutorial_link="https://example.com/vanilla")
        assert linked.has_tutorial_link is True
        assert linked.tutorial_label == LINK_LABEL

    def test_assignment_is_validated(self):
        recipe = Recipe(name="Vanilla")
        with pytest.raises(ValidationError):
            recipe.name = ""

    def test_draft_can_save_needs_name(self):
        """Test that Save is disabled until a name is typed."""
        assert RecipeDraft().can_save is False
        assert RecipeDraft(ingredients="milk, sugar").can_save is False
        assert RecipeDraft(name="   ").can_save is False
        assert RecipeDraft(name="Vanilla").can_save is True

    def test_draft_to_recipe(self):
        draft = RecipeDraft(
            name="Vanilla",
            ingredients="milk, cream, sugar, vanilla",
            last_made="last Sunday",
            notes="Churn 25 minutes",
        )
        recipe = draft.to_recipe()
        assert recipe.name == "Vanilla"
        assert recipe.last_made == "last Sunday"
        assert recipe.tutorial_link == ""


class TestExpenseModels:
    """Tests for budget entry models."""

    @pytest.mark.parametrize(
        "text,expected",
        (
            ("12.50", Decimal("12.50")),
            (" 3 ", Decimal("3")),
            ("-4", Decimal("-4")),
            ("", Decimal("0")),
            ("twelve", Decimal("0")),
            ("NaN", Decimal("0")),
            ("Infinity", Decimal("0")),
        ),
    )
    def test_parse_amount(self, text: str, expected: Decimal) -> None:
        assert parse_amount(text) == expected

    def test_format_amount(self):
        """Test two-decimal display form."""
        assert format_amount(Decimal("12.5")) == "$12.50"
        assert format_amount(Decimal("-3")) == "$-3.00"
        assert format_amount(Decimal("7"), "€") == "€7.00"

    def test_expense_kind_follows_sign(self):
        assert Expense(name="Cones", cost=Decimal("-4.99")).kind == EntryKind.EXPENSE
        assert Expense(name="Bake sale", cost=Decimal("20")).kind == EntryKind.INCOME

    def test_expense_requires_name(self):
        with pytest.raises(ValidationError):
            Expense(name="", cost=Decimal("1"))

    def test_draft_can_save_needs_name_and_amount(self):
        """Test that Save is disabled until both fields are filled in."""
        assert ExpenseDraft().can_save is False
        assert ExpenseDraft(name="Cones").can_save is False
        assert ExpenseDraft(amount_text="4").can_save is False
        assert ExpenseDraft(name="Cones", amount_text="4").can_save is True

    def test_expense_is_stored_negative(self):
        draft = ExpenseDraft(kind=EntryKind.EXPENSE, name="Cream", amount_text="12.50")
        assert draft.to_expense().cost == Decimal("-12.50")

    def test_income_is_stored_positive(self):
        draft = ExpenseDraft(kind=EntryKind.INCOME, name="Bake sale", amount_text="30")
        assert draft.to_expense().cost == Decimal("30")

    def test_unparseable_amount_counts_as_zero(self):
        """Test lenient parse: text that is not a number is saved as 0."""
        draft = ExpenseDraft(kind=EntryKind.EXPENSE, name="Sprinkles", amount_text="a few")
        expense = draft.to_expense()
        assert expense.cost == Decimal("0")
        assert format_amount(expense.cost) == "$0.00"

    def test_kind_labels(self):
        assert EntryKind.EXPENSE.label == "Expense"
        assert EntryKind.INCOME.label == "Income"


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.RECIPE_CREATED,
            description="Recipe added",
        )
        assert event.event_type == AuditEventType.RECIPE_CREATED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.ENTRY_CREATED,
            description="Budget entry added",
            details={"name": "Cones", "cost": "-4.99"},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "entry_created"
        assert log_dict["details"]["name"] == "Cones"

    def test_audit_event_to_row(self):
        """Test conversion to a flat row."""
        event = AuditEvent(
            event_type=AuditEventType.RECIPE_DELETED,
            description="Recipe deleted",
            is_user_action=True,
        )
        row = event.to_row()
        assert len(row) == len(AUDIT_COLUMNS)
        assert row[2] == "recipe_deleted"
        assert row[9] == "True"

    def test_audit_event_from_row(self):
        """Test that a row reads back into the same event."""
        event = AuditEventBuilder.recipe_updated(uuid4(), "notes", "old", "new")
        restored = AuditEvent.from_row(event.to_row())
        assert restored.event_id == event.event_id
        assert restored.entity_id == event.entity_id
        assert restored.details == event.details
        assert restored.is_user_action is True

    def test_audit_event_from_short_row(self):
        """Test that missing trailing cells read as empty."""
        row = [str(uuid4()), datetime.now(timezone.utc).isoformat(), "system_error", "error", "", "", "boom"]
        event = AuditEvent.from_row(row)
        assert event.entity_id is None
        assert event.details == {}
        assert event.is_user_action is False

    def test_audit_event_builder_recipe_created(self):
        recipe_id = uuid4()
        event = AuditEventBuilder.recipe_created(recipe_id, "Vanilla")
        assert event.event_type == AuditEventType.RECIPE_CREATED
        assert event.entity_type == "recipe"
        assert event.entity_id == recipe_id
        assert event.is_user_action is True

    def test_audit_event_builder_division_by_zero(self):
        event = AuditEventBuilder.division_by_zero(42)
        assert event.event_type == AuditEventType.DIVISION_BY_ZERO
        assert event.severity == AuditSeverity.WARNING
        assert event.entity_type == "calculator"
        assert event.details == {"accumulator": 42}

    def test_audit_event_builder_storage_error(self):
        event = AuditEventBuilder.storage_error("insert", "disk full", entity_type="expense")
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "disk full"
        assert event.details["operation"] == "insert"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
