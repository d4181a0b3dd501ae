"""
Data Models Package

This package contains all Pydantic models used in Scoopbook.
All records kept in a record store conform to these schemas.
"""

from scoopbook.models.base import Record, utcnow
from scoopbook.models.recipe import (
    EDITABLE_RECIPE_FIELDS,
    Recipe,
    RecipeDraft,
)
from scoopbook.models.expense import (
    EntryKind,
    Expense,
    ExpenseDraft,
    format_amount,
    parse_amount,
)
from scoopbook.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Base
    "Record",
    "utcnow",
    # Recipe models
    "EDITABLE_RECIPE_FIELDS",
    "Recipe",
    "RecipeDraft",
    # Budget models
    "EntryKind",
    "Expense",
    "ExpenseDraft",
    "format_amount",
    "parse_amount",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
