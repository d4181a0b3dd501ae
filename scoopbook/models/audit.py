"""
Audit Models for Scoopbook

Every change to a stored record is logged as an audit event, as are
the few conditions worth surfacing later (a division by zero on the
calculator, a failing storage backend).

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

import json
from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from scoopbook.models.base import utcnow


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Recipes
    RECIPE_CREATED = "recipe_created"
    RECIPE_UPDATED = "recipe_updated"
    RECIPE_DELETED = "recipe_deleted"

    # Budget
    ENTRY_CREATED = "entry_created"
    ENTRY_DELETED = "entry_deleted"

    # Calculator
    DIVISION_BY_ZERO = "division_by_zero"

    # System events
    STORAGE_ERROR = "storage_error"
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


# Column order used by row-based audit storage
AUDIT_COLUMNS = [
    "event_id",
    "timestamp",
    "event_type",
    "severity",
    "entity_type",
    "entity_id",
    "description",
    "details_json",
    "error_message",
    "is_user_action",
]


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'recipe', 'expense', 'calculator')"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }

    def to_row(self) -> list[str]:
        """
        Convert to a flat row of strings, in AUDIT_COLUMNS order.
        """
        return [
            str(self.event_id),
            self.timestamp.isoformat(),
            self.event_type.value,
            self.severity.value,
            self.entity_type or "",
            str(self.entity_id) if self.entity_id else "",
            self.description,
            json.dumps(self.details) if self.details else "",
            self.error_message or "",
            str(self.is_user_action),
        ]

    @classmethod
    def from_row(cls, row: list[str]) -> "AuditEvent":
        """Inverse of `to_row`; missing trailing cells read as empty."""
        def safe_get(index: int) -> str:
            try:
                return row[index]
            except IndexError:
                return ""

        return cls(
            event_id=UUID(safe_get(0)),
            timestamp=datetime.fromisoformat(safe_get(1)),
            event_type=AuditEventType(safe_get(2)),
            severity=AuditSeverity(safe_get(3)),
            entity_type=safe_get(4) or None,
            entity_id=UUID(safe_get(5)) if safe_get(5) else None,
            description=safe_get(6),
            details=json.loads(safe_get(7)) if safe_get(7) else {},
            error_message=safe_get(8) or None,
            is_user_action=safe_get(9).lower() == "true",
        )


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.recipe_created(recipe_id, name)
        event = AuditEventBuilder.division_by_zero(accumulator)
    """

    @staticmethod
    def recipe_created(recipe_id: UUID, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECIPE_CREATED,
            entity_type="recipe",
            entity_id=recipe_id,
            description=f"Recipe added: {name}",
            details={"name": name},
            is_user_action=True,
        )

    @staticmethod
    def recipe_updated(
        recipe_id: UUID,
        field: str,
        old_value: Any,
        new_value: Any,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECIPE_UPDATED,
            entity_type="recipe",
            entity_id=recipe_id,
            description=f"Recipe field changed: {field}",
            details={
                "field": field,
                "old_value": str(old_value),
                "new_value": str(new_value),
            },
            is_user_action=True,
        )

    @staticmethod
    def recipe_deleted(recipe_id: UUID, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECIPE_DELETED,
            entity_type="recipe",
            entity_id=recipe_id,
            description=f"Recipe deleted: {name}",
            details={"name": name},
            is_user_action=True,
        )

    @staticmethod
    def entry_created(entry_id: UUID, name: str, cost: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_CREATED,
            entity_type="expense",
            entity_id=entry_id,
            description=f"Budget entry added: {name} ({cost})",
            details={"name": name, "cost": cost},
            is_user_action=True,
        )

    @staticmethod
    def entry_deleted(entry_id: UUID, name: str, cost: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_DELETED,
            entity_type="expense",
            entity_id=entry_id,
            description=f"Budget entry deleted: {name} ({cost})",
            details={"name": name, "cost": cost},
            is_user_action=True,
        )

    @staticmethod
    def division_by_zero(accumulator: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DIVISION_BY_ZERO,
            severity=AuditSeverity.WARNING,
            entity_type="calculator",
            description=f"Division by zero attempted: {accumulator} ÷ 0",
            details={"accumulator": accumulator},
            is_user_action=True,
        )

    @staticmethod
    def storage_error(
        operation: str,
        error_message: str,
        entity_type: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            entity_type=entity_type,
            description=f"Storage operation failed: {operation}",
            error_message=error_message,
            details={"operation": operation},
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
