"""
Audit Logger

DESIGN DECISION: Every change to a stored record is logged.

The audit logger:
- Always writes a structured local log line
- Optionally appends the event to an audit store
- Never lets a failing audit store break the action being audited
"""

import logging
from typing import Optional

import structlog

from scoopbook.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from scoopbook.models.expense import Expense
from scoopbook.models.recipe import Recipe
from scoopbook.storage.interface import AuditStorageInterface


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure structlog on top of the standard library logger.

    Safe to call more than once; the last call wins for level and renderer.
    """
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


configure_logging()


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit store, when one is configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("scoopbook.audit")

    @property
    def storage(self) -> Optional[AuditStorageInterface]:
        return self._storage

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage is None:
            return True

        try:
            return self._storage.append_event(event)
        except Exception as e:
            # Log failure but don't raise
            self._logger.error(
                "audit_storage_failed",
                error=str(e),
                event_id=str(event.event_id),
            )
            return False

    def log_recipe_created(self, recipe: Recipe) -> None:
        self.log(AuditEventBuilder.recipe_created(recipe.id, recipe.name))

    def log_recipe_updated(
        self,
        recipe: Recipe,
        field: str,
        old_value: object,
        new_value: object,
    ) -> None:
        self.log(AuditEventBuilder.recipe_updated(recipe.id, field, old_value, new_value))

    def log_recipe_deleted(self, recipe: Recipe) -> None:
        self.log(AuditEventBuilder.recipe_deleted(recipe.id, recipe.name))

    def log_entry_created(self, entry: Expense) -> None:
        self.log(AuditEventBuilder.entry_created(entry.id, entry.name, str(entry.cost)))

    def log_entry_deleted(self, entry: Expense) -> None:
        self.log(AuditEventBuilder.entry_deleted(entry.id, entry.name, str(entry.cost)))

    def log_division_by_zero(self, accumulator: int) -> None:
        self.log(AuditEventBuilder.division_by_zero(accumulator))

    def log_storage_error(
        self,
        operation: str,
        error_message: str,
        entity_type: Optional[str] = None,
    ) -> None:
        """Log a failed storage call."""
        self.log(AuditEventBuilder.storage_error(operation, error_message, entity_type))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(error_type, error_message, details))
