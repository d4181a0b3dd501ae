"""
Budget Ledger

List, add and delete expenses and income against an injected record
store, and keep the running total ("Total Saving").
"""

from decimal import Decimal
from typing import Iterable, Optional

import structlog

from scoopbook.audit import AuditLogger
from scoopbook.models.expense import Expense, ExpenseDraft, format_amount
from scoopbook.storage.interface import RecordStoreInterface, StorageError


logger = structlog.get_logger(__name__)


class EntryNotSavableError(ValueError):
    """The entry is missing its name or amount."""
    pass


class BudgetLedger:
    """Budget feature service."""

    def __init__(
        self,
        store: RecordStoreInterface[Expense],
        audit_logger: Optional[AuditLogger] = None,
        currency_symbol: str = "$",
    ):
        self._store = store
        self._audit_logger = audit_logger
        self._currency_symbol = currency_symbol

    def _storage_failed(self, operation: str, error: StorageError) -> None:
        if self._audit_logger:
            self._audit_logger.log_storage_error(operation, str(error), entity_type="expense")

    def list_entries(self) -> list[Expense]:
        """All entries, newest first."""
        return list(self._store.query_all(sort_by_creation_descending=True))

    def add_entry(self, draft: ExpenseDraft) -> Expense:
        """
        Save a new expense or income entry.

        The amount is read leniently: text that is not a number counts as 0.

        Raises:
            EntryNotSavableError: If the name or amount is empty
            StorageError: If the store rejects the insert
        """
        if not draft.can_save:
            raise EntryNotSavableError("An entry needs a name and an amount")

        entry = draft.to_expense()
        try:
            self._store.insert(entry)
        except StorageError as e:
            self._storage_failed("insert", e)
            raise

        logger.info("entry_added", entry_id=str(entry.id), kind=entry.kind.value)
        if self._audit_logger:
            self._audit_logger.log_entry_created(entry)
        return entry

    def delete_entry(self, entry: Expense) -> bool:
        try:
            removed = self._store.delete(entry)
        except StorageError as e:
            self._storage_failed("delete", e)
            raise

        if removed and self._audit_logger:
            self._audit_logger.log_entry_deleted(entry)
        return removed

    def delete_at(self, offsets: Iterable[int]) -> list[Expense]:
        """
        Delete the entries at the given positions of the current listing.

        Raises:
            IndexError: If an offset is outside the listing
        """
        listing = self.list_entries()
        positions = sorted(set(offsets))
        if positions and positions[0] < 0:
            raise IndexError(f"Offset out of range: {positions[0]}")
        targets = [listing[i] for i in positions]
        for entry in targets:
            self.delete_entry(entry)
        return targets

    def total_saving(self) -> Decimal:
        """Sum of all signed entries; income minus expenses."""
        return sum(
            (entry.cost for entry in self._store.query_all()),
            Decimal("0"),
        )

    def format(self, amount: Decimal) -> str:
        return format_amount(amount, self._currency_symbol)
