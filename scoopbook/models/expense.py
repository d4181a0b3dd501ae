"""
Budget Entry Models

One model covers both sides of the ledger. The sign of `cost` carries
the meaning: expenses are stored negative, income positive, so the
running total is a plain sum.
"""

from decimal import Decimal, InvalidOperation
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from scoopbook.models.base import Record


class EntryKind(str, Enum):
    """Which side of the ledger an entry goes on."""
    EXPENSE = "expense"
    INCOME = "income"

    @property
    def label(self) -> str:
        return self.value.capitalize()


def parse_amount(text: str, default: Decimal = Decimal("0")) -> Decimal:
    """
    Lenient amount parse.

    Unparseable or non-finite input gives `default` instead of an error.
    """
    try:
        value = Decimal(text.strip())
    except (InvalidOperation, AttributeError):
        return default
    if not value.is_finite():
        return default
    return value


def format_amount(amount: Decimal, currency_symbol: str = "$") -> str:
    """Two-decimal display form, e.g. "$12.50" or "$-3.00"."""
    return f"{currency_symbol}{amount:.2f}"


class Expense(Record):
    """A saved budget entry (expense or income)."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="What the money was for (required)"
    )
    cost: Decimal = Field(
        ...,
        description="Signed amount: negative for expenses, positive for income"
    )

    @property
    def kind(self) -> EntryKind:
        return EntryKind.EXPENSE if self.cost < 0 else EntryKind.INCOME


class ExpenseDraft(BaseModel):
    """The "Add Expense/Income" form buffer."""
    model_config = ConfigDict(str_strip_whitespace=True)

    kind: EntryKind = EntryKind.EXPENSE
    name: str = ""
    amount_text: str = ""

    @property
    def can_save(self) -> bool:
        """Save is only enabled once both name and amount are filled in."""
        return bool(self.name) and bool(self.amount_text)

    def signed_cost(self) -> Decimal:
        amount = parse_amount(self.amount_text)
        if amount == 0:
            return Decimal("0")
        if self.kind == EntryKind.EXPENSE:
            return -amount
        return amount

    def to_expense(self) -> Expense:
        return Expense(name=self.name, cost=self.signed_cost())
