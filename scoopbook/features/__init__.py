"""Feature services: navigation, recipes and budget."""

from scoopbook.features.budget import BudgetLedger, EntryNotSavableError
from scoopbook.features.navigation import (
    DESTINATIONS,
    HOME_TITLE,
    UNKNOWN_PAGE,
    Destination,
    UnknownDestinationError,
    route,
)
from scoopbook.features.recipes import RecipeBook, RecipeNotSavableError

__all__ = [
    "BudgetLedger",
    "EntryNotSavableError",
    "DESTINATIONS",
    "HOME_TITLE",
    "UNKNOWN_PAGE",
    "Destination",
    "UnknownDestinationError",
    "route",
    "RecipeBook",
    "RecipeNotSavableError",
]
