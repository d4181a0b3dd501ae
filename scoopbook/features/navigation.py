"""
Home screen navigation.

A fixed list of three destinations. Features share no state; routing
only decides which one to show.
"""

from enum import Enum


HOME_TITLE = "Let's Make Some Ice Cream!"
UNKNOWN_PAGE = "Unknown Page"


class UnknownDestinationError(LookupError):
    """No destination has the requested name."""
    pass


class Destination(str, Enum):
    RECIPES = "Recipes"
    CALCULATOR = "Calculator"
    BUDGET = "Budget"

    @property
    def icon(self) -> str:
        return _ICONS[self]


_ICONS = {
    Destination.RECIPES: "🍦",
    Destination.CALCULATOR: "🧮",
    Destination.BUDGET: "💰",
}

# Order shown on the home screen
DESTINATIONS: list[Destination] = [
    Destination.RECIPES,
    Destination.CALCULATOR,
    Destination.BUDGET,
]


def route(name: str) -> Destination:
    """
    Resolve a destination by its display name (case-insensitive).

    Raises:
        UnknownDestinationError: If no destination matches
    """
    wanted = name.strip().lower()
    for destination in DESTINATIONS:
        if destination.value.lower() == wanted:
            return destination
    raise UnknownDestinationError(f"{UNKNOWN_PAGE}: {name!r}")
