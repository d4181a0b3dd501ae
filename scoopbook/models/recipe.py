"""
Recipe Models

A recipe is free text from top to bottom: the only rule is that it has
a name. "Last made" is whatever the user typed ("last Sunday", "2025-03-01"),
never a parsed date.
"""

from pydantic import BaseModel, ConfigDict, Field

from scoopbook.models.base import Record


NO_LINK_LABEL = "No link was added"
LINK_LABEL = "Link to Tutorial"

# Fields a user may change after the recipe is saved
EDITABLE_RECIPE_FIELDS = ("name", "ingredients", "last_made", "tutorial_link", "notes")


class Recipe(Record):
    """A saved recipe."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Recipe name (required)"
    )
    ingredients: str = Field(
        default="",
        description="Ingredients, free text"
    )
    last_made: str = Field(
        default="",
        description="When it was last made, free text"
    )
    tutorial_link: str = Field(
        default="",
        description="Link to a video or online tutorial"
    )
    notes: str = Field(
        default="",
        description="Anything else worth remembering"
    )

    @property
    def has_tutorial_link(self) -> bool:
        return bool(self.tutorial_link)

    @property
    def tutorial_label(self) -> str:
        """Text shown where the tutorial link goes."""
        return LINK_LABEL if self.has_tutorial_link else NO_LINK_LABEL


class RecipeDraft(BaseModel):
    """
    The "Add a Recipe" form buffer.

    Nothing here is validated beyond `can_save`; the form keeps
    whatever the user typed until Save is pressed.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = ""
    ingredients: str = ""
    last_made: str = ""
    tutorial_link: str = ""
    notes: str = ""

    @property
    def can_save(self) -> bool:
        """Save is only enabled once the recipe has a name."""
        return bool(self.name)

    def to_recipe(self) -> Recipe:
        return Recipe(
            name=self.name,
            ingredients=self.ingredients,
            last_made=self.last_made,
            tutorial_link=self.tutorial_link,
            notes=self.notes,
        )
