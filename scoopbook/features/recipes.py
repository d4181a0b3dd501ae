"""
Recipe Book

List, add, edit and delete recipes against an injected record store.
Listings are newest first.
"""

from typing import Any, Iterable, Optional

import structlog

from scoopbook.audit import AuditLogger
from scoopbook.models.recipe import EDITABLE_RECIPE_FIELDS, Recipe, RecipeDraft
from scoopbook.storage.interface import RecordStoreInterface, StorageError


logger = structlog.get_logger(__name__)


class RecipeNotSavableError(ValueError):
    """The recipe is missing something it needs before it can be saved."""
    pass


class RecipeBook:
    """
    Recipe feature service.

    Every change goes through the store passed in; nothing is cached here,
    so two books over the same store always agree.
    """

    def __init__(
        self,
        store: RecordStoreInterface[Recipe],
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger

    def _storage_failed(self, operation: str, error: StorageError) -> None:
        if self._audit_logger:
            self._audit_logger.log_storage_error(operation, str(error), entity_type="recipe")

    def list_recipes(self) -> list[Recipe]:
        """All recipes, newest first."""
        return list(self._store.query_all(sort_by_creation_descending=True))

    def add_recipe(self, draft: RecipeDraft) -> Recipe:
        """
        Save a new recipe from the add form.

        Raises:
            RecipeNotSavableError: If the draft has no name
            StorageError: If the store rejects the insert
        """
        if not draft.can_save:
            raise RecipeNotSavableError("A recipe needs a name before it can be saved")

        recipe = draft.to_recipe()
        try:
            self._store.insert(recipe)
        except StorageError as e:
            self._storage_failed("insert", e)
            raise

        logger.info("recipe_added", recipe_id=str(recipe.id))
        if self._audit_logger:
            self._audit_logger.log_recipe_created(recipe)
        return recipe

    def edit_recipe(self, recipe: Recipe, field: str, value: Any) -> Recipe:
        """
        Change one text field of a saved recipe.

        Raises:
            ValueError: If `field` is not user-editable
            RecipeNotSavableError: If the edit would blank out the name
            StorageError: If the store rejects the update
        """
        if field not in EDITABLE_RECIPE_FIELDS:
            raise ValueError(f"Recipe field '{field}' cannot be edited")
        if isinstance(value, str):
            value = value.strip()
        if field == "name" and not value:
            raise RecipeNotSavableError("A recipe cannot have an empty name")

        old_value = getattr(recipe, field)
        if old_value == value:
            return recipe

        try:
            updated = self._store.update(recipe, field, value)
        except StorageError as e:
            self._storage_failed("update", e)
            raise

        if self._audit_logger:
            self._audit_logger.log_recipe_updated(updated, field, old_value, getattr(updated, field))
        return updated

    def delete_recipe(self, recipe: Recipe) -> bool:
        try:
            removed = self._store.delete(recipe)
        except StorageError as e:
            self._storage_failed("delete", e)
            raise

        if removed and self._audit_logger:
            self._audit_logger.log_recipe_deleted(recipe)
        return removed

    def delete_at(self, offsets: Iterable[int]) -> list[Recipe]:
        """
        Delete the recipes at the given positions of the current listing.

        Raises:
            IndexError: If an offset is outside the listing
        """
        listing = self.list_recipes()
        positions = sorted(set(offsets))
        if positions and positions[0] < 0:
            raise IndexError(f"Offset out of range: {positions[0]}")
        targets = [listing[i] for i in positions]
        for recipe in targets:
            self.delete_recipe(recipe)
        return targets
