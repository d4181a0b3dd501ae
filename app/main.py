"""
Streamlit Frontend for Scoopbook

Three pages behind a home menu: Recipes, Calculator and Budget.

DESIGN PRINCIPLES:
1. Save buttons stay disabled until the required fields are filled in
2. Every page reads straight from its feature service
3. The calculator state lives in the session, one press per rerun
"""

import streamlit as st

from scoopbook.calculator import KEYPAD_LAYOUT, Calculator
from scoopbook.config import get_settings
from scoopbook.features import (
    DESTINATIONS,
    HOME_TITLE,
    UNKNOWN_PAGE,
    BudgetLedger,
    Destination,
    RecipeBook,
    UnknownDestinationError,
    route,
)
from scoopbook.models import EDITABLE_RECIPE_FIELDS, EntryKind, ExpenseDraft, RecipeDraft
from scoopbook.orchestrator import create_app_components, create_calculator
from scoopbook.storage import StorageError


st.set_page_config(
    page_title="Scoopbook",
    page_icon="🍦",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .stApp {
        background-color: #B8E6A8;
    }
    .stButton>button {
        width: 100%;
        margin-top: 6px;
    }
    .total-box {
        padding: 20px;
        background-color: #000000;
        color: #ffffff;
        border-radius: 8px;
        font-size: 1.8em;
        font-weight: bold;
        text-align: center;
        margin: 10px 0;
    }
    .calc-display {
        font-size: 4em;
        text-align: right;
        color: #ffffff;
        padding: 10px 20px;
    }
</style>
""", unsafe_allow_html=True)


FIELD_LABELS = {
    "name": "Name 🍦",
    "ingredients": "Ingredients 🥛",
    "last_made": "Last Made ⏰",
    "tutorial_link": "Tutorial Link 🔗",
    "notes": "Notes 📝",
}


def possessive(name: str) -> str:
    return f"{name}'" if name.endswith("s") else f"{name}'s"


@st.cache_resource
def get_components():
    """Get or create application components (cached)."""
    return create_app_components()


def get_calculator() -> Calculator:
    """One calculator per browser session."""
    if "calculator" not in st.session_state:
        _, _, audit_logger = get_components()
        st.session_state.calculator = create_calculator(audit_logger=audit_logger)
    return st.session_state.calculator


def main():
    """Main application entry point."""
    recipe_book, budget_ledger, audit_logger = get_components()

    st.sidebar.title("🍦 Scoopbook")
    st.sidebar.markdown(f"**{HOME_TITLE}**")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        [d.value for d in DESTINATIONS],
        format_func=lambda name: f"{Destination(name).icon} {name}",
        index=0,
    )

    try:
        destination = route(page)
    except UnknownDestinationError:
        st.title(UNKNOWN_PAGE)
        return

    try:
        if destination == Destination.RECIPES:
            render_recipes_page(recipe_book)
        elif destination == Destination.CALCULATOR:
            render_calculator_page(get_calculator())
        elif destination == Destination.BUDGET:
            render_budget_page(budget_ledger)
    except Exception as e:
        audit_logger.log_error(type(e).__name__, str(e), {"page": destination.value})
        st.error(f"Something went wrong: {str(e)}")


def render_recipes_page(recipe_book: RecipeBook):
    """Render the recipe list with add, edit and delete."""
    st.title(f"{possessive(get_settings().app.owner_name)} Recipes")

    with st.expander("➕ Add a Recipe"):
        draft = RecipeDraft(
            name=st.text_input(FIELD_LABELS["name"], key="new_name"),
            ingredients=st.text_input(FIELD_LABELS["ingredients"], key="new_ingredients"),
            last_made=st.text_input(FIELD_LABELS["last_made"], key="new_last_made"),
            tutorial_link=st.text_input(FIELD_LABELS["tutorial_link"], key="new_tutorial_link"),
            notes=st.text_area(FIELD_LABELS["notes"], key="new_notes"),
        )
        if st.button("Save", key="save_recipe", disabled=not draft.can_save, type="primary"):
            try:
                recipe_book.add_recipe(draft)
                st.rerun()
            except StorageError as e:
                st.error(f"Failed to save: {e}")

    try:
        recipes = recipe_book.list_recipes()
    except StorageError as e:
        st.error(f"Could not load recipes: {e}")
        return

    if not recipes:
        st.info("No recipes yet. Add your first one above.")

    for recipe in recipes:
        st.markdown("---")
        st.subheader(recipe.name)
        st.markdown(f"**Ingredients:** {recipe.ingredients}")
        st.markdown(f"**Last Made:** {recipe.last_made}")
        if recipe.has_tutorial_link:
            st.markdown(f"[{recipe.tutorial_label}]({recipe.tutorial_link})")
        else:
            st.caption(recipe.tutorial_label)
        st.markdown(f"**Notes:** {recipe.notes}")

        col1, col2 = st.columns([4, 1])
        with col1:
            with st.expander("✏️ Edit Recipe"):
                for field in EDITABLE_RECIPE_FIELDS:
                    new_value = st.text_input(
                        FIELD_LABELS[field],
                        value=getattr(recipe, field),
                        key=f"edit_{recipe.id}_{field}",
                    )
                    if new_value.strip() != getattr(recipe, field):
                        try:
                            recipe_book.edit_recipe(recipe, field, new_value)
                        except ValueError as e:
                            st.warning(str(e))
                        except StorageError as e:
                            st.error(f"Failed to update: {e}")
        with col2:
            if st.button("🗑️ Delete", key=f"delete_{recipe.id}"):
                try:
                    recipe_book.delete_recipe(recipe)
                    st.rerun()
                except StorageError as e:
                    st.error(f"Failed to delete: {e}")


def render_calculator_page(calculator: Calculator):
    """Render the calculator display and keypad."""
    st.title("🧮 Calculator")

    display = calculator.display
    st.markdown(
        f'<div class="calc-display">{display.display_value}</div>',
        unsafe_allow_html=True,
    )
    if display.message:
        st.warning(display.message)

    for row_idx, row in enumerate(KEYPAD_LAYOUT):
        cols = st.columns(len(row))
        for col, button in zip(cols, row):
            with col:
                if st.button(button.value, key=f"calc_{row_idx}_{button.name}"):
                    calculator.press(button.value)
                    st.rerun()


def render_budget_page(budget_ledger: BudgetLedger):
    """Render the running total, entry list and add form."""
    st.title(f"{possessive(get_settings().app.owner_name)} Budget")

    try:
        entries = budget_ledger.list_entries()
        total = budget_ledger.total_saving()
    except StorageError as e:
        st.error(f"Could not load budget: {e}")
        return

    st.markdown(
        f'<div class="total-box">Total Saving: {budget_ledger.format(total)}</div>',
        unsafe_allow_html=True,
    )

    with st.expander("➕ Add Expense/Income"):
        kind = st.radio(
            "Category",
            list(EntryKind),
            format_func=lambda k: k.label,
            horizontal=True,
        )
        draft = ExpenseDraft(
            kind=kind,
            name=st.text_input(f"{kind.label} Name", key="new_entry_name"),
            amount_text=st.text_input("Amount", key="new_entry_amount"),
        )
        if st.button("Save", key="save_entry", disabled=not draft.can_save, type="primary"):
            try:
                budget_ledger.add_entry(draft)
                st.rerun()
            except StorageError as e:
                st.error(f"Failed to save: {e}")

    st.subheader("Expenses/Income")
    if not entries:
        st.info("Nothing recorded yet.")

    for entry in entries:
        col1, col2, col3 = st.columns([3, 2, 1])
        with col1:
            st.markdown(f"### {entry.name}")
        with col2:
            st.markdown(f"### {budget_ledger.format(entry.cost)}")
        with col3:
            if st.button("🗑️", key=f"delete_entry_{entry.id}"):
                try:
                    budget_ledger.delete_entry(entry)
                    st.rerun()
                except StorageError as e:
                    st.error(f"Failed to delete: {e}")


if __name__ == "__main__":
    main()
