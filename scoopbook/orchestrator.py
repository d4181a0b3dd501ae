"""
Main Orchestrator for Scoopbook

Ties the components together: picks the storage backend from settings,
builds one record store per record type, and hands each feature the
store and audit logger it uses.

DESIGN DECISION: Features never reach for a global database handle.
Everything they touch is passed in here.
"""

from typing import Optional

import structlog

from scoopbook.audit import AuditLogger, configure_logging
from scoopbook.calculator import Calculator
from scoopbook.config import Settings, get_settings
from scoopbook.features import BudgetLedger, RecipeBook
from scoopbook.models import Expense, Recipe
from scoopbook.storage import (
    AuditStorageInterface,
    GoogleSheetsAuditStorage,
    GoogleSheetsClient,
    GoogleSheetsRecordStore,
    InMemoryAuditStorage,
    InMemoryRecordStore,
    JsonFileRecordStore,
    JsonLinesAuditStorage,
    RecordStoreInterface,
)


logger = structlog.get_logger(__name__)

RECIPES_FILE = "recipes.json"
EXPENSES_FILE = "expenses.json"
AUDIT_FILE = "audit.jsonl"


StoreBundle = tuple[
    RecordStoreInterface[Recipe],
    RecordStoreInterface[Expense],
    AuditStorageInterface,
]


def _memory_stores() -> StoreBundle:
    return (
        InMemoryRecordStore(Recipe),
        InMemoryRecordStore(Expense),
        InMemoryAuditStorage(),
    )


def _local_stores(settings: Settings) -> StoreBundle:
    data_dir = settings.storage.data_dir
    return (
        JsonFileRecordStore(Recipe, data_dir / RECIPES_FILE),
        JsonFileRecordStore(Expense, data_dir / EXPENSES_FILE),
        JsonLinesAuditStorage(data_dir / AUDIT_FILE),
    )


def _sheets_stores(settings: Settings) -> StoreBundle:
    sheets_settings = settings.google_sheets
    client = GoogleSheetsClient(sheets_settings)
    client.connect()
    return (
        GoogleSheetsRecordStore(Recipe, sheets_settings.recipes_sheet_name, client),
        GoogleSheetsRecordStore(Expense, sheets_settings.expenses_sheet_name, client),
        GoogleSheetsAuditStorage(client),
    )


def create_stores(
    settings: Optional[Settings] = None,
    backend: Optional[str] = None,
) -> StoreBundle:
    """
    Build the recipe store, expense store and audit store.

    Args:
        settings: Settings to read; defaults to get_settings()
        backend: "local", "sheets" or "memory"; defaults to the
                 configured STORAGE_BACKEND

    Returns:
        (recipe_store, expense_store, audit_storage)

    If the Google Sheets backend cannot be set up, falls back to
    local JSON files and logs a warning.
    """
    settings = settings or get_settings()
    backend = backend or settings.storage.backend

    if backend == "memory":
        return _memory_stores()

    if backend == "sheets":
        try:
            return _sheets_stores(settings)
        except Exception as e:
            # Sheets not configured - continue with local files
            logger.warning("sheets_storage_unavailable", error=str(e))

    return _local_stores(settings)


def create_app_components(
    settings: Optional[Settings] = None,
    backend: Optional[str] = None,
) -> tuple[RecipeBook, BudgetLedger, AuditLogger]:
    """
    Factory function to create all application components.

    Returns:
        (recipe_book, budget_ledger, audit_logger)
    """
    settings = settings or get_settings()
    app_settings = settings.app
    # Debug mode overrides the configured level
    log_level = "DEBUG" if app_settings.debug_mode else app_settings.log_level
    configure_logging(log_level, json_logs=app_settings.log_json)

    recipe_store, expense_store, audit_storage = create_stores(settings, backend)
    audit_logger = AuditLogger(audit_storage)

    recipe_book = RecipeBook(recipe_store, audit_logger)
    budget_ledger = BudgetLedger(
        expense_store,
        audit_logger,
        currency_symbol=app_settings.currency_symbol,
    )

    logger.info(
        "app_components_created",
        backend=backend or settings.storage.backend,
        environment=app_settings.app_environment,
    )
    return recipe_book, budget_ledger, audit_logger


def create_calculator(
    settings: Optional[Settings] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> Calculator:
    """A fresh calculator configured from settings."""
    settings = settings or get_settings()
    return Calculator(
        max_digits=settings.calculator.max_digits,
        audit_logger=audit_logger,
    )
