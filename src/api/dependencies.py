"""
Dependency injection container for FastAPI.

Provides stores and use cases to route handlers. Tests swap any of
these through ``app.dependency_overrides``.
"""

from functools import lru_cache

from src.application.use_cases import (
    AddPartUseCase,
    CreateCustomerUseCase,
    CreateInvoiceUseCase,
    EditInvoiceUseCase,
    GetCustomerStatementUseCase,
    ImportPartsUseCase,
    RecordPaymentUseCase,
    SeedCatalogUseCase,
    UpdatePricesUseCase,
    UpdateTaxRateUseCase,
)
from src.config import Settings, get_settings
from src.infrastructure.storage.sqlite import (
    SQLiteActivityLogStore,
    SQLiteCustomerStore,
    SQLiteInvoiceStore,
    SQLitePartStore,
    SQLiteSettingsStore,
    get_activity_store,
    get_customer_store,
    get_invoice_store,
    get_part_store,
    get_settings_store,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Store dependencies
async def get_parts() -> SQLitePartStore:
    """Get part store."""
    return await get_part_store()


async def get_customers() -> SQLiteCustomerStore:
    """Get customer store."""
    return await get_customer_store()


async def get_invoices() -> SQLiteInvoiceStore:
    """Get invoice store."""
    return await get_invoice_store()


async def get_activity() -> SQLiteActivityLogStore:
    """Get activity log store."""
    return await get_activity_store()


async def get_pricing_settings() -> SQLiteSettingsStore:
    """Get pricing settings store."""
    return await get_settings_store()


# Parts
def get_add_part_use_case() -> AddPartUseCase:
    """Get add part use case."""
    return AddPartUseCase()


def get_import_parts_use_case() -> ImportPartsUseCase:
    """Get import parts use case."""
    return ImportPartsUseCase()


def get_seed_catalog_use_case() -> SeedCatalogUseCase:
    """Get seed catalog use case."""
    return SeedCatalogUseCase()


def get_update_prices_use_case() -> UpdatePricesUseCase:
    """Get update prices use case."""
    return UpdatePricesUseCase()


def get_update_tax_rate_use_case() -> UpdateTaxRateUseCase:
    """Get update tax rate use case."""
    return UpdateTaxRateUseCase()


# Customers
def get_create_customer_use_case() -> CreateCustomerUseCase:
    """Get create customer use case."""
    return CreateCustomerUseCase()


def get_statement_use_case() -> GetCustomerStatementUseCase:
    """Get customer statement use case."""
    return GetCustomerStatementUseCase()


# Invoices and payments
def get_create_invoice_use_case() -> CreateInvoiceUseCase:
    """Get create invoice use case."""
    return CreateInvoiceUseCase()


def get_edit_invoice_use_case() -> EditInvoiceUseCase:
    """Get edit invoice use case."""
    return EditInvoiceUseCase()


def get_record_payment_use_case() -> RecordPaymentUseCase:
    """Get record payment use case."""
    return RecordPaymentUseCase()
