"""SQLite storage implementations."""

from src.infrastructure.storage.sqlite.activity_store import SQLiteActivityLogStore
from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from src.infrastructure.storage.sqlite.customer_store import SQLiteCustomerStore
from src.infrastructure.storage.sqlite.invoice_store import SQLiteInvoiceStore
from src.infrastructure.storage.sqlite.part_store import SQLitePartStore
from src.infrastructure.storage.sqlite.settings_store import SQLiteSettingsStore
from src.infrastructure.storage.sqlite.transaction import (
    SQLiteTransaction,
    SQLiteTransactionRunner,
)

# Singleton instances
_part_store: SQLitePartStore | None = None
_customer_store: SQLiteCustomerStore | None = None
_invoice_store: SQLiteInvoiceStore | None = None
_activity_store: SQLiteActivityLogStore | None = None
_settings_store: SQLiteSettingsStore | None = None
_transaction_runner: SQLiteTransactionRunner | None = None


async def get_part_store() -> SQLitePartStore:
    """Get singleton part store instance."""
    global _part_store
    if _part_store is None:
        _part_store = SQLitePartStore()
    return _part_store


async def get_customer_store() -> SQLiteCustomerStore:
    """Get singleton customer store instance."""
    global _customer_store
    if _customer_store is None:
        _customer_store = SQLiteCustomerStore()
    return _customer_store


async def get_invoice_store() -> SQLiteInvoiceStore:
    """Get singleton invoice store instance."""
    global _invoice_store
    if _invoice_store is None:
        _invoice_store = SQLiteInvoiceStore()
    return _invoice_store


async def get_activity_store() -> SQLiteActivityLogStore:
    """Get singleton activity log store instance."""
    global _activity_store
    if _activity_store is None:
        _activity_store = SQLiteActivityLogStore()
    return _activity_store


async def get_settings_store() -> SQLiteSettingsStore:
    """Get singleton settings store instance."""
    global _settings_store
    if _settings_store is None:
        _settings_store = SQLiteSettingsStore()
    return _settings_store


async def get_transaction_runner() -> SQLiteTransactionRunner:
    """Get singleton transaction runner instance."""
    global _transaction_runner
    if _transaction_runner is None:
        _transaction_runner = SQLiteTransactionRunner()
    return _transaction_runner


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLitePartStore",
    "SQLiteCustomerStore",
    "SQLiteInvoiceStore",
    "SQLiteActivityLogStore",
    "SQLiteSettingsStore",
    # Transactions
    "SQLiteTransaction",
    "SQLiteTransactionRunner",
    # Factory functions
    "get_part_store",
    "get_customer_store",
    "get_invoice_store",
    "get_activity_store",
    "get_settings_store",
    "get_transaction_runner",
]
