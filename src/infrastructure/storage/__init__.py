"""Storage infrastructure implementations."""

from src.infrastructure.storage.sqlite import (
    SQLiteActivityLogStore,
    SQLiteCustomerStore,
    SQLiteInvoiceStore,
    SQLitePartStore,
    SQLiteSettingsStore,
    SQLiteTransactionRunner,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLitePartStore",
    "SQLiteCustomerStore",
    "SQLiteInvoiceStore",
    "SQLiteActivityLogStore",
    "SQLiteSettingsStore",
    "SQLiteTransactionRunner",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
