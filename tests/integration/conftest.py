"""Fixtures for end-to-end flows against a real SQLite database."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import src.infrastructure.storage.sqlite.connection as conn_module
from src.core.entities import Customer, Part
from src.core.services import (
    InvoiceLifecycleService,
    InvoiceNumberGenerator,
    InvoiceReconciliationService,
    PaymentAllocatorService,
    StockLedger,
)
from src.infrastructure.storage.sqlite.connection import close_pool
from src.infrastructure.storage.sqlite.migrations.migrator import initialize_database
from src.infrastructure.storage.sqlite.transaction import SQLiteTransactionRunner


@pytest.fixture
async def shop_db(tmp_path: Path) -> AsyncGenerator[Path, None]:
    """Migrated database behind the global pool."""
    db_path = tmp_path / "shop.db"
    await initialize_database(db_path, create_backup_before=False)

    settings = MagicMock()
    settings.storage.db_path = db_path
    settings.storage.pool_size = 4
    settings.storage.busy_timeout = 10000

    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=settings):
        try:
            yield db_path
        finally:
            await close_pool()


@pytest.fixture
def shop_runner() -> SQLiteTransactionRunner:
    return SQLiteTransactionRunner(
        max_attempts=5,
        retry_delay=0.01,
        max_delay=0.1,
        default_tax_rate=0.219,
    )


@pytest.fixture
def lifecycle() -> InvoiceLifecycleService:
    return InvoiceLifecycleService(ledger=StockLedger(), number_generator=InvoiceNumberGenerator())


@pytest.fixture
def reconciliation() -> InvoiceReconciliationService:
    return InvoiceReconciliationService(ledger=StockLedger())


@pytest.fixture
def allocator() -> PaymentAllocatorService:
    return PaymentAllocatorService(currency="GHS")


@pytest.fixture
def alternator() -> Part:
    return Part(
        id="part-alt",
        name="Heavy Duty Alternator",
        part_number="HD-ALT-001",
        part_code="P001",
        price=100.0,
        tax=21.9,
        stock=10,
        category="Electrical",
    )


@pytest.fixture
def oil_filter() -> Part:
    return Part(
        id="part-filter",
        name="Oil Filter",
        part_number="OF-002",
        part_code="P002",
        price=40.0,
        tax=8.76,
        stock=3,
        category="Filters",
    )


@pytest.fixture
def kwame() -> Customer:
    return Customer(id="cust-1", name="Kwame Mensah", phone="0241234567", address="12 Ring Road, Accra")


@pytest.fixture
async def stocked_shop(shop_db, shop_runner, alternator, oil_filter, kwame) -> Path:
    """Database holding two parts and one customer."""

    async def work(tx):
        await tx.insert_part(alternator)
        await tx.insert_part(oil_filter)
        await tx.insert_customer(kwame)

    await shop_runner.run(work, operation="test_seed")
    return shop_db
