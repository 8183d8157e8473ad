"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import src.infrastructure.storage.sqlite.connection as conn_module
from src.core.entities import Customer, Part
from src.infrastructure.storage.sqlite.connection import close_pool
from src.infrastructure.storage.sqlite.migrations.migrator import initialize_database
from src.infrastructure.storage.sqlite.transaction import SQLiteTransactionRunner


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 3
    mock.storage.busy_timeout = 5000
    return mock


@pytest.fixture
async def initialized_db(temp_db_path: Path, mock_settings) -> AsyncGenerator[Path, None]:
    """Migrated temporary database served by the global pool."""
    await initialize_database(temp_db_path, create_backup_before=False)

    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield temp_db_path
        finally:
            await close_pool()


@pytest.fixture
def runner() -> SQLiteTransactionRunner:
    """Transaction runner with short retry delays."""
    return SQLiteTransactionRunner(
        max_attempts=5,
        retry_delay=0.01,
        max_delay=0.1,
        default_tax_rate=0.219,
    )


@pytest.fixture
def db_part() -> Part:
    return Part(
        id="part-pump",
        name="Hydraulic Pump",
        part_number="HYD-PMP-003",
        part_code="P003",
        price=850.0,
        tax=186.15,
        stock=8,
        category="Hydraulics",
    )


@pytest.fixture
def db_customer() -> Customer:
    return Customer(id="cust-db", name="Efua Asante", phone="0501112222", address="Takoradi")


@pytest.fixture
async def seeded_db(initialized_db, runner, db_part, db_customer) -> Path:
    """Database holding one part and one customer."""

    async def work(tx):
        await tx.insert_part(db_part)
        await tx.insert_customer(db_customer)

    await runner.run(work, operation="test_seed")
    return initialized_db
