"""Tests for SQLite transactions and the retrying runner."""

import sqlite3
from datetime import date
from unittest.mock import patch

import aiosqlite
import pytest

from src.core.entities import Invoice, InvoiceItem, PricingConfig
from src.core.exceptions import (
    DatabaseError,
    InsufficientStockError,
    PartNotFoundError,
    TransactionConflictError,
    TransactionOrderError,
)
from src.infrastructure.storage.sqlite import SQLitePartStore, SQLiteSettingsStore
from src.infrastructure.storage.sqlite.transaction import SQLiteTransactionRunner, is_lock_error


def _invoice(customer_id: str, part_id: str, quantity: int = 1) -> Invoice:
    return Invoice(
        invoice_number="INV-100",
        customer_id=customer_id,
        customer_name="Efua Asante",
        invoice_date=date(2024, 4, 1),
        due_date=date(2024, 5, 1),
        items=[InvoiceItem(part_id=part_id, part_name="Hydraulic Pump", quantity=quantity, unit_price=850.0)],
    )


class TestSQLiteTransaction:
    async def test_commit_persists(self, seeded_db, runner, db_part):
        async def work(tx):
            part = await tx.get_part(db_part.id)
            await tx.adjust_stock(part.id, -3)

        await runner.run(work)

        stored = await SQLitePartStore().get_part(db_part.id)
        assert stored.stock == 5

    async def test_error_rolls_back_every_write(self, seeded_db, runner, db_part, db_customer):
        async def work(tx):
            await tx.get_part(db_part.id)
            await tx.adjust_stock(db_part.id, -3)
            await tx.insert_invoice(_invoice(db_customer.id, db_part.id))
            raise InsufficientStockError(db_part.id, db_part.name, 0, 1)

        with pytest.raises(InsufficientStockError):
            await runner.run(work)

        stored = await SQLitePartStore().get_part(db_part.id)
        assert stored.stock == 8

        async def read(tx):
            return await tx.get_invoice("INV-100")

        assert await runner.run(read) is None

    async def test_read_after_write_refused(self, seeded_db, runner, db_part):
        async def work(tx):
            await tx.log_activity("first write")
            await tx.get_part(db_part.id)

        with pytest.raises(TransactionOrderError):
            await runner.run(work)

    async def test_get_parts_batch(self, seeded_db, runner, db_part):
        async def work(tx):
            return await tx.get_parts([db_part.id, "ghost", db_part.id])

        parts = await runner.run(work)
        assert list(parts) == [db_part.id]

    async def test_adjust_unknown_part(self, seeded_db, runner):
        async def work(tx):
            await tx.adjust_stock("ghost", -1)

        with pytest.raises(PartNotFoundError):
            await runner.run(work)

    async def test_negative_stock_blocked_by_schema(self, seeded_db, runner, db_part):
        async def work(tx):
            await tx.adjust_stock(db_part.id, -9)

        with pytest.raises(DatabaseError):
            await runner.run(work)

    async def test_invoice_round_trip(self, seeded_db, runner, db_part, db_customer):
        invoice = _invoice(db_customer.id, db_part.id, quantity=2)

        async def write(tx):
            await tx.insert_invoice(invoice)

        async def read(tx):
            return await tx.get_invoice(invoice.invoice_number), await tx.list_open_invoices(db_customer.id)

        await runner.run(write)
        stored, open_invoices = await runner.run(read)

        assert stored.items[0].quantity == 2
        assert stored.total == invoice.total
        assert [inv.invoice_number for inv in open_invoices] == ["INV-100"]

    async def test_pricing_config_upsert(self, initialized_db, runner):
        async def work(tx):
            await tx.save_pricing_config(PricingConfig(tax_rate=0.15, seeded=True))

        await runner.run(work)

        config = await SQLiteSettingsStore().get_pricing_config()
        assert config.tax_rate == 0.15
        assert config.seeded is True


class TestRunnerRetry:
    def test_lock_error_detection(self):
        assert is_lock_error(sqlite3.OperationalError("database is locked"))
        assert not is_lock_error(sqlite3.OperationalError("no such table: parts"))

    async def test_retries_lock_errors_then_succeeds(self, initialized_db, runner):
        attempts = []

        async def work(tx):
            attempts.append(1)
            if len(attempts) < 3:
                raise aiosqlite.OperationalError("database is locked")
            return "done"

        assert await runner.run(work, operation="flaky") == "done"
        assert len(attempts) == 3

    async def test_conflict_after_max_attempts(self, initialized_db):
        runner = SQLiteTransactionRunner(max_attempts=2, retry_delay=0.01, max_delay=0.01, default_tax_rate=0.219)
        attempts = []

        async def work(tx):
            attempts.append(1)
            raise aiosqlite.OperationalError("database is locked")

        with pytest.raises(TransactionConflictError) as exc_info:
            await runner.run(work, operation="always_locked")

        assert len(attempts) == 2
        assert exc_info.value.details["attempts"] == 2

    async def test_domain_errors_not_retried(self, initialized_db, runner):
        attempts = []

        async def work(tx):
            attempts.append(1)
            raise PartNotFoundError("ghost")

        with pytest.raises(PartNotFoundError):
            await runner.run(work)

        assert len(attempts) == 1

    async def test_other_sqlite_errors_wrapped(self, initialized_db, runner):
        async def work(tx):
            raise aiosqlite.OperationalError("no such table: widgets")

        with pytest.raises(DatabaseError):
            await runner.run(work, operation="broken")

    def test_defaults_from_settings(self, mock_settings):
        mock_settings.storage.transaction_max_attempts = 7
        mock_settings.storage.transaction_retry_delay = 0.2
        mock_settings.storage.transaction_retry_max_delay = 2.0
        mock_settings.pos.default_tax_rate = 0.1

        with patch("src.infrastructure.storage.sqlite.transaction.get_settings", return_value=mock_settings):
            runner = SQLiteTransactionRunner()

        assert runner.max_attempts == 7
        assert runner.retry_delay == 0.2
        assert runner.default_tax_rate == 0.1
