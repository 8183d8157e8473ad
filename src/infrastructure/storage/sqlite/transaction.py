"""
SQLite transactions for business operations.

Each business operation runs as one ``BEGIN IMMEDIATE`` transaction on a
pooled connection. SQLite lets only one such transaction hold the write
lock, so concurrent operations serialize. A transaction that cannot get
the lock within the busy timeout is re-run from the start.
"""

from collections.abc import Awaitable, Callable, Iterable
from datetime import datetime
from typing import TypeVar

import aiosqlite
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.config import get_logger, get_settings
from src.core.entities.customer import Customer
from src.core.entities.invoice import Invoice
from src.core.entities.part import Part
from src.core.entities.pricing import DEFAULT_TAX_RATE, PricingConfig
from src.core.exceptions import (
    DatabaseError,
    InvoiceNotFoundError,
    PartNotFoundError,
    TransactionConflictError,
    TransactionOrderError,
)
from src.core.interfaces.transaction import ITransaction, ITransactionRunner
from src.infrastructure.storage.sqlite.connection import get_transaction
from src.infrastructure.storage.sqlite.mappers import (
    INVOICE_COLUMNS,
    PART_COLUMNS,
    invoice_params,
    part_params,
    row_to_customer,
    row_to_invoice,
    row_to_part,
    row_to_pricing_config,
)

logger = get_logger(__name__)

T = TypeVar("T")

LOCK_ERROR_MARKERS = ("database is locked", "database is busy", "database table is locked")


def is_lock_error(error: Exception) -> bool:
    """Whether an OperationalError means another writer holds the lock."""
    message = str(error).lower()
    return any(marker in message for marker in LOCK_ERROR_MARKERS)


class SQLiteTransaction(ITransaction):
    """
    ITransaction bound to a connection with an open transaction.

    Reads are refused once a write has been issued.
    """

    def __init__(
        self,
        conn: aiosqlite.Connection,
        default_tax_rate: float = DEFAULT_TAX_RATE,
    ) -> None:
        self._conn = conn
        self._default_tax_rate = default_tax_rate
        self._writes = 0

    def _ensure_read_phase(self, operation: str) -> None:
        if self._writes:
            raise TransactionOrderError(operation)

    async def _write(self, sql: str, params: tuple) -> aiosqlite.Cursor:
        self._writes += 1
        return await self._conn.execute(sql, params)

    # Read phase
    async def get_part(self, part_id: str) -> Part | None:
        self._ensure_read_phase("get_part")
        cursor = await self._conn.execute(
            f"SELECT {PART_COLUMNS} FROM parts WHERE id = ?", (part_id,)
        )
        row = await cursor.fetchone()
        return row_to_part(row) if row else None

    async def get_parts(self, part_ids: Iterable[str]) -> dict[str, Part]:
        self._ensure_read_phase("get_parts")
        ids = list(dict.fromkeys(part_ids))
        if not ids:
            return {}
        placeholders = ", ".join("?" for _ in ids)
        cursor = await self._conn.execute(
            f"SELECT {PART_COLUMNS} FROM parts WHERE id IN ({placeholders})", ids
        )
        rows = await cursor.fetchall()
        return {row["id"]: row_to_part(row) for row in rows}

    async def list_parts(self) -> list[Part]:
        self._ensure_read_phase("list_parts")
        cursor = await self._conn.execute(f"SELECT {PART_COLUMNS} FROM parts ORDER BY name")
        rows = await cursor.fetchall()
        return [row_to_part(row) for row in rows]

    async def get_customer(self, customer_id: str) -> Customer | None:
        self._ensure_read_phase("get_customer")
        cursor = await self._conn.execute(
            "SELECT id, name, phone, address, created_at FROM customers WHERE id = ?",
            (customer_id,),
        )
        row = await cursor.fetchone()
        return row_to_customer(row) if row else None

    async def get_invoice(self, invoice_number: str) -> Invoice | None:
        self._ensure_read_phase("get_invoice")
        cursor = await self._conn.execute(
            f"SELECT {INVOICE_COLUMNS} FROM invoices WHERE invoice_number = ?",
            (invoice_number,),
        )
        row = await cursor.fetchone()
        return row_to_invoice(row) if row else None

    async def list_open_invoices(self, customer_id: str) -> list[Invoice]:
        self._ensure_read_phase("list_open_invoices")
        cursor = await self._conn.execute(
            f"""
            SELECT {INVOICE_COLUMNS} FROM invoices
            WHERE customer_id = ? AND balance_due > 0
            ORDER BY invoice_date, invoice_number
            """,
            (customer_id,),
        )
        rows = await cursor.fetchall()
        return [row_to_invoice(row) for row in rows]

    async def get_pricing_config(self) -> PricingConfig:
        self._ensure_read_phase("get_pricing_config")
        cursor = await self._conn.execute(
            "SELECT tax_rate, seeded, updated_at FROM app_settings WHERE id = 1"
        )
        row = await cursor.fetchone()
        return row_to_pricing_config(row, self._default_tax_rate)

    # Write phase
    async def adjust_stock(self, part_id: str, delta: int) -> None:
        cursor = await self._write(
            "UPDATE parts SET stock = stock + ?, updated_at = ? WHERE id = ?",
            (delta, datetime.now().isoformat(), part_id),
        )
        if cursor.rowcount == 0:
            raise PartNotFoundError(part_id)

    async def insert_part(self, part: Part) -> None:
        placeholders = ", ".join("?" for _ in range(18))
        await self._write(
            f"INSERT INTO parts ({PART_COLUMNS}) VALUES ({placeholders})",
            part_params(part),
        )

    async def update_part(self, part: Part) -> None:
        # Stock is left alone here; it only moves through adjust_stock
        cursor = await self._write(
            """
            UPDATE parts SET
                name = ?, part_number = ?, part_code = ?, description = ?,
                brand = ?, category = ?, equipment_model = ?, image_url = ?,
                price = ?, previous_price = ?, taxable = ?, tax = ?,
                ex_fact_price = ?, pricing_type = ?, updated_at = ?
            WHERE id = ?
            """,
            (
                part.name,
                part.part_number,
                part.part_code,
                part.description,
                part.brand,
                part.category,
                part.equipment_model,
                part.image_url,
                part.price,
                part.previous_price,
                int(part.taxable),
                part.tax,
                part.ex_fact_price,
                part.pricing_type.value,
                part.updated_at.isoformat(),
                part.id,
            ),
        )
        if cursor.rowcount == 0:
            raise PartNotFoundError(part.id)

    async def insert_customer(self, customer: Customer) -> None:
        await self._write(
            "INSERT INTO customers (id, name, phone, address, created_at) VALUES (?, ?, ?, ?, ?)",
            (
                customer.id,
                customer.name,
                customer.phone,
                customer.address,
                customer.created_at.isoformat(),
            ),
        )

    async def insert_invoice(self, invoice: Invoice) -> None:
        placeholders = ", ".join("?" for _ in range(16))
        await self._write(
            f"INSERT INTO invoices ({INVOICE_COLUMNS}) VALUES ({placeholders})",
            invoice_params(invoice),
        )

    async def update_invoice(self, invoice: Invoice) -> None:
        params = invoice_params(invoice)
        cursor = await self._write(
            """
            UPDATE invoices SET
                customer_id = ?, customer_name = ?, customer_address = ?,
                customer_phone = ?, invoice_date = ?, due_date = ?, items_json = ?,
                subtotal = ?, tax_amount = ?, total = ?, paid_amount = ?,
                balance_due = ?, status = ?, updated_at = ?
            WHERE invoice_number = ?
            """,
            (*params[1:14], params[15], invoice.invoice_number),
        )
        if cursor.rowcount == 0:
            raise InvoiceNotFoundError(invoice.invoice_number)

    async def save_pricing_config(self, config: PricingConfig) -> None:
        updated_at = (config.updated_at or datetime.now()).isoformat()
        await self._write(
            """
            INSERT INTO app_settings (id, tax_rate, seeded, updated_at)
            VALUES (1, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                tax_rate = excluded.tax_rate,
                seeded = excluded.seeded,
                updated_at = excluded.updated_at
            """,
            (config.tax_rate, int(config.seeded), updated_at),
        )

    async def log_activity(self, description: str) -> None:
        await self._write(
            "INSERT INTO activity_logs (description) VALUES (?)",
            (description,),
        )


class SQLiteTransactionRunner(ITransactionRunner):
    """
    Runs work in a pooled SQLite transaction with conflict retries.

    Lock contention is retried with exponential backoff via tenacity.
    Domain errors raised by the work propagate unchanged and are never
    retried. Other SQLite errors surface as DatabaseError.
    """

    def __init__(
        self,
        max_attempts: int | None = None,
        retry_delay: float | None = None,
        max_delay: float | None = None,
        default_tax_rate: float | None = None,
    ) -> None:
        if None in (max_attempts, retry_delay, max_delay, default_tax_rate):
            settings = get_settings()
            max_attempts = max_attempts or settings.storage.transaction_max_attempts
            retry_delay = retry_delay if retry_delay is not None else settings.storage.transaction_retry_delay
            max_delay = max_delay if max_delay is not None else settings.storage.transaction_retry_max_delay
            if default_tax_rate is None:
                default_tax_rate = settings.pos.default_tax_rate
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self.max_delay = max_delay
        self.default_tax_rate = default_tax_rate

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        """Log retry attempts."""
        logger.warning(
            "transaction_retry",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def run(
        self,
        work: Callable[[ITransaction], Awaitable[T]],
        operation: str = "transaction",
    ) -> T:
        attempts = 0

        async def attempt() -> T:
            nonlocal attempts
            attempts += 1
            try:
                async with get_transaction() as conn:
                    tx = SQLiteTransaction(conn, default_tax_rate=self.default_tax_rate)
                    return await work(tx)
            except aiosqlite.OperationalError as e:
                if is_lock_error(e):
                    raise TransactionConflictError(operation, attempts, str(e)) from e
                logger.error("transaction_failed", operation=operation, error=str(e))
                raise DatabaseError(operation, str(e)) from e
            except aiosqlite.Error as e:
                logger.error("transaction_failed", operation=operation, error=str(e))
                raise DatabaseError(operation, str(e)) from e

        retrying = retry(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(
                multiplier=self.retry_delay,
                min=self.retry_delay,
                max=self.max_delay,
            ),
            retry=retry_if_exception_type(TransactionConflictError),
            before_sleep=self._log_retry,
            reraise=True,
        )
        try:
            return await retrying(attempt)()
        except TransactionConflictError:
            logger.error("transaction_conflict", operation=operation, attempts=attempts)
            raise
