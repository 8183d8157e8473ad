"""SQLite implementation of customer queries."""

from src.core.entities.customer import Customer
from src.core.interfaces.storage import ICustomerStore
from src.infrastructure.storage.sqlite.connection import get_connection
from src.infrastructure.storage.sqlite.mappers import row_to_customer

# Balance is the sum of balance_due over the customer's invoices
CUSTOMER_WITH_BALANCE = """
    SELECT c.id, c.name, c.phone, c.address, c.created_at,
           COALESCE(SUM(i.balance_due), 0) AS balance
    FROM customers c
    LEFT JOIN invoices i ON i.customer_id = c.id
"""


class SQLiteCustomerStore(ICustomerStore):
    """SQLite implementation of customer lookups with derived balances."""

    async def get_customer(self, customer_id: str) -> Customer | None:
        """Get customer by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"{CUSTOMER_WITH_BALANCE} WHERE c.id = ? GROUP BY c.id",
                (customer_id,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return row_to_customer(row)

    async def list_customers(self, limit: int = 100, offset: int = 0) -> list[Customer]:
        """List customers ordered by name."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                {CUSTOMER_WITH_BALANCE}
                GROUP BY c.id
                ORDER BY c.name, c.id
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [row_to_customer(row) for row in rows]
