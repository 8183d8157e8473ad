"""SQLite implementation of invoice queries."""

from src.core.entities.invoice import Invoice, InvoiceStatus
from src.core.interfaces.storage import IInvoiceStore
from src.infrastructure.storage.sqlite.connection import get_connection
from src.infrastructure.storage.sqlite.mappers import INVOICE_COLUMNS, row_to_invoice

class SQLiteInvoiceStore(IInvoiceStore):
    """SQLite implementation of invoice lookups and listings."""

    async def get_invoice(self, invoice_number: str) -> Invoice | None:
        """Get invoice by number."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT {INVOICE_COLUMNS} FROM invoices WHERE invoice_number = ?",
                (invoice_number,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return row_to_invoice(row)

    async def list_invoices(
        self,
        customer_id: str | None = None,
        status: InvoiceStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Invoice]:
        """List invoices, newest first."""
        clauses = []
        params: list = []
        if customer_id:
            clauses.append("customer_id = ?")
            params.append(customer_id)
        if status:
            clauses.append("status = ?")
            params.append(status.value)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT {INVOICE_COLUMNS} FROM invoices
                {where}
                ORDER BY invoice_date DESC, invoice_number DESC
                LIMIT ? OFFSET ?
                """,
                (*params, limit, offset),
            )
            rows = await cursor.fetchall()
            return [row_to_invoice(row) for row in rows]
