"""Customer Statement Use Case: invoices and balance for one customer."""

from dataclasses import dataclass, field
from datetime import date, datetime

from src.application.dto.converters import customer_to_response
from src.application.dto.responses import StatementLineResponse, StatementResponse
from src.config import get_logger, get_settings
from src.core.entities.customer import Customer
from src.core.entities.invoice import Invoice, InvoiceStatus
from src.core.entities.pricing import round_money
from src.core.exceptions import CustomerNotFoundError
from src.core.interfaces.storage import ICustomerStore, IInvoiceStore

logger = get_logger(__name__)

STATEMENT_INVOICE_LIMIT = 1000


@dataclass
class StatementLine:
    """An invoice with the status shown on the statement."""

    invoice: Invoice
    display_status: InvoiceStatus


@dataclass
class CustomerStatementResult:
    """Result of building a statement."""

    customer: Customer
    lines: list[StatementLine] = field(default_factory=list)
    total_balance_due: float = 0.0
    generated_at: datetime = field(default_factory=datetime.now)


class GetCustomerStatementUseCase:
    """
    Build a customer's statement, newest invoice first.

    Open invoices past their due date are shown as Overdue. The stored
    status is not changed.
    """

    def __init__(
        self,
        customer_store: ICustomerStore | None = None,
        invoice_store: IInvoiceStore | None = None,
        currency: str | None = None,
    ):
        self._customer_store = customer_store
        self._invoice_store = invoice_store
        self._currency = currency

    async def _get_customer_store(self) -> ICustomerStore:
        if self._customer_store is None:
            from src.infrastructure.storage.sqlite import get_customer_store

            self._customer_store = await get_customer_store()
        return self._customer_store

    async def _get_invoice_store(self) -> IInvoiceStore:
        if self._invoice_store is None:
            from src.infrastructure.storage.sqlite import get_invoice_store

            self._invoice_store = await get_invoice_store()
        return self._invoice_store

    async def execute(self, customer_id: str, today: date | None = None) -> CustomerStatementResult:
        """Execute customer statement use case."""
        customer_store = await self._get_customer_store()
        invoice_store = await self._get_invoice_store()

        customer = await customer_store.get_customer(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)

        invoices = await invoice_store.list_invoices(
            customer_id=customer_id, limit=STATEMENT_INVOICE_LIMIT
        )
        today = today or date.today()
        lines = [StatementLine(invoice=inv, display_status=inv.display_status(today)) for inv in invoices]
        total = round_money(sum(inv.balance_due for inv in invoices))

        logger.info(
            "statement_generated",
            customer_id=customer_id,
            invoices=len(lines),
            total_balance_due=total,
        )
        return CustomerStatementResult(customer=customer, lines=lines, total_balance_due=total)

    def to_response(self, result: CustomerStatementResult) -> StatementResponse:
        """Convert result to API response."""
        if self._currency is None:
            self._currency = get_settings().pos.currency
        return StatementResponse(
            customer=customer_to_response(result.customer),
            invoices=[
                StatementLineResponse(
                    invoice_number=line.invoice.invoice_number,
                    invoice_date=line.invoice.invoice_date,
                    due_date=line.invoice.due_date,
                    total=line.invoice.total,
                    paid_amount=line.invoice.paid_amount,
                    balance_due=line.invoice.balance_due,
                    status=line.display_status.value,
                )
                for line in result.lines
            ],
            total_balance_due=result.total_balance_due,
            currency=self._currency,
            generated_at=result.generated_at,
        )
