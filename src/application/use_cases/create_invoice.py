"""Create Invoice Use Case: sells parts and decrements stock atomically."""

from dataclasses import dataclass, field
from datetime import date, timedelta

from src.application.dto.converters import invoice_to_response
from src.application.dto.requests import CreateInvoiceRequest
from src.application.dto.responses import InvoiceResponse
from src.config import get_logger, get_settings
from src.core.entities.invoice import Invoice
from src.core.interfaces.transaction import ITransactionRunner
from src.core.services.invoice_lifecycle import (
    InvoiceDraft,
    InvoiceLifecycleService,
    InvoiceLine,
    validate_draft,
)

logger = get_logger(__name__)


@dataclass
class CreateInvoiceResult:
    """Result of creating an invoice."""

    invoice: Invoice
    stock_deltas: dict[str, int] = field(default_factory=dict)


class CreateInvoiceUseCase:
    """Create an invoice, consuming stock for every line in one transaction."""

    def __init__(
        self,
        runner: ITransactionRunner | None = None,
        lifecycle_service: InvoiceLifecycleService | None = None,
        due_days: int | None = None,
    ):
        self._runner = runner
        self._service = lifecycle_service
        self._due_days = due_days

    async def _get_runner(self) -> ITransactionRunner:
        if self._runner is None:
            from src.infrastructure.storage.sqlite import get_transaction_runner

            self._runner = await get_transaction_runner()
        return self._runner

    def _get_service(self) -> InvoiceLifecycleService:
        if self._service is None:
            from src.application.services import get_invoice_lifecycle_service

            self._service = get_invoice_lifecycle_service()
        return self._service

    def _get_due_days(self) -> int:
        if self._due_days is None:
            self._due_days = get_settings().pos.default_due_days
        return self._due_days

    def build_draft(self, request: CreateInvoiceRequest) -> InvoiceDraft:
        """Fill in default dates and convert request lines."""
        invoice_date = request.invoice_date or date.today()
        due_date = request.due_date or invoice_date + timedelta(days=self._get_due_days())
        return InvoiceDraft(
            customer_id=request.customer_id,
            lines=[
                InvoiceLine(
                    part_id=line.part_id,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    tax=line.tax,
                )
                for line in request.items
            ],
            invoice_date=invoice_date,
            due_date=due_date,
            paid_amount=request.paid_amount,
        )

    async def execute(self, request: CreateInvoiceRequest) -> CreateInvoiceResult:
        """Execute create invoice use case."""
        logger.info(
            "create_invoice_started",
            customer_id=request.customer_id,
            items=len(request.items),
        )

        draft = self.build_draft(request)
        validate_draft(draft)

        runner = await self._get_runner()
        service = self._get_service()
        created = await runner.run(
            lambda tx: service.create(tx, draft),
            operation="create_invoice",
        )

        logger.info(
            "create_invoice_complete",
            invoice_number=created.invoice.invoice_number,
            total=created.invoice.total,
            status=created.invoice.status.value,
        )
        return CreateInvoiceResult(invoice=created.invoice, stock_deltas=created.stock_deltas)

    def to_response(self, result: CreateInvoiceResult) -> InvoiceResponse:
        """Convert result to API response."""
        return invoice_to_response(result.invoice)
