"""Edit Invoice Use Case: reconciles stock with changed line items."""

from dataclasses import dataclass, field

from src.application.dto.converters import invoice_to_response
from src.application.dto.requests import EditInvoiceRequest
from src.application.dto.responses import EditInvoiceResponse
from src.config import get_logger
from src.core.entities.invoice import Invoice
from src.core.interfaces.transaction import ITransactionRunner
from src.core.services.invoice_lifecycle import InvoiceLine
from src.core.services.invoice_reconciliation import (
    InvoiceReconciliationService,
    InvoiceRevision,
    validate_revision,
)

logger = get_logger(__name__)


@dataclass
class EditInvoiceResult:
    """Result of editing an invoice."""

    invoice: Invoice
    stock_deltas: dict[str, int] = field(default_factory=dict)


class EditInvoiceUseCase:
    """Replace an invoice's items and move stock by the net difference."""

    def __init__(
        self,
        runner: ITransactionRunner | None = None,
        reconciliation_service: InvoiceReconciliationService | None = None,
    ):
        self._runner = runner
        self._service = reconciliation_service

    async def _get_runner(self) -> ITransactionRunner:
        if self._runner is None:
            from src.infrastructure.storage.sqlite import get_transaction_runner

            self._runner = await get_transaction_runner()
        return self._runner

    def _get_service(self) -> InvoiceReconciliationService:
        if self._service is None:
            from src.application.services import get_reconciliation_service

            self._service = get_reconciliation_service()
        return self._service

    async def execute(self, invoice_number: str, request: EditInvoiceRequest) -> EditInvoiceResult:
        """Execute edit invoice use case."""
        logger.info(
            "edit_invoice_started",
            invoice_number=invoice_number,
            items=len(request.items),
        )

        revision = InvoiceRevision(
            lines=[
                InvoiceLine(
                    part_id=line.part_id,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    tax=line.tax,
                )
                for line in request.items
            ],
            paid_amount=request.paid_amount,
            customer_id=request.customer_id,
            invoice_date=request.invoice_date,
            due_date=request.due_date,
        )
        validate_revision(revision)

        runner = await self._get_runner()
        service = self._get_service()
        reconciled = await runner.run(
            lambda tx: service.edit(tx, invoice_number, revision),
            operation="edit_invoice",
        )

        logger.info(
            "edit_invoice_complete",
            invoice_number=invoice_number,
            stock_deltas=reconciled.stock_deltas,
            balance_due=reconciled.invoice.balance_due,
        )
        return EditInvoiceResult(invoice=reconciled.invoice, stock_deltas=reconciled.stock_deltas)

    def to_response(self, result: EditInvoiceResult) -> EditInvoiceResponse:
        """Convert result to API response."""
        return EditInvoiceResponse(
            invoice=invoice_to_response(result.invoice),
            stock_deltas=result.stock_deltas,
        )
