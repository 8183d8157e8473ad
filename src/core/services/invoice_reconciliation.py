"""
Invoice editor reconciliation.

Editing an invoice's items moves stock by the difference between the old
and new quantities of each part. All touched parts are read in one batch
and the net delta map is validated as a whole before anything is written,
so a concurrent sale can never slip in between a return and a re-consume.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime

from src.config import get_logger
from src.core.entities.invoice import Invoice, InvoiceItem
from src.core.exceptions import CustomerNotFoundError, InvoiceNotFoundError, ValidationError
from src.core.interfaces.transaction import ITransaction
from src.core.services.invoice_lifecycle import (
    InvoiceLine,
    build_items,
    customer_snapshot,
    line_quantities,
    validate_lines,
    validate_paid_amount,
)
from src.core.services.pricing import PricingCalculator
from src.core.services.stock_ledger import StockLedger

logger = get_logger(__name__)


@dataclass
class InvoiceRevision:
    """New state requested for an existing invoice. None keeps the current value."""

    lines: list[InvoiceLine]
    paid_amount: float | None = None
    customer_id: str | None = None
    invoice_date: date | None = None
    due_date: date | None = None


@dataclass
class ReconciledInvoice:
    """Outcome of a successful edit."""

    invoice: Invoice
    stock_deltas: dict[str, int] = field(default_factory=dict)


def compute_stock_deltas(
    original_items: Iterable[InvoiceItem],
    new_quantities: Mapping[str, int],
) -> dict[str, int]:
    """
    Net stock delta per part: original quantity minus new quantity.

    Positive returns stock, negative consumes more. Parts only in the
    original set return everything, parts only in the new set consume
    everything. Parts whose quantity is unchanged are omitted.
    """
    original: dict[str, int] = {}
    for item in original_items:
        original[item.part_id] = original.get(item.part_id, 0) + item.quantity

    deltas: dict[str, int] = {}
    for part_id in dict.fromkeys([*original, *new_quantities]):
        delta = original.get(part_id, 0) - new_quantities.get(part_id, 0)
        if delta:
            deltas[part_id] = delta
    return deltas


def validate_revision(revision: InvoiceRevision) -> None:
    """Validate a revision before any transaction starts."""
    validate_lines(revision.lines)
    if revision.paid_amount is not None:
        validate_paid_amount(revision.paid_amount)
    if revision.customer_id is not None and not revision.customer_id:
        raise ValidationError("customer_id", "Customer is required")


class InvoiceReconciliationService:
    """Edits an invoice and moves stock by the net change in quantities."""

    def __init__(self, ledger: StockLedger | None = None) -> None:
        self._ledger = ledger or StockLedger()

    async def edit(
        self,
        tx: ITransaction,
        invoice_number: str,
        revision: InvoiceRevision,
    ) -> ReconciledInvoice:
        """
        Apply ``revision`` to an invoice inside ``tx``.

        Raises:
            InvoiceNotFoundError: If the invoice does not exist
            CustomerNotFoundError: If a new customer id is unknown
            PartNotFoundError: If an old or new line names an unknown part
            InsufficientStockError: If the net consumption exceeds stock
        """
        invoice = await tx.get_invoice(invoice_number)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_number)

        snapshot: dict[str, str] = {}
        if revision.customer_id and revision.customer_id != invoice.customer_id:
            customer = await tx.get_customer(revision.customer_id)
            if customer is None:
                raise CustomerNotFoundError(revision.customer_id)
            snapshot = customer_snapshot(customer)

        new_quantities = line_quantities(revision.lines)
        deltas = compute_stock_deltas(invoice.items, new_quantities)
        touched = [*invoice.quantities_by_part(), *new_quantities]
        parts = await self._ledger.read_parts(tx, touched)
        config = await tx.get_pricing_config()

        self._ledger.validate(parts, deltas)

        existing = {}
        for item in invoice.items:
            existing.setdefault(item.part_id, item)
        items = build_items(revision.lines, parts, PricingCalculator(config), existing)

        data = invoice.model_dump()
        data.update(snapshot)
        data["items"] = items
        data["updated_at"] = datetime.now()
        if revision.paid_amount is not None:
            data["paid_amount"] = revision.paid_amount
        if revision.invoice_date is not None:
            data["invoice_date"] = revision.invoice_date
        if revision.due_date is not None:
            data["due_date"] = revision.due_date
        updated = Invoice(**data)

        await self._ledger.apply(tx, deltas)
        await tx.update_invoice(updated)
        await tx.log_activity(
            f"Updated details for invoice {updated.invoice_number} for {updated.customer_name}."
        )

        logger.info(
            "invoice_edited",
            invoice_number=updated.invoice_number,
            stock_deltas=deltas,
            total=updated.total,
            balance_due=updated.balance_due,
            status=updated.status.value,
        )
        return ReconciledInvoice(invoice=updated, stock_deltas=deltas)
