"""
Invoice lifecycle service.

Creates invoices atomically with the stock they consume. The customer is
copied into the invoice by value so the invoice keeps showing the details
as they were at sale time.
"""

import threading
import time
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime

from src.config import get_logger
from src.core.entities.customer import Customer
from src.core.entities.invoice import Invoice, InvoiceItem, InvoiceStatus
from src.core.entities.part import Part
from src.core.exceptions import CustomerNotFoundError, ValidationError
from src.core.interfaces.transaction import ITransaction
from src.core.services.pricing import PricingCalculator
from src.core.services.stock_ledger import StockLedger, consumption_deltas

logger = get_logger(__name__)


@dataclass
class InvoiceLine:
    """Requested line: a part and quantity, with optional price overrides."""

    part_id: str
    quantity: int
    unit_price: float | None = None
    tax: float | None = None


@dataclass
class InvoiceDraft:
    """Everything needed to create an invoice."""

    customer_id: str
    lines: list[InvoiceLine]
    invoice_date: date
    due_date: date
    paid_amount: float = 0.0


class InvoiceNumberGenerator:
    """
    Issues ``<prefix><microsecond timestamp>`` numbers.

    Numbers are strictly increasing within the process even when the
    clock stalls or steps backwards.
    """

    def __init__(
        self,
        prefix: str = "INV-",
        clock: Callable[[], int] = time.time_ns,
    ) -> None:
        self._prefix = prefix
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next(self) -> str:
        with self._lock:
            stamp = self._clock() // 1000
            if stamp <= self._last:
                stamp = self._last + 1
            self._last = stamp
        return f"{self._prefix}{stamp}"


def validate_lines(lines: Sequence[InvoiceLine]) -> None:
    """
    Reject malformed lines before any transaction starts.

    Raises:
        ValidationError: On an empty list, missing part, quantity below 1
            or a negative price override
    """
    if not lines:
        raise ValidationError("items", "At least one item is required")
    for index, line in enumerate(lines):
        if not line.part_id:
            raise ValidationError(f"items[{index}].part_id", "Part is required")
        if line.quantity < 1:
            raise ValidationError(
                f"items[{index}].quantity", "Quantity must be at least 1", line.quantity
            )
        if line.unit_price is not None and line.unit_price < 0:
            raise ValidationError(
                f"items[{index}].unit_price", "Unit price cannot be negative", line.unit_price
            )
        if line.tax is not None and line.tax < 0:
            raise ValidationError(f"items[{index}].tax", "Tax cannot be negative", line.tax)


def validate_paid_amount(paid_amount: float) -> None:
    if paid_amount < 0:
        raise ValidationError("paid_amount", "Paid amount cannot be negative", paid_amount)


def validate_draft(draft: InvoiceDraft) -> None:
    """Validate a draft. Raises ValidationError."""
    if not draft.customer_id:
        raise ValidationError("customer_id", "Customer is required")
    validate_lines(draft.lines)
    validate_paid_amount(draft.paid_amount)


def line_quantities(lines: Iterable[InvoiceLine]) -> dict[str, int]:
    """Total requested quantity per part id."""
    quantities: dict[str, int] = {}
    for line in lines:
        quantities[line.part_id] = quantities.get(line.part_id, 0) + line.quantity
    return quantities


def build_items(
    lines: Sequence[InvoiceLine],
    parts: Mapping[str, Part],
    calculator: PricingCalculator,
    existing: Mapping[str, InvoiceItem] | None = None,
) -> list[InvoiceItem]:
    """
    Turn requested lines into invoice items.

    Prices come from the line when given, otherwise from the matching
    ``existing`` item (the price already on the invoice), otherwise from
    the catalog. An overridden price without tax gets tax at the
    configured rate.
    """
    existing = existing or {}
    items = []
    for line in lines:
        part = parts[line.part_id]
        previous = existing.get(line.part_id)
        if line.unit_price is not None:
            unit_price = line.unit_price
            tax = line.tax if line.tax is not None else calculator.tax_for(unit_price, part.taxable)
        elif previous is not None:
            unit_price = previous.unit_price
            tax = line.tax if line.tax is not None else previous.tax
        else:
            unit_price = part.price
            tax = line.tax if line.tax is not None else part.tax
        items.append(
            InvoiceItem(
                part_id=part.id,
                part_name=previous.part_name if previous else part.name,
                part_number=previous.part_number if previous else part.part_number,
                quantity=line.quantity,
                unit_price=unit_price,
                tax=tax,
            )
        )
    return items


def customer_snapshot(customer: Customer) -> dict[str, str]:
    """Value copy of the customer fields embedded in an invoice."""
    return {
        "customer_id": customer.id,
        "customer_name": customer.name,
        "customer_address": customer.address,
        "customer_phone": customer.phone,
    }


@dataclass
class CreatedInvoice:
    """Outcome of a successful create."""

    invoice: Invoice
    stock_deltas: dict[str, int] = field(default_factory=dict)


class InvoiceLifecycleService:
    """
    Invoice creation.

    Reads the customer, every part and the pricing configuration, checks
    stock for the combined quantity of each part, then decrements stock,
    inserts the invoice and logs the activity. Any failure leaves the
    transaction without writes.
    """

    def __init__(
        self,
        ledger: StockLedger | None = None,
        number_generator: InvoiceNumberGenerator | None = None,
    ) -> None:
        self._ledger = ledger or StockLedger()
        self._numbers = number_generator or InvoiceNumberGenerator()

    async def create(self, tx: ITransaction, draft: InvoiceDraft) -> CreatedInvoice:
        """
        Create an invoice inside ``tx``.

        Raises:
            CustomerNotFoundError: If the customer does not exist
            PartNotFoundError: If any line names an unknown part
            InsufficientStockError: If stock cannot cover a part's total quantity
        """
        customer = await tx.get_customer(draft.customer_id)
        if customer is None:
            raise CustomerNotFoundError(draft.customer_id)

        config = await tx.get_pricing_config()
        deltas = consumption_deltas(line_quantities(draft.lines))
        parts = await self._ledger.reserve(tx, deltas)

        now = datetime.now()
        invoice = Invoice(
            invoice_number=self._numbers.next(),
            **customer_snapshot(customer),
            invoice_date=draft.invoice_date,
            due_date=draft.due_date,
            items=build_items(draft.lines, parts, PricingCalculator(config)),
            paid_amount=draft.paid_amount,
            status=InvoiceStatus.UNPAID,
            created_at=now,
            updated_at=now,
        )

        await tx.insert_invoice(invoice)
        await tx.log_activity(
            f"Created sales invoice {invoice.invoice_number} for {customer.name}."
        )

        logger.info(
            "invoice_created",
            invoice_number=invoice.invoice_number,
            customer_id=customer.id,
            total=invoice.total,
            balance_due=invoice.balance_due,
            status=invoice.status.value,
        )
        return CreatedInvoice(invoice=invoice, stock_deltas=deltas)
