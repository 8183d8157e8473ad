"""
Payment allocator.

Spreads a cash payment over a customer's open invoices, oldest first.
Ties on invoice date fall back to the invoice number, which is itself
time-ordered. Money left after every open invoice is settled is an
overpayment: it is recorded in the activity log only, as there is no
customer credit to hold it.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from src.config import get_logger
from src.core.entities.invoice import Invoice, InvoiceStatus
from src.core.entities.pricing import round_money
from src.core.exceptions import CustomerNotFoundError, ValidationError
from src.core.interfaces.transaction import ITransaction

logger = get_logger(__name__)


@dataclass
class Allocation:
    """Amount applied to one invoice and its state afterwards."""

    invoice_number: str
    applied: float
    balance_due: float
    status: InvoiceStatus


@dataclass
class AllocationPlan:
    """Result of spreading an amount over open invoices."""

    amount: float
    allocations: list[Allocation] = field(default_factory=list)
    updated_invoices: list[Invoice] = field(default_factory=list)
    overpayment: float = 0.0

    @property
    def applied_total(self) -> float:
        return round_money(sum(a.applied for a in self.allocations))


def validate_payment_amount(amount: float) -> None:
    """Reject amounts that are not positive once rounded to cents."""
    if amount is None or round_money(amount) <= 0:
        raise ValidationError("amount", "Payment amount must be greater than zero", amount)


def order_open_invoices(invoices: Iterable[Invoice]) -> list[Invoice]:
    """Open invoices, oldest invoice date first, then by invoice number."""
    open_invoices = [inv for inv in invoices if inv.is_open]
    return sorted(open_invoices, key=lambda inv: (inv.invoice_date, inv.invoice_number))


def allocate(invoices: Iterable[Invoice], amount: float) -> AllocationPlan:
    """
    Apply ``amount`` across ``invoices`` oldest first.

    The invoices are updated in place; those that received money are
    listed in ``updated_invoices``.
    """
    plan = AllocationPlan(amount=round_money(amount))
    remaining = plan.amount
    for invoice in order_open_invoices(invoices):
        if remaining <= 0:
            break
        applied = invoice.apply_payment(remaining)
        if applied <= 0:
            continue
        remaining = round_money(remaining - applied)
        plan.updated_invoices.append(invoice)
        plan.allocations.append(
            Allocation(
                invoice_number=invoice.invoice_number,
                applied=applied,
                balance_due=invoice.balance_due,
                status=invoice.status,
            )
        )
    plan.overpayment = max(remaining, 0.0)
    return plan


@dataclass
class RecordedPayment:
    """Outcome of a recorded payment."""

    customer_id: str
    customer_name: str
    payment_date: date
    plan: AllocationPlan


class PaymentAllocatorService:
    """Records a customer payment against open invoices in one transaction."""

    def __init__(self, currency: str = "GHS") -> None:
        self._currency = currency

    async def record_payment(
        self,
        tx: ITransaction,
        customer_id: str,
        amount: float,
        payment_date: date | None = None,
    ) -> RecordedPayment:
        """
        Allocate ``amount`` inside ``tx``.

        Raises:
            CustomerNotFoundError: If the customer does not exist
        """
        customer = await tx.get_customer(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)

        invoices = await tx.list_open_invoices(customer_id)
        plan = allocate(invoices, amount)

        for invoice in plan.updated_invoices:
            await tx.update_invoice(invoice)

        if plan.overpayment > 0:
            await tx.log_activity(
                f"Overpayment of {self._currency} {plan.overpayment:.2f} recorded for {customer.name}"
            )
            logger.warning(
                "overpayment_recorded",
                customer_id=customer_id,
                overpayment=plan.overpayment,
            )
        await tx.log_activity(
            f"Recorded payment of {self._currency} {plan.amount:.2f} for {customer.name}"
        )

        logger.info(
            "payment_allocated",
            customer_id=customer_id,
            amount=plan.amount,
            invoices=[a.invoice_number for a in plan.allocations],
            applied_total=plan.applied_total,
            overpayment=plan.overpayment,
        )
        return RecordedPayment(
            customer_id=customer.id,
            customer_name=customer.name,
            payment_date=payment_date or date.today(),
            plan=plan,
        )
