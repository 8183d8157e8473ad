"""Invoice domain entities."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from src.core.entities.pricing import round_money


class InvoiceStatus(str, Enum):
    """Payment status of an invoice."""

    UNPAID = "Unpaid"
    PAID = "Paid"
    OVERDUE = "Overdue"


def resolve_status(current: InvoiceStatus, balance_due: float) -> InvoiceStatus:
    """Status implied by a balance.

    A settled balance is always Paid. An outstanding balance reopens a Paid
    invoice as Unpaid and otherwise keeps the current status, so an
    Overdue flag set elsewhere is not lost.
    """
    if balance_due <= 0:
        return InvoiceStatus.PAID
    if current == InvoiceStatus.PAID:
        return InvoiceStatus.UNPAID
    return current


class InvoiceItem(BaseModel):
    """A line item embedded in an invoice."""

    part_id: str
    part_name: str
    part_number: str = ""
    quantity: int = Field(ge=1)
    unit_price: float = Field(ge=0)  # tax-exclusive
    tax: float = Field(default=0.0, ge=0)  # per unit
    ex_fact_price: float = 0.0  # unit_price + tax
    total: float = 0.0  # ex_fact_price * quantity

    @model_validator(mode="after")
    def compute_line(self) -> "InvoiceItem":
        """Compute ex_fact_price and line total."""
        self.ex_fact_price = round_money(self.unit_price + self.tax)
        self.total = round_money(self.ex_fact_price * self.quantity)
        return self


class Invoice(BaseModel):
    """A sales invoice with a snapshot of the customer at sale time."""

    invoice_number: str
    customer_id: str
    customer_name: str
    customer_address: str = ""
    customer_phone: str = ""
    invoice_date: date
    due_date: date
    items: list[InvoiceItem] = Field(default_factory=list)
    subtotal: float = 0.0
    tax_amount: float = 0.0
    total: float = 0.0
    paid_amount: float = Field(default=0.0, ge=0)
    balance_due: float = 0.0
    status: InvoiceStatus = InvoiceStatus.UNPAID
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def compute_totals(self) -> "Invoice":
        """Compute totals, balance and status from items and paid amount."""
        self.recalculate()
        return self

    def recalculate(self) -> None:
        """Re-derive every computed field. Call after mutating items or payments."""
        self.subtotal = round_money(sum(i.unit_price * i.quantity for i in self.items))
        self.tax_amount = round_money(sum(i.tax * i.quantity for i in self.items))
        self.total = round_money(self.subtotal + self.tax_amount)
        self.paid_amount = round_money(self.paid_amount)
        self.balance_due = round_money(self.total - self.paid_amount)
        self.status = resolve_status(self.status, self.balance_due)

    @property
    def is_open(self) -> bool:
        return self.balance_due > 0

    def apply_payment(self, amount: float) -> float:
        """Apply up to ``amount`` to the balance. Returns the amount applied."""
        applied = round_money(min(amount, max(self.balance_due, 0.0)))
        if applied <= 0:
            return 0.0
        self.paid_amount = round_money(self.paid_amount + applied)
        self.updated_at = datetime.now()
        self.recalculate()
        return applied

    def quantities_by_part(self) -> dict[str, int]:
        """Total quantity per part id across all lines."""
        quantities: dict[str, int] = {}
        for item in self.items:
            quantities[item.part_id] = quantities.get(item.part_id, 0) + item.quantity
        return quantities

    def display_status(self, today: date | None = None) -> InvoiceStatus:
        """Status for display, flagging past-due open invoices as Overdue.

        Never written back to storage.
        """
        today = today or date.today()
        if self.status != InvoiceStatus.PAID and self.due_date < today:
            return InvoiceStatus.OVERDUE
        return self.status
