"""Pytest configuration and shared fixtures."""

from datetime import date, timedelta
from unittest.mock import AsyncMock

import pytest

from src.core.entities import Customer, Invoice, InvoiceItem, Part, PricingConfig


@pytest.fixture
def pricing_config() -> PricingConfig:
    """Default pricing configuration."""
    return PricingConfig(tax_rate=0.219)


@pytest.fixture
def sample_part() -> Part:
    """A taxable part with stock on hand."""
    return Part(
        id="part-alt",
        name="Heavy-Duty Alternator",
        part_number="HD-ALT-001",
        part_code="P001",
        price=100.0,
        tax=21.9,
        stock=10,
        category="Electrical",
    )


@pytest.fixture
def second_part() -> Part:
    """A second part with little stock."""
    return Part(
        id="part-filter",
        name="Engine Air Filter",
        part_number="EAF-002",
        part_code="P002",
        price=40.0,
        tax=8.76,
        stock=3,
        category="Filters",
    )


@pytest.fixture
def sample_customer() -> Customer:
    """A customer with contact details."""
    return Customer(
        id="cust-1",
        name="Kwame Mensah",
        phone="0244000000",
        address="12 Ring Road, Accra",
    )


def make_invoice(
    number: str,
    total_price: float,
    invoice_date: date,
    paid_amount: float = 0.0,
    customer_id: str = "cust-1",
    part_id: str = "part-alt",
    quantity: int = 1,
) -> Invoice:
    """Invoice with one untaxed line whose total is ``total_price``."""
    return Invoice(
        invoice_number=number,
        customer_id=customer_id,
        customer_name="Kwame Mensah",
        invoice_date=invoice_date,
        due_date=invoice_date + timedelta(days=30),
        items=[
            InvoiceItem(
                part_id=part_id,
                part_name="Heavy-Duty Alternator",
                quantity=quantity,
                unit_price=total_price / quantity,
                tax=0.0,
            )
        ],
        paid_amount=paid_amount,
    )


@pytest.fixture
def invoice_factory():
    """Factory for simple invoices."""
    return make_invoice


@pytest.fixture
def mock_tx() -> AsyncMock:
    """Transaction double with empty defaults."""
    tx = AsyncMock()
    tx.get_pricing_config.return_value = PricingConfig(tax_rate=0.219)
    tx.get_parts.return_value = {}
    tx.list_open_invoices.return_value = []
    return tx


class InlineRunner:
    """Transaction runner double that runs work directly against one transaction."""

    def __init__(self, tx) -> None:
        self.tx = tx
        self.operations: list[str] = []

    async def run(self, work, operation: str = "transaction"):
        self.operations.append(operation)
        return await work(self.tx)


@pytest.fixture
def inline_runner(mock_tx) -> InlineRunner:
    """Runner that executes work against ``mock_tx``."""
    return InlineRunner(mock_tx)
