"""Tests for invoice creation."""

from datetime import date

import pytest

from src.core.entities.invoice import InvoiceStatus
from src.core.exceptions import (
    CustomerNotFoundError,
    InsufficientStockError,
    PartNotFoundError,
    ValidationError,
)
from src.core.services.invoice_lifecycle import (
    InvoiceDraft,
    InvoiceLifecycleService,
    InvoiceLine,
    InvoiceNumberGenerator,
    line_quantities,
    validate_draft,
)
from src.core.services.stock_ledger import StockLedger


def _draft(lines, paid_amount=0.0, customer_id="cust-1") -> InvoiceDraft:
    return InvoiceDraft(
        customer_id=customer_id,
        lines=lines,
        invoice_date=date(2024, 5, 1),
        due_date=date(2024, 5, 31),
        paid_amount=paid_amount,
    )


@pytest.fixture
def service() -> InvoiceLifecycleService:
    clock = iter(range(1_000_000_000, 10_000_000_000, 1_000))
    return InvoiceLifecycleService(number_generator=InvoiceNumberGenerator("INV-", clock=lambda: next(clock)))


@pytest.fixture
def stocked_tx(mock_tx, sample_customer, sample_part, second_part):
    mock_tx.get_customer.return_value = sample_customer
    mock_tx.get_parts.return_value = {sample_part.id: sample_part, second_part.id: second_part}
    return mock_tx


class TestInvoiceNumberGenerator:
    def test_prefix_and_microseconds(self):
        generator = InvoiceNumberGenerator("INV-", clock=lambda: 1_700_000_000_123_456_789)
        assert generator.next() == "INV-1700000000123456"

    def test_strictly_increasing_when_clock_stalls(self):
        generator = InvoiceNumberGenerator("INV-", clock=lambda: 5_000_000)
        numbers = [generator.next() for _ in range(3)]
        assert numbers == ["INV-5000", "INV-5001", "INV-5002"]


class TestValidateDraft:
    def test_empty_items(self):
        with pytest.raises(ValidationError):
            validate_draft(_draft([]))

    def test_zero_quantity(self):
        with pytest.raises(ValidationError):
            validate_draft(_draft([InvoiceLine("p", 0)]))

    def test_negative_paid(self):
        with pytest.raises(ValidationError):
            validate_draft(_draft([InvoiceLine("p", 1)], paid_amount=-1))

    def test_missing_customer(self):
        with pytest.raises(ValidationError):
            validate_draft(_draft([InvoiceLine("p", 1)], customer_id=""))

    def test_line_quantities_combine_duplicates(self):
        assert line_quantities([InvoiceLine("a", 2), InvoiceLine("a", 3), InvoiceLine("b", 1)]) == {"a": 5, "b": 1}


class TestCreate:
    async def test_creates_invoice_and_consumes_stock(self, service, stocked_tx, sample_part):
        created = await service.create(stocked_tx, _draft([InvoiceLine(sample_part.id, 3)]))

        invoice = created.invoice
        assert invoice.invoice_number.startswith("INV-")
        assert invoice.customer_name == "Kwame Mensah"
        assert invoice.customer_address == "12 Ring Road, Accra"
        assert invoice.items[0].unit_price == 100.0
        assert invoice.items[0].tax == 21.9
        assert invoice.total == 365.7
        assert invoice.status == InvoiceStatus.UNPAID
        assert created.stock_deltas == {sample_part.id: -3}
        stocked_tx.adjust_stock.assert_awaited_once_with(sample_part.id, -3)
        stocked_tx.insert_invoice.assert_awaited_once_with(invoice)
        stocked_tx.log_activity.assert_awaited_once_with(
            f"Created sales invoice {invoice.invoice_number} for Kwame Mensah."
        )

    async def test_paid_in_full_at_sale(self, service, stocked_tx, second_part):
        created = await service.create(
            stocked_tx, _draft([InvoiceLine(second_part.id, 1, unit_price=40.0, tax=0.0)], paid_amount=40.0)
        )
        assert created.invoice.status == InvoiceStatus.PAID
        assert created.invoice.balance_due == 0.0

    async def test_price_override_gets_tax_at_rate(self, service, stocked_tx, sample_part):
        created = await service.create(stocked_tx, _draft([InvoiceLine(sample_part.id, 1, unit_price=50.0)]))
        assert created.invoice.items[0].tax == 10.95

    async def test_duplicate_lines_checked_together(self, service, stocked_tx, second_part):
        lines = [InvoiceLine(second_part.id, 2), InvoiceLine(second_part.id, 2)]

        with pytest.raises(InsufficientStockError):
            await service.create(stocked_tx, _draft(lines))

        stocked_tx.adjust_stock.assert_not_awaited()
        stocked_tx.insert_invoice.assert_not_awaited()

    async def test_any_short_line_aborts_all(self, service, stocked_tx, sample_part, second_part):
        lines = [InvoiceLine(sample_part.id, 1), InvoiceLine(second_part.id, 4)]

        with pytest.raises(InsufficientStockError):
            await service.create(stocked_tx, _draft(lines))

        stocked_tx.adjust_stock.assert_not_awaited()
        stocked_tx.log_activity.assert_not_awaited()

    async def test_unknown_customer(self, service, mock_tx, sample_part):
        mock_tx.get_customer.return_value = None

        with pytest.raises(CustomerNotFoundError):
            await service.create(mock_tx, _draft([InvoiceLine(sample_part.id, 1)]))

        mock_tx.insert_invoice.assert_not_awaited()

    async def test_unknown_part(self, service, stocked_tx):
        with pytest.raises(PartNotFoundError):
            await service.create(stocked_tx, _draft([InvoiceLine("ghost", 1)]))

        stocked_tx.insert_invoice.assert_not_awaited()

    async def test_numbers_unique_across_creates(self, service, stocked_tx, sample_part):
        first = await service.create(stocked_tx, _draft([InvoiceLine(sample_part.id, 1)]))
        second = await service.create(stocked_tx, _draft([InvoiceLine(sample_part.id, 1)]))
        assert first.invoice.invoice_number != second.invoice.invoice_number

    async def test_stock_reserved_before_invoice_written(self, stocked_tx, sample_part):
        class RecordingLedger(StockLedger):
            def __init__(self):
                self.reserved = []

            async def reserve(self, tx, deltas):
                self.reserved.append(dict(deltas))
                return await super().reserve(tx, deltas)

        ledger = RecordingLedger()
        service = InvoiceLifecycleService(ledger=ledger)
        lines = [InvoiceLine(sample_part.id, 1), InvoiceLine(sample_part.id, 2)]

        await service.create(stocked_tx, _draft(lines))

        assert ledger.reserved == [{sample_part.id: -3}]
        calls = [name for name, _, _ in stocked_tx.mock_calls]
        assert calls.index("get_parts") < calls.index("adjust_stock") < calls.index("insert_invoice")
