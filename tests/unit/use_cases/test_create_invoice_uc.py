"""Tests for CreateInvoiceUseCase."""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from src.application.dto.requests import CreateInvoiceRequest, InvoiceLineRequest
from src.application.use_cases.create_invoice import CreateInvoiceUseCase
from src.core.exceptions import InsufficientStockError, ValidationError
from src.core.services.invoice_lifecycle import InvoiceLifecycleService, InvoiceNumberGenerator


@pytest.fixture
def lifecycle_service() -> InvoiceLifecycleService:
    return InvoiceLifecycleService(number_generator=InvoiceNumberGenerator("INV-"))


@pytest.fixture
def use_case(inline_runner, lifecycle_service):
    return CreateInvoiceUseCase(runner=inline_runner, lifecycle_service=lifecycle_service, due_days=30)


@pytest.fixture
def stocked(mock_tx, sample_customer, sample_part):
    mock_tx.get_customer.return_value = sample_customer
    mock_tx.get_parts.return_value = {sample_part.id: sample_part}
    return mock_tx


class TestCreateInvoiceUseCase:
    async def test_successful_create(self, use_case, stocked, inline_runner, sample_part):
        request = CreateInvoiceRequest(
            customer_id="cust-1",
            items=[InvoiceLineRequest(part_id=sample_part.id, quantity=2)],
            invoice_date=date(2024, 6, 1),
        )

        result = await use_case.execute(request)

        assert result.invoice.due_date == date(2024, 7, 1)
        assert result.stock_deltas == {sample_part.id: -2}
        assert inline_runner.operations == ["create_invoice"]
        response = use_case.to_response(result)
        assert response.invoice_number == result.invoice.invoice_number
        assert response.status == "Unpaid"
        assert response.items[0].ex_fact_price == 121.9

    async def test_explicit_due_date_kept(self, use_case):
        request = CreateInvoiceRequest(
            customer_id="cust-1",
            items=[InvoiceLineRequest(part_id="p", quantity=1)],
            invoice_date=date(2024, 6, 1),
            due_date=date(2024, 6, 15),
        )
        assert use_case.build_draft(request).due_date == date(2024, 6, 15)

    async def test_validation_before_transaction(self, use_case, inline_runner):
        request = CreateInvoiceRequest(customer_id="cust-1", items=[])

        with pytest.raises(ValidationError):
            await use_case.execute(request)

        assert inline_runner.operations == []

    async def test_zero_quantity_rejected(self, use_case, inline_runner):
        request = CreateInvoiceRequest(
            customer_id="cust-1",
            items=[InvoiceLineRequest(part_id="p", quantity=0)],
        )

        with pytest.raises(ValidationError):
            await use_case.execute(request)

        assert inline_runner.operations == []

    async def test_stock_error_propagates(self, use_case, stocked, sample_part):
        request = CreateInvoiceRequest(
            customer_id="cust-1",
            items=[InvoiceLineRequest(part_id=sample_part.id, quantity=50)],
        )

        with pytest.raises(InsufficientStockError):
            await use_case.execute(request)

        stocked.insert_invoice.assert_not_awaited()

    async def test_uses_injected_runner(self, lifecycle_service):
        runner = AsyncMock()
        runner.run.side_effect = InsufficientStockError("p", "Part", 0, 1)
        use_case = CreateInvoiceUseCase(runner=runner, lifecycle_service=lifecycle_service, due_days=7)

        with pytest.raises(InsufficientStockError):
            await use_case.execute(
                CreateInvoiceRequest(customer_id="c", items=[InvoiceLineRequest(part_id="p", quantity=1)])
            )

        assert runner.run.await_args.kwargs["operation"] == "create_invoice"
