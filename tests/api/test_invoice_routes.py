"""API tests for invoice and payment endpoints."""

from datetime import date
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from src.api.dependencies import (
    get_create_invoice_use_case,
    get_edit_invoice_use_case,
    get_invoices,
    get_record_payment_use_case,
)
from src.application.use_cases import (
    CreateInvoiceUseCase,
    EditInvoiceUseCase,
    RecordPaymentUseCase,
)
from src.application.use_cases.create_invoice import CreateInvoiceResult
from src.application.use_cases.edit_invoice import EditInvoiceResult
from src.application.use_cases.record_payment import RecordPaymentResult
from src.core.entities import InvoiceStatus
from src.core.services.payment_allocator import Allocation, AllocationPlan, RecordedPayment


@pytest.fixture
def sold_invoice(invoice_factory):
    return invoice_factory("INV-1700000000000001", 243.8, date(2024, 3, 1), quantity=2)


@pytest.fixture
def invoice_store(sold_invoice):
    store = AsyncMock()
    store.list_invoices.return_value = [sold_invoice]
    store.get_invoice.return_value = sold_invoice
    return store


@pytest.fixture
def create_use_case(sold_invoice):
    uc = AsyncMock(spec=CreateInvoiceUseCase)
    result = CreateInvoiceResult(invoice=sold_invoice, stock_deltas={"part-alt": -2})
    uc.execute.return_value = result
    uc.to_response.return_value = CreateInvoiceUseCase().to_response(result)
    return uc


@pytest.fixture
def edit_use_case(sold_invoice):
    uc = AsyncMock(spec=EditInvoiceUseCase)
    result = EditInvoiceResult(invoice=sold_invoice, stock_deltas={"part-alt": 1})
    uc.execute.return_value = result
    uc.to_response.return_value = EditInvoiceUseCase().to_response(result)
    return uc


@pytest.fixture
def payment_use_case():
    uc = AsyncMock(spec=RecordPaymentUseCase)
    plan = AllocationPlan(
        amount=150.0,
        allocations=[
            Allocation(
                invoice_number="INV-1700000000000001",
                applied=121.9,
                balance_due=0.0,
                status=InvoiceStatus.PAID,
            )
        ],
        overpayment=28.1,
    )
    payment = RecordedPayment(
        customer_id="cust-1",
        customer_name="Kwame Mensah",
        payment_date=date(2024, 4, 1),
        plan=plan,
    )
    result = RecordPaymentResult(payment=payment, currency="GHS")
    uc.execute.return_value = result
    uc.to_response.return_value = RecordPaymentUseCase(currency="GHS").to_response(result)
    return uc


@pytest.fixture
def wired(overrides, invoice_store, create_use_case, edit_use_case, payment_use_case):
    overrides[get_invoices] = lambda: invoice_store
    overrides[get_create_invoice_use_case] = lambda: create_use_case
    overrides[get_edit_invoice_use_case] = lambda: edit_use_case
    overrides[get_record_payment_use_case] = lambda: payment_use_case
    return overrides


class TestInvoiceRoutes:
    async def test_create_returns_201(self, client: AsyncClient, wired, create_use_case):
        response = await client.post(
            "/api/invoices",
            json={"customer_id": "cust-1", "items": [{"part_id": "part-alt", "quantity": 2}]},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["invoice_number"] == "INV-1700000000000001"
        assert data["total"] == 243.8
        assert data["status"] == "Unpaid"

        request = create_use_case.execute.call_args.args[0]
        assert request.items[0].quantity == 2
        assert request.items[0].unit_price is None

    async def test_create_rejects_malformed_body(self, client: AsyncClient, wired):
        response = await client.post("/api/invoices", json={"customer_id": "cust-1"})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_list_filters_by_status(self, client: AsyncClient, wired, invoice_store):
        response = await client.get("/api/invoices", params={"customer_id": "cust-1", "status": "Unpaid"})

        assert response.status_code == 200
        assert response.json()["total"] == 1
        invoice_store.list_invoices.assert_awaited_once_with(
            customer_id="cust-1",
            status=InvoiceStatus.UNPAID,
            limit=100,
            offset=0,
        )

    async def test_get_missing_invoice(self, client: AsyncClient, wired, invoice_store):
        invoice_store.get_invoice.return_value = None

        response = await client.get("/api/invoices/INV-404")

        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "INVOICE_NOT_FOUND"
        assert data["path"] == "/api/invoices/INV-404"

    async def test_edit_returns_stock_deltas(self, client: AsyncClient, wired, edit_use_case):
        response = await client.put(
            "/api/invoices/INV-1700000000000001",
            json={"items": [{"part_id": "part-alt", "quantity": 1}], "paid_amount": 50},
        )

        assert response.status_code == 200
        assert response.json()["stock_deltas"] == {"part-alt": 1}
        number, request = edit_use_case.execute.call_args.args
        assert number == "INV-1700000000000001"
        assert request.paid_amount == 50
        assert request.customer_id is None


class TestPaymentRoutes:
    async def test_record_payment(self, client: AsyncClient, wired):
        response = await client.post("/api/payments", json={"customer_id": "cust-1", "amount": 150})

        assert response.status_code == 201
        data = response.json()
        assert data["applied_total"] == 121.9
        assert data["overpayment"] == 28.1
        assert data["currency"] == "GHS"
        assert data["allocations"][0]["status"] == "Paid"

    async def test_customer_scoped_payment(self, client: AsyncClient, wired, payment_use_case):
        response = await client.post(
            "/api/customers/cust-1/payments",
            json={"amount": 150, "payment_date": "2024-04-01"},
        )

        assert response.status_code == 201
        request = payment_use_case.execute.call_args.args[0]
        assert request.customer_id == "cust-1"
        assert request.payment_date == date(2024, 4, 1)
