"""Tests for catalog and customer use cases."""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from src.application.dto.requests import (
    CreateCustomerRequest,
    CreatePartRequest,
    ImportPartsRequest,
    PriceChangeRequest,
    UpdatePricesRequest,
    UpdateTaxRateRequest,
)
from src.application.use_cases import (
    AddPartUseCase,
    CreateCustomerUseCase,
    GetCustomerStatementUseCase,
    ImportPartsUseCase,
    SeedCatalogUseCase,
    UpdatePricesUseCase,
    UpdateTaxRateUseCase,
)
from src.core.entities.invoice import InvoiceStatus
from src.core.entities.part import Part
from src.core.entities.pricing import PricingConfig, PricingType
from src.core.exceptions import CustomerNotFoundError, PartNotFoundError, ValidationError


class TestCreateCustomerUseCase:
    async def test_creates_and_logs(self, inline_runner, mock_tx):
        use_case = CreateCustomerUseCase(runner=inline_runner)

        result = await use_case.execute(CreateCustomerRequest(name="  Yaw Boateng ", phone="0200"))

        assert result.customer.name == "Yaw Boateng"
        assert result.customer.address == ""
        mock_tx.insert_customer.assert_awaited_once_with(result.customer)
        mock_tx.log_activity.assert_awaited_once_with("Created new customer: Yaw Boateng")

    @pytest.mark.parametrize("name", ["", " ", "A", " B "])
    async def test_short_name_rejected(self, inline_runner, name):
        with pytest.raises(ValidationError):
            await CreateCustomerUseCase(runner=inline_runner).execute(CreateCustomerRequest(name=name))
        assert inline_runner.operations == []


class TestAddPartUseCase:
    async def test_inclusive_price_split(self, inline_runner, mock_tx):
        request = CreatePartRequest(
            name="Hydraulic Pump",
            part_number="HYD-PMP-003",
            part_code="P003",
            price=121.9,
            pricing_type=PricingType.INCLUSIVE,
            stock=4,
        )

        result = await AddPartUseCase(runner=inline_runner).execute(request)

        assert result.part.price == 100.0
        assert result.part.tax == 21.9
        assert result.part.ex_fact_price == 121.9
        assert result.part.stock == 4
        mock_tx.insert_part.assert_awaited_once_with(result.part)

    async def test_missing_code_rejected(self, inline_runner):
        request = CreatePartRequest(name="Pump", part_number="P-1", part_code="", price=10.0)

        with pytest.raises(ValidationError):
            await AddPartUseCase(runner=inline_runner).execute(request)


class TestImportPartsUseCase:
    async def test_imports_and_skips(self, inline_runner, mock_tx):
        request = ImportPartsRequest(
            rows=[
                {"Part Number": "A-1", "Description": "Gasket", "Quantity": "5", "Price": "10"},
                {"Description": "No number"},
                {"Part Number": "B-2", "Name": "Seal", "Price": "2.5"},
            ]
        )

        result = await ImportPartsUseCase(runner=inline_runner).execute(request)

        assert len(result.parts) == 2
        assert result.skipped == 1
        assert mock_tx.insert_part.await_count == 2
        mock_tx.log_activity.assert_awaited_once_with("Imported 2 parts.")

    async def test_nothing_imported_not_logged(self, inline_runner, mock_tx):
        result = await ImportPartsUseCase(runner=inline_runner).execute(
            ImportPartsRequest(rows=[{"Description": "No number"}])
        )

        assert result.parts == []
        mock_tx.log_activity.assert_not_awaited()

    async def test_empty_rows(self, inline_runner):
        with pytest.raises(ValidationError):
            await ImportPartsUseCase(runner=inline_runner).execute(ImportPartsRequest(rows=[]))


class TestUpdatePricesUseCase:
    async def test_changed_price_logged(self, inline_runner, mock_tx, sample_part):
        mock_tx.get_parts.return_value = {sample_part.id: sample_part}
        use_case = UpdatePricesUseCase(runner=inline_runner, currency="GHS")

        result = await use_case.execute(
            UpdatePricesRequest(changes=[PriceChangeRequest(part_id=sample_part.id, new_price=120.0)])
        )

        updated = result.updated[0]
        assert updated.previous_price == 100.0
        assert updated.tax == 26.28
        mock_tx.update_part.assert_awaited_once_with(updated)
        mock_tx.log_activity.assert_awaited_once_with(
            "Updated price for Heavy-Duty Alternator from GHS 100.00 to GHS 120.00."
        )
        assert use_case.to_response(result).updated[0].ex_fact_price == 146.28

    async def test_same_price_unchanged(self, inline_runner, mock_tx, sample_part):
        mock_tx.get_parts.return_value = {sample_part.id: sample_part}

        result = await UpdatePricesUseCase(runner=inline_runner, currency="GHS").execute(
            UpdatePricesRequest(changes=[PriceChangeRequest(part_id=sample_part.id, new_price=100.0)])
        )

        assert result.updated == []
        assert result.unchanged == 1
        mock_tx.update_part.assert_not_awaited()

    async def test_unknown_part(self, inline_runner, mock_tx):
        with pytest.raises(PartNotFoundError):
            await UpdatePricesUseCase(runner=inline_runner, currency="GHS").execute(
                UpdatePricesRequest(changes=[PriceChangeRequest(part_id="ghost", new_price=1.0)])
            )
        mock_tx.update_part.assert_not_awaited()


class TestUpdateTaxRateUseCase:
    async def test_reprices_changed_parts(self, inline_runner, mock_tx, sample_part):
        untaxed = Part(name="Turbo", part_number="T", part_code="P5", price=1250.0, taxable=False)
        mock_tx.list_parts.return_value = [sample_part, untaxed]
        use_case = UpdateTaxRateUseCase(runner=inline_runner, currency="GHS")

        result = await use_case.execute(UpdateTaxRateRequest(tax_rate=0.15))

        assert result.previous_rate == 0.219
        assert result.parts_repriced == 1
        saved = mock_tx.save_pricing_config.await_args.args[0]
        assert saved.tax_rate == 0.15
        repriced = mock_tx.update_part.await_args.args[0]
        assert repriced.tax == 15.0
        assert use_case.to_response(result).parts_repriced == 1

    async def test_same_rate_is_idempotent(self, inline_runner, mock_tx, sample_part):
        mock_tx.list_parts.return_value = [sample_part]

        result = await UpdateTaxRateUseCase(runner=inline_runner, currency="GHS").execute(
            UpdateTaxRateRequest(tax_rate=0.219)
        )

        assert result.parts_repriced == 0
        mock_tx.update_part.assert_not_awaited()

    @pytest.mark.parametrize("rate", [-0.1, 1.0, 2.5])
    async def test_rate_out_of_range(self, inline_runner, rate):
        with pytest.raises(ValidationError):
            await UpdateTaxRateUseCase(runner=inline_runner, currency="GHS").execute(
                UpdateTaxRateRequest(tax_rate=rate)
            )


class TestSeedCatalogUseCase:
    async def test_seeds_once(self, inline_runner, mock_tx):
        result = await SeedCatalogUseCase(runner=inline_runner).execute()

        assert result.seeded is True
        assert mock_tx.insert_part.await_count == 6
        assert mock_tx.save_pricing_config.await_args.args[0].seeded is True

    async def test_already_seeded(self, inline_runner, mock_tx):
        mock_tx.get_pricing_config.return_value = PricingConfig(seeded=True)

        result = await SeedCatalogUseCase(runner=inline_runner).execute()

        assert result.seeded is False
        mock_tx.insert_part.assert_not_awaited()


class TestCustomerStatementUseCase:
    async def test_statement_flags_overdue(self, sample_customer, invoice_factory):
        customer_store = AsyncMock()
        customer_store.get_customer.return_value = sample_customer
        invoice_store = AsyncMock()
        invoice_store.list_invoices.return_value = [
            invoice_factory("INV-2", 50.0, date(2024, 6, 1)),
            invoice_factory("INV-1", 30.0, date(2024, 1, 1), paid_amount=10.0),
            invoice_factory("INV-0", 20.0, date(2023, 1, 1), paid_amount=20.0),
        ]
        use_case = GetCustomerStatementUseCase(customer_store, invoice_store, currency="GHS")

        result = await use_case.execute("cust-1", today=date(2024, 6, 15))

        assert [line.display_status for line in result.lines] == [
            InvoiceStatus.UNPAID,
            InvoiceStatus.OVERDUE,
            InvoiceStatus.PAID,
        ]
        assert result.total_balance_due == 70.0
        response = use_case.to_response(result)
        assert response.currency == "GHS"
        assert response.invoices[1].status == "Overdue"

    async def test_unknown_customer(self):
        customer_store = AsyncMock()
        customer_store.get_customer.return_value = None

        with pytest.raises(CustomerNotFoundError):
            await GetCustomerStatementUseCase(customer_store, AsyncMock(), currency="GHS").execute("nobody")
