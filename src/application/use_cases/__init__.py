"""Application use cases.

Each use case orchestrates one business operation: it validates the
request, runs the core services inside a transaction and converts the
result into a response DTO.
"""

from src.application.use_cases.add_part import AddPartResult, AddPartUseCase
from src.application.use_cases.create_customer import (
    CreateCustomerResult,
    CreateCustomerUseCase,
)
from src.application.use_cases.create_invoice import (
    CreateInvoiceResult,
    CreateInvoiceUseCase,
)
from src.application.use_cases.customer_statement import (
    CustomerStatementResult,
    GetCustomerStatementUseCase,
    StatementLine,
)
from src.application.use_cases.edit_invoice import EditInvoiceResult, EditInvoiceUseCase
from src.application.use_cases.import_parts import ImportPartsResult, ImportPartsUseCase
from src.application.use_cases.record_payment import (
    RecordPaymentResult,
    RecordPaymentUseCase,
)
from src.application.use_cases.seed_catalog import SeedCatalogResult, SeedCatalogUseCase
from src.application.use_cases.update_prices import UpdatePricesResult, UpdatePricesUseCase
from src.application.use_cases.update_tax_rate import (
    UpdateTaxRateResult,
    UpdateTaxRateUseCase,
)

__all__ = [
    # Invoices
    "CreateInvoiceUseCase",
    "CreateInvoiceResult",
    "EditInvoiceUseCase",
    "EditInvoiceResult",
    # Payments
    "RecordPaymentUseCase",
    "RecordPaymentResult",
    # Customers
    "CreateCustomerUseCase",
    "CreateCustomerResult",
    "GetCustomerStatementUseCase",
    "CustomerStatementResult",
    "StatementLine",
    # Catalog
    "AddPartUseCase",
    "AddPartResult",
    "ImportPartsUseCase",
    "ImportPartsResult",
    "UpdatePricesUseCase",
    "UpdatePricesResult",
    "UpdateTaxRateUseCase",
    "UpdateTaxRateResult",
    "SeedCatalogUseCase",
    "SeedCatalogResult",
]
