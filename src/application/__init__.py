"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection

Use cases are the only entry point for API handlers that mutate state.
"""

from src.application.services import (
    get_invoice_lifecycle_service,
    get_payment_allocator_service,
    get_reconciliation_service,
    get_stock_ledger,
    reset_services,
)
from src.application.use_cases import (
    AddPartUseCase,
    CreateCustomerUseCase,
    CreateInvoiceUseCase,
    EditInvoiceUseCase,
    GetCustomerStatementUseCase,
    ImportPartsUseCase,
    RecordPaymentUseCase,
    SeedCatalogUseCase,
    UpdatePricesUseCase,
    UpdateTaxRateUseCase,
)

__all__ = [
    # Use Cases
    "CreateInvoiceUseCase",
    "EditInvoiceUseCase",
    "RecordPaymentUseCase",
    "CreateCustomerUseCase",
    "GetCustomerStatementUseCase",
    "AddPartUseCase",
    "ImportPartsUseCase",
    "UpdatePricesUseCase",
    "UpdateTaxRateUseCase",
    "SeedCatalogUseCase",
    # Service factories
    "get_stock_ledger",
    "get_invoice_lifecycle_service",
    "get_reconciliation_service",
    "get_payment_allocator_service",
    "reset_services",
]
