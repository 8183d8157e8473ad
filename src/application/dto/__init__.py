"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from src.application.dto.requests import (
    CreateCustomerRequest,
    CreateInvoiceRequest,
    CreatePartRequest,
    CustomerPaymentRequest,
    EditInvoiceRequest,
    ImportPartsRequest,
    InvoiceLineRequest,
    PriceChangeRequest,
    RecordPaymentRequest,
    UpdatePricesRequest,
    UpdateTaxRateRequest,
)
from src.application.dto.responses import (
    ActivityFeedResponse,
    ActivityLogResponse,
    AllocationResponse,
    ComponentHealthResponse,
    CustomerListResponse,
    CustomerResponse,
    EditInvoiceResponse,
    ErrorResponse,
    HealthResponse,
    ImportPartsResponse,
    InvoiceItemResponse,
    InvoiceListResponse,
    InvoiceResponse,
    PartListResponse,
    PartResponse,
    PaymentResponse,
    PriceChangeResponse,
    PricingSettingsResponse,
    SeedCatalogResponse,
    StatementLineResponse,
    StatementResponse,
    UpdatePricesResponse,
)

__all__ = [
    # Requests
    "CreatePartRequest",
    "ImportPartsRequest",
    "PriceChangeRequest",
    "UpdatePricesRequest",
    "UpdateTaxRateRequest",
    "CreateCustomerRequest",
    "InvoiceLineRequest",
    "CreateInvoiceRequest",
    "EditInvoiceRequest",
    "RecordPaymentRequest",
    "CustomerPaymentRequest",
    # Responses
    "PartResponse",
    "PartListResponse",
    "ImportPartsResponse",
    "SeedCatalogResponse",
    "PriceChangeResponse",
    "UpdatePricesResponse",
    "PricingSettingsResponse",
    "CustomerResponse",
    "CustomerListResponse",
    "InvoiceItemResponse",
    "InvoiceResponse",
    "InvoiceListResponse",
    "EditInvoiceResponse",
    "AllocationResponse",
    "PaymentResponse",
    "StatementLineResponse",
    "StatementResponse",
    "ActivityLogResponse",
    "ActivityFeedResponse",
    "HealthResponse",
    "ComponentHealthResponse",
    "ErrorResponse",
]
