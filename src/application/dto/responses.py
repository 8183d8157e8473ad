"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

# --- Common ---


class ComponentHealthResponse(BaseModel):
    """Dependency health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ComponentHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INVOICE_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


# --- Parts ---


class PartResponse(BaseModel):
    """Catalog part response DTO."""

    id: str
    name: str
    part_number: str
    part_code: str
    description: str = ""
    brand: str = ""
    category: str = ""
    equipment_model: str = ""
    image_url: str | None = None
    price: float = Field(..., description="Tax-exclusive base price")
    previous_price: float | None = None
    taxable: bool
    tax: float
    ex_fact_price: float = Field(..., description="Tax-inclusive sale price")
    pricing_type: str
    stock: int
    updated_at: datetime


class PartListResponse(BaseModel):
    """Part listing."""

    parts: list[PartResponse]
    total: int


class ImportPartsResponse(BaseModel):
    """Outcome of a part import."""

    imported: int
    skipped: int
    part_ids: list[str] = Field(default_factory=list)


class SeedCatalogResponse(BaseModel):
    """Outcome of catalog seeding."""

    seeded: bool = Field(..., description="False when the catalog was already seeded")
    parts_created: int = 0


class PriceChangeResponse(BaseModel):
    """One applied price change."""

    part_id: str
    name: str
    previous_price: float
    price: float
    tax: float
    ex_fact_price: float


class UpdatePricesResponse(BaseModel):
    """Outcome of a batch price update."""

    updated: list[PriceChangeResponse]
    unchanged: int = 0


class PricingSettingsResponse(BaseModel):
    """Current pricing configuration."""

    tax_rate: float
    currency: str
    seeded: bool
    updated_at: datetime | None = None
    parts_repriced: int | None = None


# --- Customers ---


class CustomerResponse(BaseModel):
    """Customer response DTO with derived balance."""

    id: str
    name: str
    phone: str = ""
    address: str = ""
    balance: float = Field(default=0.0, description="Sum of balance due across invoices")
    created_at: datetime


class CustomerListResponse(BaseModel):
    """Customer listing."""

    customers: list[CustomerResponse]
    total: int


# --- Invoices ---


class InvoiceItemResponse(BaseModel):
    """Invoice line response DTO."""

    part_id: str
    part_name: str
    part_number: str
    quantity: int
    unit_price: float
    tax: float
    ex_fact_price: float
    total: float


class InvoiceResponse(BaseModel):
    """Invoice response DTO."""

    invoice_number: str
    customer_id: str
    customer_name: str
    customer_address: str = ""
    customer_phone: str = ""
    invoice_date: date
    due_date: date
    items: list[InvoiceItemResponse]
    subtotal: float
    tax_amount: float
    total: float
    paid_amount: float
    balance_due: float
    status: str
    created_at: datetime
    updated_at: datetime


class InvoiceListResponse(BaseModel):
    """Invoice listing."""

    invoices: list[InvoiceResponse]
    total: int


class EditInvoiceResponse(BaseModel):
    """Edited invoice plus the stock it moved."""

    invoice: InvoiceResponse
    stock_deltas: dict[str, int] = Field(
        default_factory=dict,
        description="Net stock change per part (positive = returned to stock)",
    )


# --- Payments ---


class AllocationResponse(BaseModel):
    """Amount applied to one invoice."""

    invoice_number: str
    applied: float
    balance_due: float
    status: str


class PaymentResponse(BaseModel):
    """Outcome of a recorded payment."""

    customer_id: str
    customer_name: str
    amount: float
    payment_date: date
    applied_total: float
    overpayment: float
    currency: str
    allocations: list[AllocationResponse]


# --- Statements ---


class StatementLineResponse(BaseModel):
    """One invoice on a statement."""

    invoice_number: str
    invoice_date: date
    due_date: date
    total: float
    paid_amount: float
    balance_due: float
    status: str = Field(..., description="Display status; past-due open invoices show Overdue")


class StatementResponse(BaseModel):
    """Customer statement."""

    customer: CustomerResponse
    invoices: list[StatementLineResponse]
    total_balance_due: float
    currency: str
    generated_at: datetime


# --- Activity ---


class ActivityLogResponse(BaseModel):
    """Activity feed entry."""

    id: int | None = None
    description: str
    date: datetime | None = None


class ActivityFeedResponse(BaseModel):
    """Activity feed."""

    entries: list[ActivityLogResponse]
