"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.

Business rules (at least one item, quantity of at least 1, positive
payment amounts) are enforced by the use cases so that they surface as
domain validation errors.
"""

from datetime import date

from pydantic import BaseModel, Field

from src.core.entities.pricing import PricingType

# --- Parts ---


class CreatePartRequest(BaseModel):
    """Request to add a part to the catalog."""

    name: str = Field(..., description="Part name")
    part_number: str = Field(..., description="Manufacturer part number")
    part_code: str = Field(..., description="Internal part code")
    price: float = Field(..., description="Entered price, split into base + tax by pricing_type")
    pricing_type: PricingType = Field(
        default=PricingType.EXCLUSIVE,
        description="Whether the entered price includes tax",
    )
    taxable: bool = Field(default=True, description="Whether tax applies")
    stock: int = Field(default=0, description="Opening stock quantity")
    description: str = Field(default="", description="Description")
    brand: str = Field(default="", description="Brand")
    category: str = Field(default="", description="Category")
    equipment_model: str = Field(default="", description="Equipment model")
    image_url: str | None = Field(default=None, description="Image URL")


class ImportPartsRequest(BaseModel):
    """Request to import parts from already-parsed rows."""

    rows: list[dict[str, str]] = Field(
        ...,
        description="Rows keyed by column name",
        examples=[[{"Part Number": "HD-ALT-001", "Description": "Alternator", "Quantity": "4", "Price": "299.99"}]],
    )


class PriceChangeRequest(BaseModel):
    """A single new base price."""

    part_id: str = Field(..., description="Part ID")
    new_price: float = Field(..., description="New tax-exclusive base price")


class UpdatePricesRequest(BaseModel):
    """Batch price update."""

    changes: list[PriceChangeRequest] = Field(..., description="Price changes")


class UpdateTaxRateRequest(BaseModel):
    """Request to change the global tax rate."""

    tax_rate: float = Field(..., description="Tax rate as a fraction, e.g. 0.219")


# --- Customers ---


class CreateCustomerRequest(BaseModel):
    """Request to create a customer."""

    name: str = Field(..., description="Customer name (at least 2 characters)")
    phone: str | None = Field(default=None, description="Phone number")
    address: str | None = Field(default=None, description="Address")


# --- Invoices ---


class InvoiceLineRequest(BaseModel):
    """A requested invoice line."""

    part_id: str = Field(..., description="Part ID")
    quantity: int = Field(..., description="Quantity (at least 1)")
    unit_price: float | None = Field(
        default=None,
        description="Tax-exclusive unit price (defaults to the catalog price)",
    )
    tax: float | None = Field(
        default=None,
        description="Per-unit tax (defaults to the catalog tax)",
    )


class CreateInvoiceRequest(BaseModel):
    """Request to create an invoice."""

    customer_id: str = Field(..., description="Customer ID")
    items: list[InvoiceLineRequest] = Field(..., description="Line items")
    paid_amount: float = Field(default=0.0, description="Amount paid at sale time")
    invoice_date: date | None = Field(default=None, description="Invoice date (defaults to today)")
    due_date: date | None = Field(
        default=None,
        description="Due date (defaults to invoice date plus the configured term)",
    )


class EditInvoiceRequest(BaseModel):
    """Request to edit an existing invoice. Omitted fields are kept."""

    items: list[InvoiceLineRequest] = Field(..., description="Complete new set of line items")
    paid_amount: float | None = Field(default=None, description="New cumulative paid amount")
    customer_id: str | None = Field(default=None, description="New customer ID")
    invoice_date: date | None = Field(default=None, description="New invoice date")
    due_date: date | None = Field(default=None, description="New due date")


# --- Payments ---


class RecordPaymentRequest(BaseModel):
    """Request to record a customer payment."""

    customer_id: str = Field(..., description="Customer ID")
    amount: float = Field(..., description="Amount received (must be positive)")
    payment_date: date | None = Field(default=None, description="Payment date (defaults to today)")


class CustomerPaymentRequest(BaseModel):
    """Payment body when the customer is given in the path."""

    amount: float = Field(..., description="Amount received (must be positive)")
    payment_date: date | None = Field(default=None, description="Payment date (defaults to today)")
