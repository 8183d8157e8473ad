"""Core domain entities."""

from src.core.entities.activity_log import ActivityLog
from src.core.entities.customer import Customer
from src.core.entities.invoice import (
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    resolve_status,
)
from src.core.entities.part import Part, new_part_id
from src.core.entities.pricing import (
    DEFAULT_TAX_RATE,
    PricingConfig,
    PricingType,
    round_money,
)

__all__ = [
    # Catalog entities
    "Part",
    "new_part_id",
    # Pricing
    "PricingConfig",
    "PricingType",
    "DEFAULT_TAX_RATE",
    "round_money",
    # Customer entities
    "Customer",
    # Invoice entities
    "Invoice",
    "InvoiceItem",
    "InvoiceStatus",
    "resolve_status",
    # Audit trail
    "ActivityLog",
]
