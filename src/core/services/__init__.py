"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py

NO infrastructure imports. Transactions are passed in by the caller.
"""

from src.core.services.catalog import (
    DEFAULT_CATALOG,
    PartImportColumns,
    default_catalog,
    part_from_row,
)
from src.core.services.invoice_lifecycle import (
    CreatedInvoice,
    InvoiceDraft,
    InvoiceLifecycleService,
    InvoiceLine,
    InvoiceNumberGenerator,
)
from src.core.services.invoice_reconciliation import (
    InvoiceReconciliationService,
    InvoiceRevision,
    ReconciledInvoice,
    compute_stock_deltas,
)
from src.core.services.payment_allocator import (
    Allocation,
    AllocationPlan,
    PaymentAllocatorService,
    RecordedPayment,
    allocate,
)
from src.core.services.pricing import PricingCalculator
from src.core.services.stock_ledger import StockLedger

__all__ = [
    # Pricing
    "PricingCalculator",
    # Stock Ledger
    "StockLedger",
    # Invoice Lifecycle
    "InvoiceLifecycleService",
    "InvoiceDraft",
    "InvoiceLine",
    "InvoiceNumberGenerator",
    "CreatedInvoice",
    # Reconciliation
    "InvoiceReconciliationService",
    "InvoiceRevision",
    "ReconciledInvoice",
    "compute_stock_deltas",
    # Payment Allocator
    "PaymentAllocatorService",
    "AllocationPlan",
    "Allocation",
    "RecordedPayment",
    "allocate",
    # Catalog
    "PartImportColumns",
    "part_from_row",
    "default_catalog",
    "DEFAULT_CATALOG",
]
