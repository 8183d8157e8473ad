"""
Service factory functions for dependency injection.

This module provides factory functions that wire configuration into core
services. Use cases should import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from src.config import get_settings
from src.core.services import (
    InvoiceLifecycleService,
    InvoiceNumberGenerator,
    InvoiceReconciliationService,
    PaymentAllocatorService,
    StockLedger,
)

# Singleton service instances
_stock_ledger: StockLedger | None = None
_invoice_lifecycle_service: InvoiceLifecycleService | None = None
_reconciliation_service: InvoiceReconciliationService | None = None
_payment_allocator_service: PaymentAllocatorService | None = None


def get_stock_ledger() -> StockLedger:
    """Get or create the shared StockLedger."""
    global _stock_ledger
    if _stock_ledger is None:
        _stock_ledger = StockLedger()
    return _stock_ledger


def get_invoice_lifecycle_service() -> InvoiceLifecycleService:
    """
    Get or create InvoiceLifecycleService instance.

    One instance per process so that every invoice number comes from the
    same monotonic generator.
    """
    global _invoice_lifecycle_service
    if _invoice_lifecycle_service is None:
        settings = get_settings()
        _invoice_lifecycle_service = InvoiceLifecycleService(
            ledger=get_stock_ledger(),
            number_generator=InvoiceNumberGenerator(prefix=settings.pos.invoice_prefix),
        )
    return _invoice_lifecycle_service


def get_reconciliation_service() -> InvoiceReconciliationService:
    """Get or create InvoiceReconciliationService instance."""
    global _reconciliation_service
    if _reconciliation_service is None:
        _reconciliation_service = InvoiceReconciliationService(ledger=get_stock_ledger())
    return _reconciliation_service


def get_payment_allocator_service() -> PaymentAllocatorService:
    """Get or create PaymentAllocatorService instance."""
    global _payment_allocator_service
    if _payment_allocator_service is None:
        _payment_allocator_service = PaymentAllocatorService(
            currency=get_settings().pos.currency,
        )
    return _payment_allocator_service


def reset_services() -> None:
    """Reset all service singletons (for testing)."""
    global _stock_ledger, _invoice_lifecycle_service
    global _reconciliation_service, _payment_allocator_service

    _stock_ledger = None
    _invoice_lifecycle_service = None
    _reconciliation_service = None
    _payment_allocator_service = None
