"""
Abstract interfaces for read-side storage.

Every mutation goes through ``ITransaction``; these stores only serve
queries outside a transaction (listings, lookups, statements).
"""

from abc import ABC, abstractmethod

from src.core.entities.activity_log import ActivityLog
from src.core.entities.customer import Customer
from src.core.entities.invoice import Invoice, InvoiceStatus
from src.core.entities.part import Part
from src.core.entities.pricing import PricingConfig


class IPartStore(ABC):
    """Interface for catalog queries."""

    @abstractmethod
    async def get_part(self, part_id: str) -> Part | None:
        """Get part by ID."""
        pass

    @abstractmethod
    async def list_parts(
        self,
        category: str | None = None,
        search: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Part]:
        """List parts ordered by name."""
        pass


class ICustomerStore(ABC):
    """Interface for customer queries. Balances are derived on read."""

    @abstractmethod
    async def get_customer(self, customer_id: str) -> Customer | None:
        """Get customer by ID with derived balance."""
        pass

    @abstractmethod
    async def list_customers(self, limit: int = 100, offset: int = 0) -> list[Customer]:
        """List customers ordered by name with derived balances."""
        pass


class IInvoiceStore(ABC):
    """Interface for invoice queries."""

    @abstractmethod
    async def get_invoice(self, invoice_number: str) -> Invoice | None:
        """Get invoice by number."""
        pass

    @abstractmethod
    async def list_invoices(
        self,
        customer_id: str | None = None,
        status: InvoiceStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Invoice]:
        """List invoices, newest first."""
        pass


class IActivityLogStore(ABC):
    """Interface for the activity feed."""

    @abstractmethod
    async def list_recent(self, limit: int = 50) -> list[ActivityLog]:
        """Most recent entries first."""
        pass


class ISettingsStore(ABC):
    """Interface for the singleton settings document."""

    @abstractmethod
    async def get_pricing_config(self) -> PricingConfig:
        """Load the current pricing configuration."""
        pass
