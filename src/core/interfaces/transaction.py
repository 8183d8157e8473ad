"""
Abstract interfaces for atomic read-then-write transactions.

A transaction serves reads first and writes second: once any write has
been issued, further reads are rejected. Business operations read every
record they need, validate, and only then write.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

from src.core.entities.customer import Customer
from src.core.entities.invoice import Invoice
from src.core.entities.part import Part
from src.core.entities.pricing import PricingConfig

T = TypeVar("T")


class ITransaction(ABC):
    """A single atomic unit of work against the store."""

    # Read phase
    @abstractmethod
    async def get_part(self, part_id: str) -> Part | None:
        """Read a part."""
        pass

    @abstractmethod
    async def get_parts(self, part_ids: Iterable[str]) -> dict[str, Part]:
        """Read many parts in one batch. Missing ids are absent from the result."""
        pass

    @abstractmethod
    async def list_parts(self) -> list[Part]:
        """Read the whole catalog."""
        pass

    @abstractmethod
    async def get_customer(self, customer_id: str) -> Customer | None:
        """Read a customer."""
        pass

    @abstractmethod
    async def get_invoice(self, invoice_number: str) -> Invoice | None:
        """Read an invoice."""
        pass

    @abstractmethod
    async def list_open_invoices(self, customer_id: str) -> list[Invoice]:
        """Read a customer's invoices with a positive balance."""
        pass

    @abstractmethod
    async def get_pricing_config(self) -> PricingConfig:
        """Read the pricing configuration."""
        pass

    # Write phase
    @abstractmethod
    async def adjust_stock(self, part_id: str, delta: int) -> None:
        """Add a signed delta to a part's stock."""
        pass

    @abstractmethod
    async def insert_part(self, part: Part) -> None:
        pass

    @abstractmethod
    async def update_part(self, part: Part) -> None:
        pass

    @abstractmethod
    async def insert_customer(self, customer: Customer) -> None:
        pass

    @abstractmethod
    async def insert_invoice(self, invoice: Invoice) -> None:
        pass

    @abstractmethod
    async def update_invoice(self, invoice: Invoice) -> None:
        pass

    @abstractmethod
    async def save_pricing_config(self, config: PricingConfig) -> None:
        pass

    @abstractmethod
    async def log_activity(self, description: str) -> None:
        """Append an activity log entry."""
        pass


class ITransactionRunner(ABC):
    """Runs work inside a transaction, re-running it on write conflicts."""

    @abstractmethod
    async def run(
        self,
        work: Callable[[ITransaction], Awaitable[T]],
        operation: str = "transaction",
    ) -> T:
        """
        Execute ``work`` atomically.

        Commits when ``work`` returns, rolls back when it raises. Raises
        TransactionConflictError when conflicts persist past the retry limit.
        """
        pass
