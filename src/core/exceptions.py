"""
Domain exceptions for the Parts Hub application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class PartsHubError(Exception):
    """Base exception for all Parts Hub errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Lookup Exceptions
class NotFoundError(PartsHubError):
    """Referenced record does not exist."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            f"{entity} not found: {entity_id}",
            code=f"{entity.upper()}_NOT_FOUND",
            details={"entity": entity.lower(), "id": entity_id},
        )


class PartNotFoundError(NotFoundError):
    """Part not found in the catalog."""

    def __init__(self, part_id: str):
        super().__init__("Part", part_id)
        self.part_id = part_id


class CustomerNotFoundError(NotFoundError):
    """Customer not found."""

    def __init__(self, customer_id: str):
        super().__init__("Customer", customer_id)
        self.customer_id = customer_id


class InvoiceNotFoundError(NotFoundError):
    """Invoice not found."""

    def __init__(self, invoice_number: str):
        super().__init__("Invoice", invoice_number)
        self.invoice_number = invoice_number


# Stock Exceptions
class InsufficientStockError(PartsHubError):
    """Requested consumption exceeds stock on hand."""

    def __init__(self, part_id: str, part_name: str, available: int, requested: int):
        super().__init__(
            f"Insufficient stock for {part_name}: available {available}, requested {requested}",
            code="INSUFFICIENT_STOCK",
            details={
                "part_id": part_id,
                "part_name": part_name,
                "available": available,
                "requested": requested,
            },
        )
        self.part_id = part_id
        self.part_name = part_name
        self.available = available
        self.requested = requested


# Storage Exceptions
class StorageError(PartsHubError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class TransactionOrderError(StorageError):
    """A read was issued after the transaction started writing."""

    def __init__(self, operation: str):
        super().__init__(
            f"Transaction reads must precede writes (attempted '{operation}' after a write)",
            code="TRANSACTION_ORDER",
            details={"operation": operation},
        )


class TransactionConflictError(StorageError):
    """Concurrent transactions kept conflicting until retries ran out."""

    def __init__(self, operation: str, attempts: int, reason: str | None = None):
        super().__init__(
            f"Transaction '{operation}' conflicted after {attempts} attempt(s)",
            code="TRANSACTION_CONFLICT",
            details={"operation": operation, "attempts": attempts, "reason": reason},
        )


# Validation Exceptions
class ValidationError(PartsHubError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class ConfigurationError(PartsHubError):
    """Configuration error."""

    pass
