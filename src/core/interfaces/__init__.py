"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.storage import (
    IActivityLogStore,
    ICustomerStore,
    IInvoiceStore,
    IPartStore,
    ISettingsStore,
)
from src.core.interfaces.transaction import ITransaction, ITransactionRunner

__all__ = [
    # Storage interfaces
    "IPartStore",
    "ICustomerStore",
    "IInvoiceStore",
    "IActivityLogStore",
    "ISettingsStore",
    # Transaction interfaces
    "ITransaction",
    "ITransactionRunner",
]
