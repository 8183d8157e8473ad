"""Customer domain entity."""

from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, Field


class Customer(BaseModel):
    """A customer account.

    ``balance`` is derived from the customer's invoices when read and is
    never persisted.
    """

    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str
    phone: str = ""
    address: str = ""
    balance: float = 0.0
    created_at: datetime = Field(default_factory=datetime.now)
