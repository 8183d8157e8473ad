"""Part (catalog item) domain entity."""

from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, Field, model_validator

from src.core.entities.pricing import PricingType, round_money


def new_part_id() -> str:
    return uuid4().hex


class Part(BaseModel):
    """A catalog item with its on-hand stock counter."""

    id: str = Field(default_factory=new_part_id)
    name: str
    part_number: str
    part_code: str
    description: str = ""
    brand: str = ""
    category: str = ""
    equipment_model: str = ""
    image_url: str | None = None
    price: float = Field(default=0.0, ge=0)  # tax-exclusive base price
    previous_price: float | None = None
    taxable: bool = True
    tax: float = Field(default=0.0, ge=0)
    ex_fact_price: float = 0.0  # price + tax
    pricing_type: PricingType = PricingType.EXCLUSIVE
    stock: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def compute_ex_fact_price(self) -> "Part":
        """Keep ex_fact_price equal to price + tax."""
        self.ex_fact_price = round_money(self.price + self.tax)
        return self

    def can_supply(self, quantity: int) -> bool:
        """Whether stock covers consuming the given quantity."""
        return self.stock - quantity >= 0
