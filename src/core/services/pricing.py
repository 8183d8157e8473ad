"""
Pricing calculator.

Splits entered amounts into base price and tax and keeps a part's
ex-factory price in step with the configured tax rate. The configuration
is loaded by the caller and passed in; nothing here reads global state.
"""

from datetime import datetime

from src.core.entities.part import Part
from src.core.entities.pricing import PricingConfig, PricingType, round_money


class PricingCalculator:
    """
    Tax and ex-factory price computation for a given configuration.

    - exclusive: the entered amount is the base price, tax = price * rate
    - inclusive: the entered amount contains tax, base = amount / (1 + rate)
    - non-taxable parts carry zero tax either way
    """

    def __init__(self, config: PricingConfig) -> None:
        self._config = config

    @property
    def tax_rate(self) -> float:
        return self._config.tax_rate

    def tax_for(self, price: float, taxable: bool) -> float:
        """Per-unit tax on a base price."""
        if not taxable:
            return 0.0
        return round_money(price * self._config.tax_rate)

    def decompose(
        self,
        amount: float,
        taxable: bool,
        pricing_type: PricingType = PricingType.EXCLUSIVE,
    ) -> tuple[float, float]:
        """Split an entered amount into (base price, tax)."""
        if not taxable:
            return round_money(amount), 0.0
        if pricing_type == PricingType.INCLUSIVE:
            price = round_money(amount / (1 + self._config.tax_rate))
            return price, round_money(amount - price)
        return round_money(amount), self.tax_for(amount, taxable)

    def reprice(self, part: Part, price: float | None = None) -> Part:
        """
        Return a copy of ``part`` with tax and ex-factory price recomputed.

        When ``price`` differs from the current base price the old value is
        kept in ``previous_price``. Without a new price, inclusive parts are
        split again from their ex-factory price, which stays as entered.
        Repricing an already consistent part yields identical values.
        """
        if price is None and part.taxable and part.pricing_type == PricingType.INCLUSIVE:
            new_price, tax = self.decompose(part.ex_fact_price, True, PricingType.INCLUSIVE)
            repriced = part.model_copy(update={"price": new_price, "tax": tax})
            if (new_price, tax) != (part.price, part.tax):
                repriced.updated_at = datetime.now()
            repriced.ex_fact_price = round_money(new_price + tax)
            return repriced

        new_price = round_money(part.price if price is None else price)
        update: dict = {
            "price": new_price,
            "tax": self.tax_for(new_price, part.taxable),
        }
        if new_price != part.price:
            update["previous_price"] = part.price
            update["updated_at"] = datetime.now()
        repriced = part.model_copy(update=update)
        repriced.ex_fact_price = round_money(repriced.price + repriced.tax)
        return repriced
