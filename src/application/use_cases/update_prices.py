"""Update Prices Use Case: batch price management."""

from dataclasses import dataclass, field

from src.application.dto.requests import UpdatePricesRequest
from src.application.dto.responses import PriceChangeResponse, UpdatePricesResponse
from src.config import get_logger, get_settings
from src.core.entities.part import Part
from src.core.entities.pricing import round_money
from src.core.exceptions import PartNotFoundError, ValidationError
from src.core.interfaces.transaction import ITransaction, ITransactionRunner
from src.core.services.pricing import PricingCalculator

logger = get_logger(__name__)


@dataclass
class UpdatePricesResult:
    """Result of a batch price update."""

    updated: list[Part] = field(default_factory=list)
    unchanged: int = 0


class UpdatePricesUseCase:
    """
    Change base prices for several parts at once.

    Each changed part keeps its old base price in ``previous_price`` and
    gets tax and ex-factory price recomputed at the stored tax rate.
    """

    def __init__(
        self,
        runner: ITransactionRunner | None = None,
        currency: str | None = None,
    ):
        self._runner = runner
        self._currency = currency

    async def _get_runner(self) -> ITransactionRunner:
        if self._runner is None:
            from src.infrastructure.storage.sqlite import get_transaction_runner

            self._runner = await get_transaction_runner()
        return self._runner

    def _get_currency(self) -> str:
        if self._currency is None:
            self._currency = get_settings().pos.currency
        return self._currency

    async def execute(self, request: UpdatePricesRequest) -> UpdatePricesResult:
        """Execute update prices use case."""
        if not request.changes:
            raise ValidationError("changes", "No price changes given")
        for index, change in enumerate(request.changes):
            if change.new_price < 0:
                raise ValidationError(
                    f"changes[{index}].new_price", "Price cannot be negative", change.new_price
                )

        new_prices = {c.part_id: round_money(c.new_price) for c in request.changes}
        currency = self._get_currency()

        async def work(tx: ITransaction) -> UpdatePricesResult:
            parts = await tx.get_parts(new_prices.keys())
            for part_id in new_prices:
                if part_id not in parts:
                    raise PartNotFoundError(part_id)
            calculator = PricingCalculator(await tx.get_pricing_config())

            result = UpdatePricesResult()
            for part_id, new_price in new_prices.items():
                part = parts[part_id]
                if new_price == part.price:
                    result.unchanged += 1
                    continue
                result.updated.append(calculator.reprice(part, new_price))

            for part in result.updated:
                await tx.update_part(part)
                await tx.log_activity(
                    f"Updated price for {part.name} from {currency} {part.previous_price:.2f} "
                    f"to {currency} {part.price:.2f}."
                )
            return result

        runner = await self._get_runner()
        result = await runner.run(work, operation="update_prices")

        logger.info(
            "prices_updated",
            updated=len(result.updated),
            unchanged=result.unchanged,
        )
        return result

    def to_response(self, result: UpdatePricesResult) -> UpdatePricesResponse:
        """Convert result to API response."""
        return UpdatePricesResponse(
            updated=[
                PriceChangeResponse(
                    part_id=p.id,
                    name=p.name,
                    previous_price=p.previous_price or 0.0,
                    price=p.price,
                    tax=p.tax,
                    ex_fact_price=p.ex_fact_price,
                )
                for p in result.updated
            ],
            unchanged=result.unchanged,
        )
