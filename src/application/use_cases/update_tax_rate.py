"""Update Tax Rate Use Case: stores a new rate and reprices the catalog."""

from dataclasses import dataclass
from datetime import datetime

from src.application.dto.requests import UpdateTaxRateRequest
from src.application.dto.responses import PricingSettingsResponse
from src.config import get_logger, get_settings
from src.core.entities.pricing import PricingConfig
from src.core.exceptions import ValidationError
from src.core.interfaces.transaction import ITransaction, ITransactionRunner
from src.core.services.pricing import PricingCalculator

logger = get_logger(__name__)


@dataclass
class UpdateTaxRateResult:
    """Result of a tax rate change."""

    config: PricingConfig
    previous_rate: float
    parts_repriced: int


class UpdateTaxRateUseCase:
    """Change the global tax rate and recompute tax for every part."""

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

    async def execute(self, request: UpdateTaxRateRequest) -> UpdateTaxRateResult:
        """Execute update tax rate use case."""
        if request.tax_rate < 0 or request.tax_rate >= 1:
            raise ValidationError(
                "tax_rate", "Tax rate must be a fraction between 0 and 1", request.tax_rate
            )

        async def work(tx: ITransaction) -> UpdateTaxRateResult:
            current = await tx.get_pricing_config()
            parts = await tx.list_parts()

            config = current.model_copy(
                update={"tax_rate": request.tax_rate, "updated_at": datetime.now()}
            )
            calculator = PricingCalculator(config)
            repriced = [calculator.reprice(part) for part in parts]
            changed = [
                new for old, new in zip(parts, repriced)
                if (new.tax, new.ex_fact_price) != (old.tax, old.ex_fact_price)
            ]

            await tx.save_pricing_config(config)
            for part in changed:
                await tx.update_part(part)
            await tx.log_activity(
                f"Updated tax rate from {current.tax_rate:.2%} to {config.tax_rate:.2%}."
            )
            return UpdateTaxRateResult(
                config=config,
                previous_rate=current.tax_rate,
                parts_repriced=len(changed),
            )

        runner = await self._get_runner()
        result = await runner.run(work, operation="update_tax_rate")

        logger.info(
            "tax_rate_updated",
            previous_rate=result.previous_rate,
            tax_rate=result.config.tax_rate,
            parts_repriced=result.parts_repriced,
        )
        return result

    def to_response(self, result: UpdateTaxRateResult) -> PricingSettingsResponse:
        """Convert result to API response."""
        if self._currency is None:
            self._currency = get_settings().pos.currency
        return PricingSettingsResponse(
            tax_rate=result.config.tax_rate,
            currency=self._currency,
            seeded=result.config.seeded,
            updated_at=result.config.updated_at,
            parts_repriced=result.parts_repriced,
        )
