"""Seed Catalog Use Case: one-time load of the default parts."""

from dataclasses import dataclass, field

from src.application.dto.responses import SeedCatalogResponse
from src.config import get_logger
from src.core.entities.part import Part
from src.core.interfaces.transaction import ITransaction, ITransactionRunner
from src.core.services.catalog import default_catalog
from src.core.services.pricing import PricingCalculator

logger = get_logger(__name__)


@dataclass
class SeedCatalogResult:
    """Result of catalog seeding."""

    seeded: bool
    parts: list[Part] = field(default_factory=list)


class SeedCatalogUseCase:
    """Insert the default catalog unless the settings row says it was done."""

    def __init__(self, runner: ITransactionRunner | None = None):
        self._runner = runner

    async def _get_runner(self) -> ITransactionRunner:
        if self._runner is None:
            from src.infrastructure.storage.sqlite import get_transaction_runner

            self._runner = await get_transaction_runner()
        return self._runner

    async def execute(self) -> SeedCatalogResult:
        """Execute seed catalog use case."""

        async def work(tx: ITransaction) -> SeedCatalogResult:
            config = await tx.get_pricing_config()
            if config.seeded:
                return SeedCatalogResult(seeded=False)

            parts = default_catalog(PricingCalculator(config))
            for part in parts:
                await tx.insert_part(part)
            await tx.save_pricing_config(config.model_copy(update={"seeded": True}))
            await tx.log_activity(f"Seeded catalog with {len(parts)} default parts.")
            return SeedCatalogResult(seeded=True, parts=parts)

        runner = await self._get_runner()
        result = await runner.run(work, operation="seed_catalog")

        if result.seeded:
            logger.info("catalog_seeded", parts=len(result.parts))
        else:
            logger.info("catalog_already_seeded")
        return result

    def to_response(self, result: SeedCatalogResult) -> SeedCatalogResponse:
        """Convert result to API response."""
        return SeedCatalogResponse(seeded=result.seeded, parts_created=len(result.parts))
