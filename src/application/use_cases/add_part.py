"""Add Part Use Case: catalog entry with tax decomposition."""

from dataclasses import dataclass

from src.application.dto.converters import part_to_response
from src.application.dto.requests import CreatePartRequest
from src.application.dto.responses import PartResponse
from src.config import get_logger
from src.core.entities.part import Part
from src.core.interfaces.transaction import ITransaction, ITransactionRunner
from src.core.services.catalog import validate_part_fields
from src.core.services.pricing import PricingCalculator

logger = get_logger(__name__)


@dataclass
class AddPartResult:
    """Result of adding a part."""

    part: Part


class AddPartUseCase:
    """
    Add a part to the catalog.

    The entered price is split into base price and tax using the stored
    tax rate and the request's pricing type.
    """

    def __init__(self, runner: ITransactionRunner | None = None):
        self._runner = runner

    async def _get_runner(self) -> ITransactionRunner:
        if self._runner is None:
            from src.infrastructure.storage.sqlite import get_transaction_runner

            self._runner = await get_transaction_runner()
        return self._runner

    async def execute(self, request: CreatePartRequest) -> AddPartResult:
        """Execute add part use case."""
        validate_part_fields(
            request.name,
            request.part_number,
            request.part_code,
            request.price,
            request.stock,
        )

        async def work(tx: ITransaction) -> Part:
            config = await tx.get_pricing_config()
            price, tax = PricingCalculator(config).decompose(
                request.price, request.taxable, request.pricing_type
            )
            part = Part(
                name=request.name.strip(),
                part_number=request.part_number.strip(),
                part_code=request.part_code.strip(),
                description=request.description,
                brand=request.brand,
                category=request.category,
                equipment_model=request.equipment_model,
                image_url=request.image_url,
                price=price,
                tax=tax,
                taxable=request.taxable,
                pricing_type=request.pricing_type,
                stock=request.stock,
            )
            await tx.insert_part(part)
            await tx.log_activity(f"Added part {part.name} ({part.part_number}) to the catalog.")
            return part

        runner = await self._get_runner()
        part = await runner.run(work, operation="add_part")

        logger.info(
            "part_added",
            part_id=part.id,
            part_number=part.part_number,
            price=part.price,
            tax=part.tax,
        )
        return AddPartResult(part=part)

    def to_response(self, result: AddPartResult) -> PartResponse:
        """Convert result to API response."""
        return part_to_response(result.part)
