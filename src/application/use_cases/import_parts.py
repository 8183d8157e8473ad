"""Import Parts Use Case: bulk catalog load from parsed rows."""

from dataclasses import dataclass, field

from src.application.dto.requests import ImportPartsRequest
from src.application.dto.responses import ImportPartsResponse
from src.config import get_logger
from src.core.entities.part import Part
from src.core.exceptions import ValidationError
from src.core.interfaces.transaction import ITransaction, ITransactionRunner
from src.core.services.catalog import PartImportColumns, part_from_row
from src.core.services.pricing import PricingCalculator

logger = get_logger(__name__)


@dataclass
class ImportPartsResult:
    """Result of a part import."""

    parts: list[Part] = field(default_factory=list)
    skipped: int = 0


class ImportPartsUseCase:
    """Import parts in one transaction. Rows without part number or name are skipped."""

    def __init__(
        self,
        runner: ITransactionRunner | None = None,
        columns: PartImportColumns | None = None,
    ):
        self._runner = runner
        self._columns = columns or PartImportColumns()

    async def _get_runner(self) -> ITransactionRunner:
        if self._runner is None:
            from src.infrastructure.storage.sqlite import get_transaction_runner

            self._runner = await get_transaction_runner()
        return self._runner

    async def execute(self, request: ImportPartsRequest) -> ImportPartsResult:
        """Execute import parts use case."""
        if not request.rows:
            raise ValidationError("rows", "No rows to import")

        logger.info("import_parts_started", rows=len(request.rows))

        async def work(tx: ITransaction) -> ImportPartsResult:
            calculator = PricingCalculator(await tx.get_pricing_config())
            result = ImportPartsResult()
            for row in request.rows:
                part = part_from_row(row, calculator, self._columns)
                if part is None:
                    result.skipped += 1
                    continue
                result.parts.append(part)

            for part in result.parts:
                await tx.insert_part(part)
            if result.parts:
                await tx.log_activity(f"Imported {len(result.parts)} parts.")
            return result

        runner = await self._get_runner()
        result = await runner.run(work, operation="import_parts")

        logger.info(
            "import_parts_complete",
            imported=len(result.parts),
            skipped=result.skipped,
        )
        return result

    def to_response(self, result: ImportPartsResult) -> ImportPartsResponse:
        """Convert result to API response."""
        return ImportPartsResponse(
            imported=len(result.parts),
            skipped=result.skipped,
            part_ids=[p.id for p in result.parts],
        )
