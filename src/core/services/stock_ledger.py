"""
Stock ledger.

Stock is a non-negative integer counter per part, changed only by signed
deltas inside the transaction of the business event that causes them.
Every change follows the same order: read the affected parts, validate
every resulting level, then write. A failed validation writes nothing.
"""

from collections.abc import Iterable, Mapping

from src.config import get_logger
from src.core.entities.part import Part
from src.core.exceptions import InsufficientStockError, PartNotFoundError
from src.core.interfaces.transaction import ITransaction

logger = get_logger(__name__)


def consumption_deltas(quantities: Mapping[str, int]) -> dict[str, int]:
    """Turn per-part quantities sold into negative stock deltas."""
    return {part_id: -qty for part_id, qty in quantities.items() if qty}


class StockLedger:
    """Read, validate and apply stock deltas within a transaction."""

    async def read_parts(self, tx: ITransaction, part_ids: Iterable[str]) -> dict[str, Part]:
        """
        Read every requested part in one batch.

        Raises:
            PartNotFoundError: If any id is unknown
        """
        wanted = list(dict.fromkeys(part_ids))
        parts = await tx.get_parts(wanted)
        for part_id in wanted:
            if part_id not in parts:
                raise PartNotFoundError(part_id)
        return parts

    @staticmethod
    def validate(parts: Mapping[str, Part], deltas: Mapping[str, int]) -> None:
        """
        Check that every delta leaves stock at zero or above.

        Raises:
            PartNotFoundError: If a delta names a part that was not read
            InsufficientStockError: For the first part that would go negative
        """
        for part_id, delta in deltas.items():
            part = parts.get(part_id)
            if part is None:
                raise PartNotFoundError(part_id)
            if not part.can_supply(-delta):
                logger.info(
                    "stock_validation_failed",
                    part_id=part_id,
                    available=part.stock,
                    requested=-delta,
                )
                raise InsufficientStockError(
                    part_id=part_id,
                    part_name=part.name,
                    available=part.stock,
                    requested=-delta,
                )

    async def apply(self, tx: ITransaction, deltas: Mapping[str, int]) -> None:
        """Write each non-zero delta. Callers validate first."""
        for part_id, delta in deltas.items():
            if delta:
                await tx.adjust_stock(part_id, delta)
        logger.debug("stock_deltas_applied", deltas=dict(deltas))

    async def reserve(self, tx: ITransaction, deltas: Mapping[str, int]) -> dict[str, Part]:
        """Read, validate and apply in one step. Returns the parts as read."""
        parts = await self.read_parts(tx, deltas.keys())
        self.validate(parts, deltas)
        await self.apply(tx, deltas)
        return parts
