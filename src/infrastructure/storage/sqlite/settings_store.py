"""SQLite implementation of the singleton settings document."""

from src.core.entities.pricing import DEFAULT_TAX_RATE, PricingConfig
from src.core.interfaces.storage import ISettingsStore
from src.infrastructure.storage.sqlite.connection import get_connection
from src.infrastructure.storage.sqlite.mappers import row_to_pricing_config


class SQLiteSettingsStore(ISettingsStore):
    """Reads pricing configuration outside a transaction."""

    def __init__(self, default_tax_rate: float = DEFAULT_TAX_RATE) -> None:
        self._default_tax_rate = default_tax_rate

    async def get_pricing_config(self) -> PricingConfig:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT tax_rate, seeded, updated_at FROM app_settings WHERE id = 1"
            )
            row = await cursor.fetchone()
            return row_to_pricing_config(row, self._default_tax_rate)
