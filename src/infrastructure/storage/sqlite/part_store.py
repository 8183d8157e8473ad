"""SQLite implementation of catalog queries."""

from src.core.entities.part import Part
from src.core.interfaces.storage import IPartStore
from src.infrastructure.storage.sqlite.connection import get_connection
from src.infrastructure.storage.sqlite.mappers import PART_COLUMNS, row_to_part

class SQLitePartStore(IPartStore):
    """SQLite implementation of part lookups and listings."""

    async def get_part(self, part_id: str) -> Part | None:
        """Get part by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT {PART_COLUMNS} FROM parts WHERE id = ?", (part_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return row_to_part(row)

    async def list_parts(
        self,
        category: str | None = None,
        search: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Part]:
        """List parts ordered by name, optionally filtered."""
        clauses = []
        params: list = []
        if category:
            clauses.append("category = ?")
            params.append(category)
        if search:
            clauses.append("(name LIKE ? OR part_number LIKE ? OR part_code LIKE ?)")
            pattern = f"%{search}%"
            params.extend([pattern, pattern, pattern])
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT {PART_COLUMNS} FROM parts
                {where}
                ORDER BY name, id
                LIMIT ? OFFSET ?
                """,
                (*params, limit, offset),
            )
            rows = await cursor.fetchall()
            return [row_to_part(row) for row in rows]
