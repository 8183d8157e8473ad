"""SQLite implementation of the activity feed."""

from src.core.entities.activity_log import ActivityLog
from src.core.interfaces.storage import IActivityLogStore
from src.infrastructure.storage.sqlite.connection import get_connection
from src.infrastructure.storage.sqlite.mappers import row_to_activity


class SQLiteActivityLogStore(IActivityLogStore):
    """Reads activity log entries. Entries are written inside transactions."""

    async def list_recent(self, limit: int = 50) -> list[ActivityLog]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT id, description, date FROM activity_logs ORDER BY date DESC, id DESC LIMIT ?",
                (limit,),
            )
            rows = await cursor.fetchall()
            return [row_to_activity(row) for row in rows]
