"""Activity feed endpoint."""

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_activity
from src.application.dto.responses import ActivityFeedResponse, ActivityLogResponse
from src.infrastructure.storage.sqlite import SQLiteActivityLogStore

router = APIRouter(prefix="/api/activity", tags=["activity"])


@router.get("", response_model=ActivityFeedResponse)
async def list_activity(
    limit: int = Query(50, ge=1, le=500),
    store: SQLiteActivityLogStore = Depends(get_activity),
) -> ActivityFeedResponse:
    """Most recent activity first."""
    entries = await store.list_recent(limit=limit)
    return ActivityFeedResponse(
        entries=[
            ActivityLogResponse(id=e.id, description=e.description, date=e.date)
            for e in entries
        ]
    )
