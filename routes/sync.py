"""
Sync trigger routes.

Called by the external scheduler (cron) on the configured interval.
"""

from fastapi import APIRouter
import structlog

from services.session_service import get_session_service
from services.sync_service import describe_schedule, trigger_sync, trigger_sync_for_shops

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/sync", tags=["Sync"])


@router.get("/schedule")
async def get_schedule():
    """Interval and cron expression the scheduler should use."""
    return describe_schedule(log=False)


@router.post("")
def trigger_all():
    """Trigger the sync for every shop with a stored session."""
    shops = get_session_service().list_shops()
    return {"data": trigger_sync_for_shops(shops), "total": len(shops)}


@router.post("/{shop}")
async def trigger_one(shop: str):
    """Trigger the sync for one shop."""
    return trigger_sync(shop)
