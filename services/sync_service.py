"""
Scheduled sync entry point.

An external scheduler calls POST /api/sync on the configured interval.
The sync itself is a placeholder: it records the trigger and returns.
"""

from datetime import datetime
import structlog

from config import settings

logger = structlog.get_logger(__name__)


def trigger_sync(shop: str) -> dict:
    """
    Run the sync for one shop.

    Args:
        shop: Shop domain

    Returns:
        Trigger record (shop, triggered_at)
    """
    triggered_at = datetime.utcnow().isoformat()
    logger.info("sync_triggered", shop=shop, triggered_at=triggered_at)
    return {"shop": shop, "triggered_at": triggered_at}


def trigger_sync_for_shops(shops: list[str]) -> list[dict]:
    """Trigger the sync for each shop in order."""
    logger.info("sync_run_started", shops=len(shops))
    return [trigger_sync(shop) for shop in shops]


_schedule_logged = False


def describe_schedule(log: bool = True) -> dict:
    """
    Report the sync schedule the external scheduler should use.

    Logged once per process at startup.
    """
    global _schedule_logged
    schedule = {
        "interval_hours": settings.sync_interval_hours,
        "cron": settings.sync_cron_expression,
    }
    if log and not _schedule_logged:
        _schedule_logged = True
        logger.info("sync_schedule_configured", **schedule)
    return schedule
