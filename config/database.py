"""
Supabase access for the shop session store.

The only table this service reads or writes is the sessions table
(settings.sessions_table), created by the app installation flow.
"""

from supabase import create_client, Client
from functools import lru_cache
import structlog

from config.settings import settings
from exceptions import DatabaseError

logger = structlog.get_logger(__name__)


@lru_cache()
def get_supabase_client() -> Client:
    """
    Cached Supabase client, checked against the sessions table.

    Call get_supabase_client.cache_clear() to reconnect.

    Raises:
        DatabaseError: If the client cannot be created or the table is unreachable
    """
    logger.info("connecting_to_supabase", url=settings.supabase_url[:30] + "...")

    try:
        client = create_client(settings.supabase_url, settings.supabase_key)
        client.table(settings.sessions_table).select("id").limit(1).execute()
    except Exception as e:
        logger.error(
            "supabase_connection_failed",
            table=settings.sessions_table,
            error=str(e),
            error_type=type(e).__name__
        )
        raise DatabaseError("connect", str(e), details={"table": settings.sessions_table}) from e

    logger.info("supabase_connected", table=settings.sessions_table)
    return client


def check_connection() -> dict:
    """
    Health of the session store.

    Returns:
        {"status": "healthy", "sessions_count": n} or {"status": "unhealthy", "error": ...}
    """
    try:
        sessions = (
            get_supabase_client()
            .table(settings.sessions_table)
            .select("id", count="exact")
            .execute()
        )
    except Exception as e:
        return {"status": "unhealthy", "error": str(e)}

    return {"status": "healthy", "sessions_count": sessions.count}
