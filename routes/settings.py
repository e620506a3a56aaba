"""
Settings API routes.

Akeneo connection settings for the caller's shop session.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import structlog

from config import settings
from models.session import AkeneoSettingsResponse, AkeneoSettingsUpdate, ShopSession
from routes.dependencies import get_shop_session
from services.session_service import get_session_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# ROUTES
# ===================

@router.get("/akeneo", response_model=AkeneoSettingsResponse)
async def get_akeneo_settings(session: ShopSession = Depends(get_shop_session)):
    """
    Get Akeneo connection settings.

    Secrets are masked.
    """
    return AkeneoSettingsResponse.from_session(session, settings.sync_interval_hours)


@router.put("/akeneo", response_model=AkeneoSettingsResponse)
async def update_akeneo_settings(
    data: AkeneoSettingsUpdate,
    session: ShopSession = Depends(get_shop_session)
):
    """
    Save Akeneo connection settings.

    Submitting the masked value for a secret keeps the stored secret.
    """
    try:
        service = get_session_service()
        updated = service.update_akeneo_settings(session.id, data)
        return AkeneoSettingsResponse.from_session(
            updated,
            settings.sync_interval_hours,
            message="Settings saved!"
        )

    except Exception as e:
        return handle_error(e)
