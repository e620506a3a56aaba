"""
Akeneo import API routes.

One set of routes serves all four resource types:
    GET  /api/akeneo/{resource}                 one listing page
    POST /api/akeneo/{resource}/import          single item from a form
    POST /api/akeneo/{resource}/bulk-import     selected items as one job
    GET  /api/akeneo/{resource}/import-status   running job, if any

Handlers are sync so outbound calls run in the threadpool.
"""

from typing import Any, Optional
from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
import structlog

from models.importing import BulkImportRequest, ImportOutcome, SingleImportResponse
from models.listing import ListingPage
from models.resource import IMPORT_FORMS, ResourceType
from models.session import ShopSession
from routes.dependencies import get_catalog_service, get_import_service, get_shop_session
from services.catalog_service import CatalogService
from services.import_service import ImportService, get_job_registry
from exceptions import AppError, ValidationError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/akeneo", tags=["Akeneo"])


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

@router.get("/{resource}", response_model=ListingPage)
def list_resource(
    resource: ResourceType,
    page: int = Query(1, ge=1, description="Page number"),
    category: Optional[str] = Query(None, description="Category code (products only)"),
    catalog: CatalogService = Depends(get_catalog_service)
):
    """
    List one page of Akeneo items.

    Raises:
        503: Akeneo unreachable, misconfigured or rejecting credentials
    """
    try:
        return catalog.fetch_page(resource, page=page, category=category)
    except Exception as e:
        return handle_error(e)


@router.post("/{resource}/import", response_model=SingleImportResponse)
def import_single(
    resource: ResourceType,
    payload: dict[str, Any] = Body(..., description="Single import form"),
    importer: ImportService = Depends(get_import_service)
):
    """
    Create one item in Shopify from form values.

    Raises:
        400: Shopify rejected the item
        422: Missing mandatory information
    """
    try:
        try:
            form = IMPORT_FORMS[resource].model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError(
                code="INVALID_FORM",
                message=f"Invalid {resource.singular} form",
                details={"error": str(e)}
            )

        result = importer.import_form(resource, form)
        return SingleImportResponse(code=result.code, shopify_id=result.shopify_id)

    except Exception as e:
        return handle_error(e)


@router.post("/{resource}/bulk-import", response_model=ImportOutcome)
def bulk_import(
    resource: ResourceType,
    data: BulkImportRequest,
    session: ShopSession = Depends(get_shop_session),
    importer: ImportService = Depends(get_import_service)
):
    """
    Import the selected items as one job.

    Item failures are reported per item and never abort the job.

    Raises:
        409: A job for this resource is already running
        422: Empty, invalid or duplicate selection
    """
    try:
        return importer.submit_bulk(session.id, resource, data.items)
    except Exception as e:
        return handle_error(e)


@router.get("/{resource}/import-status")
def import_status(
    resource: ResourceType,
    session: ShopSession = Depends(get_shop_session)
):
    """Whether a bulk job is running, so the UI can disable submission."""
    job = get_job_registry().get_running(session.id, resource)
    if job is None:
        return {"resource": resource.value, "running": False}
    return {
        "resource": resource.value,
        "running": True,
        "state": job.state.value,
        "position": job.position,
        "total": job.total,
    }
