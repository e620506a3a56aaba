"""
Business logic services.

Each service handles one domain area.
"""

from services.session_service import SessionService, get_session_service
from services.catalog_service import CatalogService, build_category_search
from services.import_service import (
    ImportService,
    ImportJob,
    ImportJobRegistry,
    JobState,
    get_job_registry,
)
from services.resource_mapping import (
    CreateOperation,
    MappingContext,
    get_create_operation,
    map_attribute_type,
)
from services.sync_service import trigger_sync, trigger_sync_for_shops, describe_schedule

__all__ = [
    "SessionService",
    "get_session_service",
    "CatalogService",
    "build_category_search",
    "ImportService",
    "ImportJob",
    "ImportJobRegistry",
    "JobState",
    "get_job_registry",
    "CreateOperation",
    "MappingContext",
    "get_create_operation",
    "map_attribute_type",
    "trigger_sync",
    "trigger_sync_for_shops",
    "describe_schedule",
]
