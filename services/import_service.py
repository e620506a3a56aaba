"""
Import service: creates Shopify resources from selected Akeneo items.

Bulk policy is continue-and-aggregate: every item is submitted in order,
one GraphQL call at a time, and every outcome is reported. Earlier
successes are never rolled back and nothing is retried. Re-submitting a
code that was already imported makes a second create attempt.
"""

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional
import structlog
from pydantic import BaseModel, ValidationError as PydanticValidationError

from config import settings
from integrations.shopify import ShopifyClient, ShopifyError
from models.importing import ImportItemResult, ImportOutcome
from models.resource import IMPORT_FORMS, ResourceType, SourceItem, parse_item
from services.resource_mapping import MappingContext, get_create_operation
from exceptions import (
    AppError,
    DuplicateSelectionError,
    EmptySelectionError,
    ExternalServiceError,
    ImportInProgressError,
    MissingFieldsError,
    RemoteRejectedError,
    ValidationError,
)

logger = structlog.get_logger(__name__)


# ===================
# JOB TRACKING
# ===================

class JobState(str, Enum):
    """Lifecycle of one bulk job."""
    READY = "ready"
    SUBMITTING = "submitting"
    COMPLETED = "completed"


@dataclass
class ImportJob:
    """One bulk submission. Consumed once, then dropped."""
    session_id: str
    resource: ResourceType
    items: list
    state: JobState = JobState.READY
    position: int = 0
    results: list[ImportItemResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.items)


class ImportJobRegistry:
    """
    Running bulk jobs, at most one per (session, resource).

    Process-wide; guarded by a lock since importer routes run in the
    threadpool.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._running: dict[tuple[str, ResourceType], ImportJob] = {}

    @contextmanager
    def claim(self, job: ImportJob) -> Iterator[ImportJob]:
        key = (job.session_id, job.resource)
        with self._lock:
            if key in self._running:
                raise ImportInProgressError(job.resource.value)
            self._running[key] = job
        try:
            yield job
        finally:
            with self._lock:
                self._running.pop(key, None)

    def get_running(self, session_id: str, resource: ResourceType) -> Optional[ImportJob]:
        with self._lock:
            return self._running.get((session_id, resource))


_registry = ImportJobRegistry()


def get_job_registry() -> ImportJobRegistry:
    """Get the process-wide job registry."""
    return _registry


# ===================
# SERVICE
# ===================

class ImportService:
    """
    Submits Akeneo items to one shop.

    Built per request around that request's ShopifyClient.
    """

    def __init__(
        self,
        client: ShopifyClient,
        registry: Optional[ImportJobRegistry] = None,
        context: Optional[MappingContext] = None
    ):
        self.client = client
        self.registry = registry or get_job_registry()
        self.context = context or MappingContext(
            label_locale=settings.akeneo_label_locale,
            metafield_namespace=settings.metafield_namespace,
        )

    # ===================
    # SINGLE ITEM
    # ===================

    def submit_single(self, resource: ResourceType, item: SourceItem) -> ImportItemResult:
        """
        Create one item in Shopify.

        Validates the mapped fields before making exactly one GraphQL call.

        Returns:
            Success, or failure carrying the first user error Shopify reported

        Raises:
            MissingFieldsError: If a required mapped field is empty (no call is made)
            ExternalServiceError: If Shopify cannot be reached or errors at the top level
        """
        operation = get_create_operation(resource)
        variables = operation.variables_for(item, self.context)

        missing = operation.missing_fields(variables)
        if missing:
            logger.warning(
                "import_item_invalid",
                resource=resource.value,
                code=item.key,
                missing=missing
            )
            raise MissingFieldsError(missing, details={"code": item.key})

        try:
            data = self.client.graphql(operation.document, variables)
        except ShopifyError as e:
            raise ExternalServiceError("shopify", str(e), details={"code": item.key})

        payload = data.get(operation.mutation)
        if not isinstance(payload, dict):
            return ImportItemResult.failed(
                item.key, f"Shopify returned no result for {operation.mutation}"
            )

        user_errors = payload.get("userErrors") or []
        if user_errors:
            first = user_errors[0]
            if isinstance(first, dict):
                message = first.get("message") or "Unknown error"
            else:
                message = str(first) or "Unknown error"
            logger.info(
                "import_item_rejected",
                resource=resource.value,
                code=item.key,
                error=message,
                error_count=len(user_errors)
            )
            return ImportItemResult.failed(item.key, message)

        created = payload.get(operation.result_field) or {}
        logger.info(
            "import_item_created",
            resource=resource.value,
            code=item.key,
            shopify_id=created.get("id")
        )
        return ImportItemResult.ok(item.key, created.get("id"))

    def import_form(self, resource: ResourceType, form: BaseModel) -> ImportItemResult:
        """
        Single import from a form submission.

        Raises:
            MissingFieldsError: If any form field is blank
            RemoteRejectedError: If Shopify reports a user error
            ExternalServiceError: If Shopify cannot be reached
        """
        if not isinstance(form, IMPORT_FORMS[resource]):
            raise ValidationError(
                code="INVALID_FORM",
                message=f"Invalid {resource.singular} form"
            )

        values = form.model_dump()
        missing = [name for name, value in values.items() if not str(value or "").strip()]
        if missing:
            raise MissingFieldsError(missing)

        result = self.submit_single(resource, form.to_item(self.context.label_locale))
        if not result.success:
            raise RemoteRejectedError(result.error, details={"code": result.code})
        return result

    # ===================
    # BULK
    # ===================

    def parse_selection(self, resource: ResourceType, raw_items: list[dict]) -> list[SourceItem]:
        """
        Validate the selected items of a bulk request.

        Raises:
            EmptySelectionError: If nothing is selected
            ValidationError: If an item is not a valid Akeneo payload
            DuplicateSelectionError: If a code appears twice
        """
        if not raw_items:
            raise EmptySelectionError(resource.value)

        items = []
        for index, raw in enumerate(raw_items):
            try:
                items.append(parse_item(resource, raw))
            except PydanticValidationError as e:
                raise ValidationError(
                    code="INVALID_ITEM",
                    message=f"Invalid {resource.singular} in selection",
                    details={"index": index, "error": str(e)}
                )

        seen: set[str] = set()
        duplicates = []
        for item in items:
            if item.key in seen:
                duplicates.append(item.key)
            seen.add(item.key)
        if duplicates:
            raise DuplicateSelectionError(resource.value, duplicates)

        return items

    def submit_bulk(
        self,
        session_id: str,
        resource: ResourceType,
        raw_items: list[dict]
    ) -> ImportOutcome:
        """
        Submit every selected item, in order, and aggregate the outcomes.

        One item failing never stops its siblings.

        Returns:
            ImportOutcome with one result per item, in submission order

        Raises:
            EmptySelectionError, ValidationError, DuplicateSelectionError: Bad selection
            ImportInProgressError: Another job for this session and resource is running
        """
        items = self.parse_selection(resource, raw_items)
        job = ImportJob(session_id=session_id, resource=resource, items=items)

        logger.info(
            "bulk_import_started",
            session_id=session_id,
            resource=resource.value,
            total=job.total
        )

        with self.registry.claim(job):
            job.state = JobState.SUBMITTING
            for index, item in enumerate(job.items):
                job.position = index
                try:
                    result = self.submit_single(resource, item)
                except AppError as e:
                    result = ImportItemResult.failed(item.key, e.message)
                except Exception as e:
                    logger.error(
                        "bulk_import_item_failed",
                        session_id=session_id,
                        resource=resource.value,
                        code=item.key,
                        error=str(e),
                        error_type=type(e).__name__
                    )
                    result = ImportItemResult.failed(item.key, str(e))
                job.results.append(result)
            job.state = JobState.COMPLETED

        outcome = ImportOutcome(resource=resource, results=job.results)

        logger.info(
            "bulk_import_completed",
            session_id=session_id,
            resource=resource.value,
            succeeded=outcome.succeeded_count,
            failed=outcome.failed_count
        )
        return outcome
