"""
Shared test fixtures.
"""

import os
import sys
from pathlib import Path

# Add project root to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Settings are loaded at import time
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

import pytest
from unittest.mock import MagicMock, patch
from datetime import datetime
from typing import Generator

from tests.factories import SessionFactory

# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


class MockSupabaseQuery:
    """Mock Supabase query builder with chainable methods."""

    def __init__(self, data: list = None, count: int = None, table: "MockSupabaseTable" = None):
        self._data = data or []
        self._count = count
        self._table = table
        self._is_update = False

    def select(self, *args, **kwargs):
        return self

    def update(self, data):
        # Merge into rows; eq() narrows which rows are returned and stored
        self._data = [
            {**item, **data, "updated_at": datetime.utcnow().isoformat() + "Z"}
            for item in self._data
        ]
        self._is_update = True
        return self

    def eq(self, column, value):
        self._data = [row for row in self._data if row.get(column) == value]
        return self

    def order(self, column, **kwargs):
        return self

    def limit(self, count):
        self._data = self._data[:count]
        return self

    def execute(self) -> MockSupabaseResponse:
        if self._is_update and self._table is not None:
            self._table.apply_update(self._data)
        return MockSupabaseResponse(
            data=self._data,
            count=self._count if self._count is not None else len(self._data)
        )


class MockSupabaseTable:
    """Mock Supabase table with configurable responses."""

    def __init__(self, data: list = None, count: int = None):
        self._data = data if data is not None else []
        self._count = count
        self.updates: list[list] = []

    def select(self, *args, **kwargs):
        return MockSupabaseQuery([dict(row) for row in self._data], self._count, self)

    def update(self, data):
        query = MockSupabaseQuery([dict(row) for row in self._data], self._count, self)
        return query.update(data)

    def apply_update(self, rows: list):
        self.updates.append(rows)
        by_id = {row.get("id"): row for row in rows}
        for index, row in enumerate(self._data):
            if row.get("id") in by_id:
                self._data[index] = by_id[row.get("id")]


class MockSupabaseClient:
    """Mock Supabase client."""

    def __init__(self):
        self._tables: dict[str, MockSupabaseTable] = {}

    def set_table_data(self, table_name: str, data: list, count: int = None):
        """Configure mock data for a table."""
        self._tables[table_name] = MockSupabaseTable(data, count)

    def table(self, name: str) -> MockSupabaseTable:
        """Get mock table."""
        if name not in self._tables:
            self._tables[name] = MockSupabaseTable()
        return self._tables[name]


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("sessions", [SessionFactory.create()])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database client with mock.

    Usage:
        def test_something(mock_db, mock_supabase):
            mock_supabase.set_table_data("sessions", [...])
            # Now any code using get_supabase_client() gets the mock
    """
    with patch("config.database.get_supabase_client", return_value=mock_supabase):
        with patch("services.session_service.get_supabase_client", return_value=mock_supabase):
            yield mock_supabase


@pytest.fixture
def session_service(mock_db):
    """
    SessionService bound to the mock database.

    Resets the module singleton so routes resolve the same instance.
    """
    with patch("services.session_service._session_service", None):
        from services.session_service import get_session_service
        yield get_session_service()


@pytest.fixture
def sample_session() -> dict:
    """Session row with complete Akeneo credentials."""
    return SessionFactory.create(id="offline_example")


@pytest.fixture
def mock_akeneo_client() -> MagicMock:
    """AkeneoClient stand-in; set .list.return_value / side_effect per test."""
    from integrations.akeneo import AkeneoClient
    return MagicMock(spec=AkeneoClient)


@pytest.fixture
def mock_shopify_client() -> MagicMock:
    """ShopifyClient stand-in; set .graphql.side_effect per test."""
    from integrations.shopify import ShopifyClient
    client = MagicMock(spec=ShopifyClient)
    client.shop = "example.myshopify.com"
    return client


@pytest.fixture
def job_registry():
    """Fresh job registry so tests never share running jobs."""
    from services.import_service import ImportJobRegistry
    return ImportJobRegistry()


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)


@pytest.fixture
def api_client(sample_session, mock_akeneo_client, mock_shopify_client, job_registry):
    """
    Test client with session, Akeneo and Shopify dependencies overridden.

    Usage:
        def test_endpoint(api_client, mock_akeneo_client):
            mock_akeneo_client.list.return_value = AkeneoFactory.listing([...])
            response = api_client.get("/api/akeneo/attributes", headers=SESSION_HEADERS)
    """
    from fastapi.testclient import TestClient
    from main import app
    from models.session import ShopSession
    from routes.dependencies import get_catalog_service, get_import_service, get_shop_session
    from services.catalog_service import CatalogService
    from services.import_service import ImportService

    session = ShopSession(**sample_session)

    app.dependency_overrides[get_shop_session] = lambda: session
    app.dependency_overrides[get_catalog_service] = lambda: CatalogService(mock_akeneo_client)
    app.dependency_overrides[get_import_service] = lambda: ImportService(
        mock_shopify_client, registry=job_registry
    )
    with patch("routes.akeneo.get_job_registry", return_value=job_registry):
        yield TestClient(app)
    app.dependency_overrides.clear()
