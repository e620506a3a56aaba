"""
Unit tests for SessionService.

Run: pytest tests/unit/test_session_service.py -v
"""

import pytest

from models.session import SECRET_MASK, AkeneoSettingsUpdate, ShopSession
from exceptions import CatalogNotConfiguredError, SessionNotFoundError

from tests.factories import SessionFactory


class TestGetSession:
    """Tests for SessionService.get_session()"""

    def test_returns_matching_row(self, session_service, mock_supabase, sample_session):
        mock_supabase.set_table_data("sessions", [SessionFactory.create(), sample_session])

        session = session_service.get_session("offline_example")

        assert session.id == "offline_example"
        assert session.shop == "example.myshopify.com"

    def test_unknown_session(self, session_service, mock_supabase):
        mock_supabase.set_table_data("sessions", [SessionFactory.create()])

        with pytest.raises(SessionNotFoundError):
            session_service.get_session("offline_missing")


class TestGetAkeneoCredentials:
    """Credentials are checked before any client is built."""

    def test_complete_credentials(self, session_service, sample_session):
        credentials = session_service.get_akeneo_credentials(ShopSession(**sample_session))

        assert credentials.url == "https://pim.example.com"
        assert credentials.username == "admin"

    @pytest.mark.parametrize("field", [
        "akeneo_url",
        "akeneo_client_id",
        "akeneo_client_secret",
        "akeneo_username",
        "akeneo_password",
    ])
    def test_any_missing_field_is_reported(self, session_service, field):
        session = ShopSession(**SessionFactory.create(**{field: None}))

        with pytest.raises(CatalogNotConfiguredError) as exc_info:
            session_service.get_akeneo_credentials(session)

        assert exc_info.value.status_code == 503
        assert exc_info.value.details["missing"] == [field]
        assert exc_info.value.details["redirect"] == "/app/settings"

    def test_blank_values_count_as_missing(self, session_service):
        session = ShopSession(**SessionFactory.create(akeneo_url="   ", akeneo_password=""))

        with pytest.raises(CatalogNotConfiguredError) as exc_info:
            session_service.get_akeneo_credentials(session)

        assert exc_info.value.details["missing"] == ["akeneo_url", "akeneo_password"]


class TestUpdateAkeneoSettings:
    """Tests for SessionService.update_akeneo_settings()"""

    def test_stores_new_values(self, session_service, mock_supabase, sample_session):
        mock_supabase.set_table_data("sessions", [sample_session])
        data = AkeneoSettingsUpdate(
            akeneo_url="https://new-pim.example.com",
            akeneo_client_id="new-id",
            akeneo_client_secret="new-secret",
            akeneo_username="editor",
            akeneo_password="new-password",
        )

        updated = session_service.update_akeneo_settings("offline_example", data)

        assert updated.akeneo_url == "https://new-pim.example.com"
        assert updated.akeneo_password == "new-password"
        assert session_service.get_session("offline_example").akeneo_username == "editor"

    def test_masked_secret_keeps_stored_value(self, session_service, mock_supabase, sample_session):
        mock_supabase.set_table_data("sessions", [sample_session])
        data = AkeneoSettingsUpdate(
            akeneo_url="https://pim.example.com",
            akeneo_client_id="client-id",
            akeneo_client_secret=SECRET_MASK,
            akeneo_username="admin",
            akeneo_password=SECRET_MASK,
        )

        updated = session_service.update_akeneo_settings("offline_example", data)

        assert updated.akeneo_client_secret == "client-secret"
        assert updated.akeneo_password == "secret"

    def test_only_target_row_changes(self, session_service, mock_supabase, sample_session):
        other = SessionFactory.create(id="offline_other", shop="other.myshopify.com")
        mock_supabase.set_table_data("sessions", [sample_session, other])

        session_service.update_akeneo_settings("offline_example", AkeneoSettingsUpdate(akeneo_url="https://x"))

        assert session_service.get_session("offline_other").akeneo_url == "https://pim.example.com"
        assert mock_supabase.table("sessions").updates[0][0]["id"] == "offline_example"

    def test_unknown_session(self, session_service, mock_supabase):
        mock_supabase.set_table_data("sessions", [])

        with pytest.raises(SessionNotFoundError):
            session_service.update_akeneo_settings("offline_missing", AkeneoSettingsUpdate())


class TestListShops:
    """Tests for SessionService.list_shops()"""

    def test_distinct_sorted_shops(self, session_service, mock_supabase):
        mock_supabase.set_table_data("sessions", [
            SessionFactory.create(shop="b.myshopify.com"),
            SessionFactory.create(shop="a.myshopify.com"),
            SessionFactory.create(shop="b.myshopify.com"),
        ])

        assert session_service.list_shops() == ["a.myshopify.com", "b.myshopify.com"]
