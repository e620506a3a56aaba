"""
Shop session store.

Reads shop sessions and saves the merchant's Akeneo connection settings.
Credentials are validated here, before any client is built.
"""

from typing import Optional
import structlog

from config import get_supabase_client, settings
from models.session import (
    AKENEO_FIELDS,
    SECRET_MASK,
    AkeneoCredentials,
    AkeneoSettingsUpdate,
    ShopSession,
)
from exceptions import (
    CatalogNotConfiguredError,
    DatabaseError,
    SessionNotFoundError,
)

logger = structlog.get_logger(__name__)

SECRET_FIELDS = ("akeneo_client_secret", "akeneo_password")


class SessionService:
    """
    Session store backed by the Supabase sessions table.

    Rows are created by the app installation flow; this service only reads
    them and updates the Akeneo columns.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = settings.sessions_table

    # ===================
    # READ OPERATIONS
    # ===================

    def get_session(self, session_id: str) -> ShopSession:
        """
        Get session by ID.

        Args:
            session_id: Session ID

        Returns:
            ShopSession

        Raises:
            SessionNotFoundError: If the session doesn't exist
        """
        logger.debug("getting_session", session_id=session_id)

        try:
            response = (
                self.db.table(self.table)
                .select("*")
                .eq("id", session_id)
                .execute()
            )

            if not response.data:
                raise SessionNotFoundError(session_id)

            return ShopSession(**response.data[0])

        except SessionNotFoundError:
            raise
        except Exception as e:
            logger.error("session_get_failed", session_id=session_id, error=str(e))
            raise DatabaseError("select", str(e))

    def get_akeneo_credentials(self, session: ShopSession) -> AkeneoCredentials:
        """
        Extract complete Akeneo credentials from a session.

        Raises:
            CatalogNotConfiguredError: If any credential is missing or blank
        """
        missing = session.missing_akeneo_fields()
        if missing:
            logger.warning(
                "akeneo_not_configured",
                session_id=session.id,
                missing=missing
            )
            raise CatalogNotConfiguredError(missing)

        return AkeneoCredentials(
            url=session.akeneo_url,
            client_id=session.akeneo_client_id,
            client_secret=session.akeneo_client_secret,
            username=session.akeneo_username,
            password=session.akeneo_password,
        )

    # ===================
    # UPDATE OPERATIONS
    # ===================

    def update_akeneo_settings(
        self,
        session_id: str,
        data: AkeneoSettingsUpdate
    ) -> ShopSession:
        """
        Save Akeneo connection settings.

        A secret submitted as the mask shown by the settings page keeps
        its stored value.

        Args:
            session_id: Session ID
            data: Settings form values

        Returns:
            Updated session

        Raises:
            SessionNotFoundError: If the session doesn't exist
        """
        logger.info("updating_akeneo_settings", session_id=session_id)

        current = self.get_session(session_id)

        values = data.model_dump(include=set(AKENEO_FIELDS))
        for field in SECRET_FIELDS:
            if values.get(field) == SECRET_MASK:
                values[field] = getattr(current, field)

        try:
            response = (
                self.db.table(self.table)
                .update(values)
                .eq("id", session_id)
                .execute()
            )

            if not response.data:
                raise SessionNotFoundError(session_id)

            logger.info(
                "akeneo_settings_updated",
                session_id=session_id,
                configured=not ShopSession(**response.data[0]).missing_akeneo_fields()
            )
            return ShopSession(**response.data[0])

        except SessionNotFoundError:
            raise
        except Exception as e:
            logger.error("akeneo_settings_update_failed", session_id=session_id, error=str(e))
            raise DatabaseError("update", str(e))

    def list_shops(self) -> list[str]:
        """Distinct shop domains with a stored session."""
        try:
            response = self.db.table(self.table).select("shop").execute()
            return sorted({row["shop"] for row in response.data if row.get("shop")})
        except Exception as e:
            logger.error("list_shops_failed", error=str(e))
            raise DatabaseError("select", str(e))


# Singleton instance
_session_service: Optional[SessionService] = None


def get_session_service() -> SessionService:
    """Get or create SessionService instance."""
    global _session_service
    if _session_service is None:
        _session_service = SessionService()
    return _session_service
