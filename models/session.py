"""
Shop session schemas.

A session row belongs to one installed shop and carries both the Shopify
access token and the merchant's Akeneo connection settings.
"""

from typing import Optional
from pydantic import Field

from models.base import BaseSchema


AKENEO_FIELDS = (
    "akeneo_url",
    "akeneo_client_id",
    "akeneo_client_secret",
    "akeneo_username",
    "akeneo_password",
)

SECRET_MASK = "********"


class ShopSession(BaseSchema):
    """Row of the sessions table."""

    id: str = Field(..., description="Session ID")
    shop: str = Field(..., description="Shop domain, e.g. example.myshopify.com")
    access_token: Optional[str] = Field(None, description="Shopify Admin API token")
    akeneo_url: Optional[str] = None
    akeneo_client_id: Optional[str] = None
    akeneo_client_secret: Optional[str] = None
    akeneo_username: Optional[str] = None
    akeneo_password: Optional[str] = None

    def missing_akeneo_fields(self) -> list[str]:
        """Akeneo fields that are absent or blank."""
        return [
            name for name in AKENEO_FIELDS
            if not (getattr(self, name) or "").strip()
        ]


class AkeneoCredentials(BaseSchema):
    """Complete set of Akeneo connection credentials."""

    url: str = Field(..., min_length=1)
    client_id: str = Field(..., min_length=1)
    client_secret: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @property
    def base_url(self) -> str:
        return self.url.rstrip("/")


class AkeneoSettingsUpdate(BaseSchema):
    """Settings form payload. Blank values are stored as given."""

    akeneo_url: str = Field("", max_length=500)
    akeneo_client_id: str = Field("", max_length=255)
    akeneo_client_secret: str = Field("", max_length=255)
    akeneo_username: str = Field("", max_length=255)
    akeneo_password: str = Field("", max_length=255)


class AkeneoSettingsResponse(BaseSchema):
    """Akeneo settings as shown on the settings page (secrets masked)."""

    akeneo_url: Optional[str] = None
    akeneo_client_id: Optional[str] = None
    akeneo_client_secret: Optional[str] = None
    akeneo_username: Optional[str] = None
    akeneo_password: Optional[str] = None
    configured: bool = False
    sync_interval_hours: int
    message: Optional[str] = None

    @classmethod
    def from_session(
        cls,
        session: ShopSession,
        sync_interval_hours: int,
        message: Optional[str] = None
    ) -> "AkeneoSettingsResponse":
        return cls(
            akeneo_url=session.akeneo_url,
            akeneo_client_id=session.akeneo_client_id,
            akeneo_client_secret=SECRET_MASK if session.akeneo_client_secret else None,
            akeneo_username=session.akeneo_username,
            akeneo_password=SECRET_MASK if session.akeneo_password else None,
            configured=not session.missing_akeneo_fields(),
            sync_interval_hours=sync_interval_hours,
            message=message,
        )
