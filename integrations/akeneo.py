"""
Akeneo PIM REST client.

Authenticates with the OAuth password grant and reads paged listings.
One client is built per request from the shop's stored credentials.
"""

from typing import Optional
import requests
import structlog

from models.session import AkeneoCredentials

logger = structlog.get_logger(__name__)


TOKEN_PATH = "/api/oauth/v1/token"
REST_PATH = "/api/rest/v1"


class AkeneoError(Exception):
    """Akeneo API error."""
    pass


class AkeneoAuthError(AkeneoError):
    """Akeneo refused the credentials."""
    pass


class AkeneoClient:
    """
    Minimal Akeneo REST client.

    Usage:
        client = AkeneoClient(credentials, timeout=30)
        payload = client.list("attributes", page=1, limit=10)
    """

    def __init__(
        self,
        credentials: AkeneoCredentials,
        timeout: float = 30,
        http: Optional[requests.Session] = None
    ):
        self.credentials = credentials
        self.timeout = timeout
        self.http = http or requests.Session()
        self._access_token: Optional[str] = None

    @property
    def base_url(self) -> str:
        return self.credentials.base_url

    def authenticate(self) -> str:
        """
        Request an access token.

        Returns:
            Access token string

        Raises:
            AkeneoAuthError: If Akeneo rejects the credentials
            AkeneoError: If Akeneo cannot be reached
        """
        url = f"{self.base_url}{TOKEN_PATH}"

        payload = {
            "grant_type": "password",
            "username": self.credentials.username,
            "password": self.credentials.password,
        }

        try:
            logger.info("akeneo_authenticating", url=self.base_url[:30] + "...")

            response = self.http.post(
                url,
                json=payload,
                auth=(self.credentials.client_id, self.credentials.client_secret),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error("akeneo_auth_request_failed", error=str(e))
            raise AkeneoError(f"Failed to reach Akeneo: {str(e)}")

        if response.status_code in (400, 401, 403, 422):
            logger.warning("akeneo_auth_rejected", status_code=response.status_code)
            raise AkeneoAuthError(
                f"Akeneo rejected the credentials (HTTP {response.status_code})"
            )

        try:
            response.raise_for_status()
            token = response.json().get("access_token")
        except requests.exceptions.RequestException as e:
            logger.error("akeneo_auth_failed", error=str(e))
            raise AkeneoError(f"Akeneo authentication failed: {str(e)}")
        except ValueError as e:
            raise AkeneoError(f"Akeneo returned an invalid token response: {str(e)}")

        if not token:
            raise AkeneoAuthError("Akeneo did not return an access token")

        self._access_token = token
        logger.info("akeneo_authenticated")
        return token

    def list(
        self,
        resource: str,
        page: int = 1,
        limit: int = 10,
        locales: Optional[str] = None,
        search: Optional[str] = None
    ) -> dict:
        """
        Fetch one page of a resource listing.

        Args:
            resource: attributes, categories, families or products
            page: 1-based page number
            limit: Items per page
            locales: Comma-separated locales to restrict values to
            search: JSON-encoded Akeneo search filter

        Returns:
            Raw response body ({"_links": ..., "_embedded": {"items": [...]}})

        Raises:
            AkeneoAuthError: If authentication fails
            AkeneoError: If the request fails or the body is not JSON
        """
        token = self._access_token or self.authenticate()

        params: dict = {"page": page, "limit": limit}
        if locales:
            params["locales"] = locales
        if search:
            params["search"] = search

        url = f"{self.base_url}{REST_PATH}/{resource}"

        try:
            logger.debug("akeneo_list_request", resource=resource, page=page, limit=limit)

            response = self.http.get(
                url,
                params=params,
                headers={"Authorization": f"Bearer {token}"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()

        except requests.exceptions.RequestException as e:
            logger.error("akeneo_list_failed", resource=resource, page=page, error=str(e))
            raise AkeneoError(f"Failed to fetch {resource} from Akeneo: {str(e)}")
        except ValueError as e:
            logger.error("akeneo_invalid_json", resource=resource, page=page)
            raise AkeneoError(f"Akeneo returned invalid JSON for {resource}: {str(e)}")
