"""
Shopify Admin GraphQL client.

Sends one GraphQL operation per call. User errors inside a mutation
payload are returned to the caller; only transport and top-level
GraphQL errors raise.
"""

from typing import Any, Optional
import requests
import structlog

logger = structlog.get_logger(__name__)


class ShopifyError(Exception):
    """Shopify API error."""
    pass


def normalize_shop_domain(shop: str) -> str:
    """
    Normalize a shop domain.

    - "my-store" → "my-store.myshopify.com"
    - "https://my-store.myshopify.com/" → "my-store.myshopify.com"
    """
    domain = shop.strip().replace("https://", "").replace("http://", "").rstrip("/")
    if not domain.endswith(".myshopify.com"):
        domain = f"{domain}.myshopify.com"
    return domain


class ShopifyClient:
    """
    Admin API client bound to one shop.

    Usage:
        client = ShopifyClient("example.myshopify.com", token, "2024-10")
        data = client.graphql(MUTATION, {"name": "shoes"})
    """

    def __init__(
        self,
        shop: str,
        access_token: str,
        api_version: str,
        timeout: float = 30,
        http: Optional[requests.Session] = None
    ):
        self.shop = normalize_shop_domain(shop)
        self.access_token = access_token
        self.api_version = api_version
        self.timeout = timeout
        self.http = http or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"https://{self.shop}/admin/api/{self.api_version}/graphql.json"

    def graphql(self, query: str, variables: Optional[dict[str, Any]] = None) -> dict:
        """
        Execute a GraphQL operation.

        Args:
            query: GraphQL document
            variables: Operation variables

        Returns:
            The response `data` object

        Raises:
            ShopifyError: On transport failure, non-2xx status, or top-level errors
        """
        payload = {"query": query, "variables": variables or {}}

        try:
            response = self.http.post(
                self.endpoint,
                json=payload,
                headers={
                    "X-Shopify-Access-Token": self.access_token,
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json()

        except requests.exceptions.RequestException as e:
            logger.error("shopify_request_failed", shop=self.shop, error=str(e))
            raise ShopifyError(f"Failed to reach Shopify: {str(e)}")
        except ValueError as e:
            logger.error("shopify_invalid_json", shop=self.shop)
            raise ShopifyError(f"Shopify returned invalid JSON: {str(e)}")

        errors = body.get("errors")
        if errors:
            if isinstance(errors, list) and errors and isinstance(errors[0], dict):
                message = errors[0].get("message", "Unknown error")
            else:
                message = str(errors)
            logger.error("shopify_graphql_error", shop=self.shop, error=message)
            raise ShopifyError(f"Shopify API error: {message}")

        return body.get("data") or {}
