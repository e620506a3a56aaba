"""
Unit tests for AkeneoClient.

The HTTP session is mocked; no request leaves the process.

Run: pytest tests/unit/test_akeneo_client.py -v
"""

import pytest
import requests
from unittest.mock import MagicMock

from integrations.akeneo import AkeneoAuthError, AkeneoClient, AkeneoError
from models.session import AkeneoCredentials

from tests.factories import AkeneoFactory


def make_response(status_code=200, body=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body if body is not None else {}
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status_code} Error")
    return response


@pytest.fixture
def credentials():
    return AkeneoCredentials(
        url="https://pim.example.com/",
        client_id="client-id",
        client_secret="client-secret",
        username="admin",
        password="secret",
    )


@pytest.fixture
def http():
    return MagicMock(spec=requests.Session)


class TestAuthenticate:
    """Tests for AkeneoClient.authenticate()"""

    def test_password_grant_with_basic_auth(self, credentials, http):
        http.post.return_value = make_response(body={"access_token": "token-1"})
        client = AkeneoClient(credentials, timeout=5, http=http)

        token = client.authenticate()

        assert token == "token-1"
        url = http.post.call_args.args[0]
        kwargs = http.post.call_args.kwargs
        assert url == "https://pim.example.com/api/oauth/v1/token"
        assert kwargs["auth"] == ("client-id", "client-secret")
        assert kwargs["json"] == {"grant_type": "password", "username": "admin", "password": "secret"}
        assert kwargs["timeout"] == 5

    @pytest.mark.parametrize("status_code", [400, 401, 403, 422])
    def test_rejected_credentials(self, credentials, http, status_code):
        http.post.return_value = make_response(status_code=status_code)
        client = AkeneoClient(credentials, http=http)

        with pytest.raises(AkeneoAuthError):
            client.authenticate()

    def test_server_error_is_not_an_auth_error(self, credentials, http):
        http.post.return_value = make_response(status_code=500)
        client = AkeneoClient(credentials, http=http)

        with pytest.raises(AkeneoError) as exc_info:
            client.authenticate()

        assert not isinstance(exc_info.value, AkeneoAuthError)

    def test_unreachable(self, credentials, http):
        http.post.side_effect = requests.exceptions.ConnectionError("Connection refused")
        client = AkeneoClient(credentials, http=http)

        with pytest.raises(AkeneoError) as exc_info:
            client.authenticate()

        assert "Connection refused" in str(exc_info.value)

    def test_missing_token(self, credentials, http):
        http.post.return_value = make_response(body={"token_type": "bearer"})
        client = AkeneoClient(credentials, http=http)

        with pytest.raises(AkeneoAuthError):
            client.authenticate()


class TestList:
    """Tests for AkeneoClient.list()"""

    def test_sends_bearer_token_and_paging(self, credentials, http):
        body = AkeneoFactory.listing([AkeneoFactory.attribute("color")])
        http.post.return_value = make_response(body={"access_token": "token-1"})
        http.get.return_value = make_response(body=body)
        client = AkeneoClient(credentials, http=http)

        payload = client.list("attributes", page=2, limit=10)

        assert payload == body
        url = http.get.call_args.args[0]
        kwargs = http.get.call_args.kwargs
        assert url == "https://pim.example.com/api/rest/v1/attributes"
        assert kwargs["params"] == {"page": 2, "limit": 10}
        assert kwargs["headers"]["Authorization"] == "Bearer token-1"

    def test_optional_params(self, credentials, http):
        http.post.return_value = make_response(body={"access_token": "token-1"})
        http.get.return_value = make_response(body=AkeneoFactory.listing([]))
        client = AkeneoClient(credentials, http=http)
        search = '{"categories":[{"operator":"IN","value":["summer"]}]}'

        client.list("products", page=1, limit=10, locales="nl_NL", search=search)

        assert http.get.call_args.kwargs["params"] == {
            "page": 1,
            "limit": 10,
            "locales": "nl_NL",
            "search": search,
        }

    def test_token_is_reused(self, credentials, http):
        http.post.return_value = make_response(body={"access_token": "token-1"})
        http.get.return_value = make_response(body=AkeneoFactory.listing([]))
        client = AkeneoClient(credentials, http=http)

        client.list("families", page=1)
        client.list("families", page=2)

        assert http.post.call_count == 1
        assert http.get.call_count == 2

    def test_http_error(self, credentials, http):
        http.post.return_value = make_response(body={"access_token": "token-1"})
        http.get.return_value = make_response(status_code=502)
        client = AkeneoClient(credentials, http=http)

        with pytest.raises(AkeneoError):
            client.list("categories")

    def test_invalid_json(self, credentials, http):
        response = make_response(body={})
        response.json.side_effect = ValueError("Expecting value")
        http.post.return_value = make_response(body={"access_token": "token-1"})
        http.get.return_value = response
        client = AkeneoClient(credentials, http=http)

        with pytest.raises(AkeneoError):
            client.list("categories")

    def test_auth_failure_propagates(self, credentials, http):
        http.post.return_value = make_response(status_code=401)
        client = AkeneoClient(credentials, http=http)

        with pytest.raises(AkeneoAuthError):
            client.list("attributes")

        http.get.assert_not_called()
