"""Tests for the NCBI Entrez client.

Unit tests mock the HTTP session. Integration tests call the live API.
"""

import os
from unittest.mock import MagicMock, patch

import pytest
import requests

from taxonomy_finder.clients.entrez import (
    NCBI_EUTILS_BASE_URL,
    RATE_LIMIT_DELAY_NO_KEY,
    RATE_LIMIT_DELAY_WITH_KEY,
    EntrezClient,
)


def _response(json_data: dict | None = None, content: bytes = b"", status: int = 200) -> MagicMock:
    response = MagicMock(spec=requests.Response)
    response.status_code = status
    response.content = content
    response.json.return_value = json_data
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} error", response=response)
    return response


@pytest.fixture
def client() -> EntrezClient:
    """Client without API key or email, no rate limit delay."""
    env = {k: v for k, v in os.environ.items() if k not in ("NCBI_API_KEY", "NCBI_EMAIL")}
    with patch.dict(os.environ, env, clear=True):
        return EntrezClient(rate_limit_delay=0)


class TestEntrezClientInit:
    """Tests for EntrezClient initialization."""

    def test_rate_limit_without_key(self) -> None:
        """Test the default delay when no API key is configured."""
        env = {k: v for k, v in os.environ.items() if k != "NCBI_API_KEY"}
        with patch.dict(os.environ, env, clear=True):
            client = EntrezClient()
        assert client.api_key is None
        assert client.rate_limit_delay == RATE_LIMIT_DELAY_NO_KEY

    def test_api_key_from_env(self) -> None:
        """Test that NCBI_API_KEY is picked up and shortens the delay."""
        with patch.dict(os.environ, {"NCBI_API_KEY": "env-key"}):
            client = EntrezClient()
        assert client.api_key == "env-key"
        assert client.rate_limit_delay == RATE_LIMIT_DELAY_WITH_KEY

    def test_custom_settings(self) -> None:
        client = EntrezClient(api_key="k", email="me@example.org", rate_limit_delay=1.0, timeout=60.0)
        assert client.email == "me@example.org"
        assert client.rate_limit_delay == 1.0
        assert client.timeout == 60.0


class TestEntrezClientRequests:
    """Tests for esearch/efetch/esummary with a mocked session."""

    def test_esearch_returns_id_list(self, client: EntrezClient) -> None:
        """Test that esearch returns the idlist as strings."""
        with patch.object(
            client._session, "get", return_value=_response({"esearchresult": {"idlist": ["562", 563]}})
        ) as mock_get:
            ids = client.esearch("taxonomy", "Escherichia coli")

        assert ids == ["562", "563"]
        url = mock_get.call_args.args[0]
        params = mock_get.call_args.kwargs["params"]
        assert url == f"{NCBI_EUTILS_BASE_URL}/esearch.fcgi"
        assert params["db"] == "taxonomy"
        assert params["term"] == "Escherichia coli"
        assert params["retmode"] == "json"
        assert params["tool"] == "taxonomy-finder"
        assert "api_key" not in params

    def test_esearch_empty(self, client: EntrezClient) -> None:
        """Test that a missing idlist gives an empty list."""
        with patch.object(client._session, "get", return_value=_response({"esearchresult": {}})):
            assert client.esearch("taxonomy", "nothing") == []

    def test_api_key_and_email_sent(self) -> None:
        """Test that configured credentials are added to every request."""
        client = EntrezClient(api_key="secret", email="me@example.org", rate_limit_delay=0)
        with patch.object(
            client._session, "get", return_value=_response({"esearchresult": {"idlist": []}})
        ) as mock_get:
            client.esearch("assembly", "x")

        params = mock_get.call_args.kwargs["params"]
        assert params["api_key"] == "secret"
        assert params["email"] == "me@example.org"

    def test_efetch_returns_bytes(self, client: EntrezClient) -> None:
        with patch.object(client._session, "get", return_value=_response(content=b"<TaxaSet/>")) as mock_get:
            body = client.efetch("taxonomy", "562")

        assert body == b"<TaxaSet/>"
        assert mock_get.call_args.kwargs["params"]["id"] == "562"
        assert mock_get.call_args.kwargs["params"]["retmode"] == "xml"

    def test_esummary_returns_json(self, client: EntrezClient, assembly_summary: dict) -> None:
        with patch.object(client._session, "get", return_value=_response(assembly_summary)):
            data = client.esummary("assembly", "79781")

        assert data["result"]["79781"]["gc"] == "50.8"

    def test_http_error_raises(self, client: EntrezClient) -> None:
        """Test that HTTP errors propagate as requests exceptions."""
        with (
            patch.object(client._session, "get", return_value=_response(status=500)),
            pytest.raises(requests.HTTPError),
        ):
            client.efetch("taxonomy", "562")

    def test_context_manager_closes_session(self) -> None:
        client = EntrezClient(rate_limit_delay=0)
        with patch.object(client._session, "close") as mock_close, client:
            pass
        mock_close.assert_called_once()


class TestEntrezClientIntegration:
    """Live E-utilities calls."""

    @pytest.mark.integration
    def test_esearch_taxonomy(self) -> None:
        with EntrezClient() as client:
            assert client.esearch("taxonomy", "Escherichia coli")[0] == "562"
