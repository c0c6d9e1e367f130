"""Tests for the BSN.cloud API functions."""

import base64
from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import Mock, patch

import httpx
import pytest
from pytest_httpx import HTTPXMock

from bsn_cloud import api
from bsn_cloud.config import BsnCloudConfig
from bsn_cloud.const import USER_AGENT
from bsn_cloud.exceptions import (
    BsnAuthError,
    BsnCloudError,
    BsnDecodeError,
    BsnEmptyResponseError,
    BsnHTTPStatusError,
    BsnTenantSelectionError,
    BsnTransportError,
)
from bsn_cloud.models import AccessToken, Network, Player

from .conftest import TEST_BASE_URL, TEST_NETWORK, TEST_TOKEN_URL

EXPECTED_NETWORK_COUNT = 2


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_http_status_error_keeps_status_and_body(self) -> None:
        """Test that BsnHTTPStatusError exposes the response details."""
        error = BsnHTTPStatusError("failed", 500, "oops")
        assert error.status_code == 500  # noqa: PLR2004
        assert error.body == "oops"
        assert str(error) == "failed"

    def test_auth_and_tenant_errors_are_status_errors(self) -> None:
        """Test that auth and tenant errors derive from BsnHTTPStatusError."""
        assert issubclass(BsnAuthError, BsnHTTPStatusError)
        assert issubclass(BsnTenantSelectionError, BsnHTTPStatusError)
        assert issubclass(BsnHTTPStatusError, BsnCloudError)
        assert issubclass(BsnDecodeError, BsnCloudError)


class TestCreateHeaders:
    """Tests for create_headers function."""

    def test_create_headers_returns_base_headers(self) -> None:
        """Test that create_headers returns base headers without auth."""
        headers = api.create_headers()
        assert headers["accept"] == "application/json"
        assert headers["user-agent"] == USER_AGENT
        assert "authorization" not in headers

    def test_create_headers_includes_bearer_token(self) -> None:
        """Test that create_headers includes the bearer token when provided."""
        headers = api.create_headers("abc")
        assert headers["authorization"] == "Bearer abc"


class TestValidateResponse:
    """Tests for validate_response function."""

    def test_validate_response_returns_body(self) -> None:
        """Test that validate_response returns the body of a 200 response."""
        response = httpx.Response(200, content=b'{"items": []}')
        assert api.validate_response(response) == b'{"items": []}'

    def test_validate_response_raises_status_error_with_body(self) -> None:
        """Test that an unexpected status raises BsnHTTPStatusError."""
        response = httpx.Response(403, content=b"forbidden")
        with pytest.raises(BsnHTTPStatusError, match="403") as exc_info:
            api.validate_response(response)
        assert exc_info.value.status_code == 403  # noqa: PLR2004
        assert exc_info.value.body == "forbidden"

    def test_validate_response_checks_status_before_body(self) -> None:
        """Test that an empty error response is a status error."""
        response = httpx.Response(500)
        with pytest.raises(BsnHTTPStatusError):
            api.validate_response(response)

    def test_validate_response_raises_for_empty_body(self) -> None:
        """Test that an empty 200 response raises BsnEmptyResponseError."""
        response = httpx.Response(200)
        with pytest.raises(BsnEmptyResponseError, match="200"):
            api.validate_response(response)

    def test_validate_response_allows_empty_body_when_requested(self) -> None:
        """Test that allow_empty accepts an empty 204 response."""
        response = httpx.Response(204)
        assert api.validate_response(response, 204, allow_empty=True) == b""


class TestExtractAccessToken:
    """Tests for extract_access_token function."""

    def test_extract_access_token_computes_expiry(
        self,
        sample_token_response: dict[str, Any],
    ) -> None:
        """Test that the expiry is expires_in seconds after now."""
        now = datetime(2024, 1, 1, tzinfo=UTC)
        token = api.extract_access_token(sample_token_response, now)
        assert token == AccessToken(
            token="test_access_token",
            expire_at=now + timedelta(seconds=3600),
            token_type="Bearer",
        )

    def test_extract_access_token_raises_for_missing_token(self) -> None:
        """Test that a response without access_token raises BsnAuthError."""
        with pytest.raises(BsnAuthError, match="access_token"):
            api.extract_access_token({"expires_in": 3600})

    def test_extract_access_token_raises_for_missing_expiry(self) -> None:
        """Test that a response without expires_in raises BsnAuthError."""
        with pytest.raises(BsnAuthError, match="expires_in"):
            api.extract_access_token({"access_token": "abc"})

    def test_extract_access_token_raises_for_non_object(self) -> None:
        """Test that a non-object response raises BsnAuthError."""
        with pytest.raises(BsnAuthError):
            api.extract_access_token(["abc"])


class TestCreateSessionClient:
    """Tests for create_session_client function."""

    @patch("bsn_cloud.api.RetryTransport")
    @patch("bsn_cloud.api.Retry")
    def test_create_session_client_creates_client_with_retry_transport(
        self,
        mock_retry: Mock,
        mock_retry_transport: Mock,
        config: BsnCloudConfig,
    ) -> None:
        """Test that create_session_client wires the retry transport."""
        with patch("bsn_cloud.api.httpx.AsyncClient") as mock_client:
            result = api.create_session_client(config)
        mock_retry.assert_called_once_with(
            total=config.retries,
            backoff_factor=config.backoff_factor,
        )
        mock_retry_transport.assert_called_once_with(retry=mock_retry.return_value)
        mock_client.assert_called_once_with(
            timeout=config.timeout,
            transport=mock_retry_transport.return_value,
        )
        assert result == mock_client.return_value


class TestAsyncRequest:
    """Tests for async_request function."""

    @pytest.mark.asyncio
    async def test_async_request_sends_bearer_token(
        self,
        httpx_mock: HTTPXMock,
    ) -> None:
        """Test that async_request authenticates with the bearer token."""
        httpx_mock.add_response(
            url=f"{TEST_BASE_URL}/Devices",
            method="GET",
            match_headers={"authorization": "Bearer abc"},
            content=b'{"items": []}',
        )
        async with httpx.AsyncClient() as session:
            body = await api.async_request(
                session, "GET", f"{TEST_BASE_URL}/Devices", token="abc"
            )
        assert body == b'{"items": []}'

    @pytest.mark.asyncio
    async def test_async_request_raises_transport_error(
        self,
        httpx_mock: HTTPXMock,
    ) -> None:
        """Test that a connection failure raises BsnTransportError."""
        httpx_mock.add_exception(
            httpx.ConnectError("Connection refused"),
            url=f"{TEST_BASE_URL}/Devices",
        )
        async with httpx.AsyncClient() as session:
            with pytest.raises(BsnTransportError, match="Connection refused"):
                await api.async_request(session, "GET", f"{TEST_BASE_URL}/Devices")


class TestAsyncFetchToken:
    """Tests for async_fetch_token function."""

    @pytest.mark.asyncio
    async def test_async_fetch_token_returns_access_token(
        self,
        httpx_mock: HTTPXMock,
        sample_token_response: dict[str, Any],
    ) -> None:
        """Test that async_fetch_token returns the token on success."""
        httpx_mock.add_response(
            url=TEST_TOKEN_URL,
            method="POST",
            json=sample_token_response,
        )
        async with httpx.AsyncClient() as session:
            token = await api.async_fetch_token(
                session, TEST_TOKEN_URL, "id", "secret"
            )
        assert token.token == "test_access_token"
        assert token.expire_at > datetime.now(UTC)

        request = httpx_mock.get_request()
        assert request.content == b"grant_type=client_credentials"
        expected = base64.b64encode(b"id:secret").decode()
        assert request.headers["authorization"] == f"Basic {expected}"
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"

    @pytest.mark.asyncio
    async def test_async_fetch_token_raises_auth_error_on_http_401(
        self,
        httpx_mock: HTTPXMock,
    ) -> None:
        """Test that a refused exchange raises BsnAuthError with details."""
        httpx_mock.add_response(
            url=TEST_TOKEN_URL,
            method="POST",
            status_code=401,
            text="invalid_client",
        )
        async with httpx.AsyncClient() as session:
            with pytest.raises(BsnAuthError, match="invalid_client") as exc_info:
                await api.async_fetch_token(session, TEST_TOKEN_URL, "id", "bad")
        assert exc_info.value.status_code == 401  # noqa: PLR2004

    @pytest.mark.asyncio
    async def test_async_fetch_token_raises_auth_error_on_invalid_json(
        self,
        httpx_mock: HTTPXMock,
    ) -> None:
        """Test that an unparseable token response raises BsnAuthError."""
        httpx_mock.add_response(url=TEST_TOKEN_URL, method="POST", text="<html>")
        async with httpx.AsyncClient() as session:
            with pytest.raises(BsnAuthError):
                await api.async_fetch_token(session, TEST_TOKEN_URL, "id", "secret")

    @pytest.mark.asyncio
    async def test_async_fetch_token_raises_transport_error(
        self,
        httpx_mock: HTTPXMock,
    ) -> None:
        """Test that an unreachable token endpoint raises BsnTransportError."""
        httpx_mock.add_exception(httpx.ConnectTimeout("timed out"), url=TEST_TOKEN_URL)
        async with httpx.AsyncClient() as session:
            with pytest.raises(BsnTransportError):
                await api.async_fetch_token(session, TEST_TOKEN_URL, "id", "secret")


class TestAsyncSelectNetwork:
    """Tests for async_select_network function."""

    @pytest.mark.asyncio
    async def test_async_select_network_succeeds_on_204(
        self,
        httpx_mock: HTTPXMock,
    ) -> None:
        """Test that a 204 answer selects the network."""
        httpx_mock.add_response(
            url=f"{TEST_BASE_URL}/self/session/network",
            method="PUT",
            match_json={"name": TEST_NETWORK},
            status_code=204,
        )
        async with httpx.AsyncClient() as session:
            await api.async_select_network(session, TEST_BASE_URL, "abc", TEST_NETWORK)

    @pytest.mark.asyncio
    async def test_async_select_network_raises_on_unexpected_status(
        self,
        httpx_mock: HTTPXMock,
    ) -> None:
        """Test that a refused selection raises BsnTenantSelectionError."""
        httpx_mock.add_response(
            url=f"{TEST_BASE_URL}/self/session/network",
            method="PUT",
            status_code=404,
            text="Network not found",
        )
        async with httpx.AsyncClient() as session:
            with pytest.raises(BsnTenantSelectionError, match="Network not found"):
                await api.async_select_network(
                    session, TEST_BASE_URL, "abc", "Missing"
                )


class TestAsyncGetDevices:
    """Tests for async_get_devices function."""

    @pytest.mark.asyncio
    async def test_async_get_devices_returns_players(
        self,
        httpx_mock: HTTPXMock,
        sample_devices_response: dict[str, Any],
    ) -> None:
        """Test that async_get_devices decodes the listing."""
        httpx_mock.add_response(
            url=f"{TEST_BASE_URL}/Devices",
            method="GET",
            json=sample_devices_response,
        )
        async with httpx.AsyncClient() as session:
            devices = await api.async_get_devices(session, TEST_BASE_URL, "abc")
        assert len(devices) == 1
        assert isinstance(devices[0], Player)
        assert devices[0].serial == "XTD1234567"

    @pytest.mark.asyncio
    async def test_async_get_devices_raises_status_error_on_http_500(
        self,
        httpx_mock: HTTPXMock,
    ) -> None:
        """Test that a server error raises BsnHTTPStatusError."""
        httpx_mock.add_response(
            url=f"{TEST_BASE_URL}/Devices",
            method="GET",
            status_code=500,
            text="Internal error",
        )
        async with httpx.AsyncClient() as session:
            with pytest.raises(BsnHTTPStatusError, match="500"):
                await api.async_get_devices(session, TEST_BASE_URL, "abc")

    @pytest.mark.asyncio
    async def test_async_get_devices_raises_for_empty_body(
        self,
        httpx_mock: HTTPXMock,
    ) -> None:
        """Test that an empty 200 response raises BsnEmptyResponseError."""
        httpx_mock.add_response(url=f"{TEST_BASE_URL}/Devices", method="GET")
        async with httpx.AsyncClient() as session:
            with pytest.raises(BsnEmptyResponseError):
                await api.async_get_devices(session, TEST_BASE_URL, "abc")

    @pytest.mark.asyncio
    async def test_async_get_devices_raises_decode_error_for_bad_item(
        self,
        httpx_mock: HTTPXMock,
        sample_player: dict[str, Any],
    ) -> None:
        """Test that one undecodable device fails the whole listing."""
        sample_player["settings"]["beacons"] = [{"mode": "bogus"}]
        httpx_mock.add_response(
            url=f"{TEST_BASE_URL}/Devices",
            method="GET",
            json={"items": [sample_player]},
        )
        async with httpx.AsyncClient() as session:
            with pytest.raises(BsnDecodeError):
                await api.async_get_devices(session, TEST_BASE_URL, "abc")


class TestAsyncGetNetworks:
    """Tests for async_get_networks function."""

    @pytest.mark.asyncio
    async def test_async_get_networks_returns_networks(
        self,
        httpx_mock: HTTPXMock,
        sample_networks_response: dict[str, Any],
    ) -> None:
        """Test that async_get_networks decodes the listing."""
        httpx_mock.add_response(
            url=f"{TEST_BASE_URL}/networks",
            method="GET",
            json=sample_networks_response,
        )
        async with httpx.AsyncClient() as session:
            networks = await api.async_get_networks(session, TEST_BASE_URL, "abc")
        assert len(networks) == EXPECTED_NETWORK_COUNT
        assert networks[0] == Network(id="101", name=TEST_NETWORK)
