"""API client for BSN.cloud.

This module provides functions to interact with the BSN.cloud API,
including the credential exchange, network selection, and device
listing. Every call goes through async_request, which maps transport
failures and unexpected status codes onto the client's exceptions.
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import httpx
from httpx_retries import Retry, RetryTransport

from .config import BsnCloudConfig
from .const import (
    ENDPOINT_DEVICES,
    ENDPOINT_NETWORKS,
    ENDPOINT_SESSION_NETWORK,
    HTTP_NO_CONTENT,
    HTTP_OK,
    USER_AGENT,
)
from .decoding import decode_network_list, decode_player_list, load_json
from .exceptions import (
    BsnAuthError,
    BsnCloudError,
    BsnEmptyResponseError,
    BsnHTTPStatusError,
    BsnTenantSelectionError,
    BsnTransportError,
)
from .models import AccessToken, Network, Player

_LOGGER = logging.getLogger(__name__)


def create_headers(token: str | None = None) -> dict[str, str]:
    """Create HTTP headers for BSN.cloud API requests.

    Args:
        token: Optional bearer token to include in headers.

    Returns:
        Dictionary containing HTTP headers for API requests.

    """
    headers = {
        "accept": "application/json",
        "user-agent": USER_AGENT,
    }
    if token:
        headers["authorization"] = f"Bearer {token}"
    return headers


def is_expected_status(status: int, expected_status: int) -> bool:
    """Check if an HTTP status code is the one a call succeeds with.

    Args:
        status: HTTP status code to check.
        expected_status: Status code the endpoint answers with on success.

    Returns:
        True if both codes are equal, False otherwise.

    """
    return status == expected_status


def validate_response(
    response: httpx.Response,
    expected_status: int = HTTP_OK,
    *,
    allow_empty: bool = False,
) -> bytes:
    """Validate HTTP response and return its body.

    Args:
        response: HTTP response object to validate.
        expected_status: Status code the endpoint answers with on success.
        allow_empty: Whether an empty body is acceptable.

    Returns:
        Raw response body.

    Raises:
        BsnHTTPStatusError: If the status code is not the expected one.
        BsnEmptyResponseError: If the body is empty and must not be.

    """
    body = response.content
    if not is_expected_status(response.status_code, expected_status):
        text = body.decode(errors="replace")
        error_msg = f"Request failed: {response.status_code} - {text}"
        raise BsnHTTPStatusError(error_msg, response.status_code, text)

    if not body and not allow_empty:
        error_msg = f"Empty response body with status {response.status_code}"
        raise BsnEmptyResponseError(error_msg)

    return body


async def async_request(
    session: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    token: str | None = None,
    json: Any = None,
    expected_status: int = HTTP_OK,
    allow_empty: bool = False,
) -> bytes:
    """Perform one authenticated request against the BSN.cloud API.

    Args:
        session: HTTP client session.
        method: HTTP method.
        url: Absolute request URL.
        token: Bearer token, if the endpoint requires one.
        json: Optional JSON request body.
        expected_status: Status code the endpoint answers with on success.
        allow_empty: Whether an empty body is acceptable.

    Returns:
        Raw response body.

    Raises:
        BsnTransportError: If no response could be obtained.
        BsnHTTPStatusError: If the status code is not the expected one.
        BsnEmptyResponseError: If the body is empty and must not be.

    """
    _LOGGER.debug("Sending %s %s", method, url)
    try:
        response = await session.request(
            method,
            url,
            headers=create_headers(token),
            json=json,
        )
    except httpx.RequestError as err:
        error_msg = f"{method} {url} failed: {err}"
        raise BsnTransportError(error_msg) from err

    _LOGGER.debug(
        "Received %s for %s %s: %s",
        response.status_code,
        method,
        url,
        response.text,
    )
    return validate_response(response, expected_status, allow_empty=allow_empty)


def extract_access_token(data: Any, now: datetime | None = None) -> AccessToken:
    """Extract the bearer token from a token endpoint response.

    Args:
        data: Parsed token endpoint response.
        now: Time the response was received, defaults to the current time.

    Returns:
        AccessToken expiring expires_in seconds after now.

    Raises:
        BsnAuthError: If the response lacks a usable token.

    """
    if not isinstance(data, dict):
        error_msg = "Token response is not a JSON object"
        raise BsnAuthError(error_msg, HTTP_OK)

    access_token = data.get("access_token")
    expires_in = data.get("expires_in")
    if not isinstance(access_token, str) or not access_token:
        error_msg = "Token response missing 'access_token'"
        raise BsnAuthError(error_msg, HTTP_OK)
    if isinstance(expires_in, bool) or not isinstance(expires_in, int):
        error_msg = "Token response missing 'expires_in'"
        raise BsnAuthError(error_msg, HTTP_OK)

    issued_at = now or datetime.now(UTC)
    return AccessToken(
        token=access_token,
        expire_at=issued_at + timedelta(seconds=expires_in),
        token_type=data.get("token_type") or "Bearer",
    )


def create_session_client(config: BsnCloudConfig) -> httpx.AsyncClient:
    """Create HTTP client with retry logic for the BSN.cloud API.

    Args:
        config: Client configuration.

    Returns:
        Configured httpx AsyncClient with retry transport.

    """
    retry = Retry(total=config.retries, backoff_factor=config.backoff_factor)
    return httpx.AsyncClient(
        timeout=config.timeout,
        transport=RetryTransport(retry=retry),
    )


async def async_fetch_token(
    session: httpx.AsyncClient,
    token_url: str,
    client_id: str,
    client_secret: str,
) -> AccessToken:
    """Exchange client credentials for a bearer token.

    Args:
        session: HTTP client session.
        token_url: OAuth2 token endpoint.
        client_id: OAuth2 client id.
        client_secret: OAuth2 client secret.

    Returns:
        The new AccessToken.

    Raises:
        BsnTransportError: If the token endpoint cannot be reached.
        BsnAuthError: If the exchange is refused or the response is unusable.

    """
    _LOGGER.debug("Requesting access token from %s", token_url)
    try:
        response = await session.post(
            token_url,
            headers=create_headers(),
            auth=httpx.BasicAuth(client_id, client_secret),
            data={"grant_type": "client_credentials"},
        )
    except httpx.RequestError as err:
        error_msg = f"Token request failed: {err}"
        raise BsnTransportError(error_msg) from err

    try:
        body = validate_response(response)
        data = load_json(body)
    except BsnHTTPStatusError as err:
        error_msg = f"Authentication failed: {err.status_code} - {err.body}"
        raise BsnAuthError(error_msg, err.status_code, err.body) from err
    except BsnCloudError as err:
        error_msg = f"Authentication failed: {err}"
        raise BsnAuthError(error_msg, response.status_code, response.text) from err

    token = extract_access_token(data)
    _LOGGER.debug("Access token valid until %s", token.expire_at.isoformat())
    return token


async def async_select_network(
    session: httpx.AsyncClient,
    base_url: str,
    token: str,
    network_name: str,
) -> None:
    """Select the network (tenant) the session works in.

    Args:
        session: HTTP client session.
        base_url: API base URL.
        token: Bearer token.
        network_name: Name of the network to select.

    Raises:
        BsnTransportError: If the API cannot be reached.
        BsnTenantSelectionError: If the API does not answer 204 No Content.

    """
    url = f"{base_url}{ENDPOINT_SESSION_NETWORK}"
    try:
        await async_request(
            session,
            "PUT",
            url,
            token=token,
            json={"name": network_name},
            expected_status=HTTP_NO_CONTENT,
            allow_empty=True,
        )
    except BsnHTTPStatusError as err:
        error_msg = f"Network selection failed for {network_name!r}: {err}"
        raise BsnTenantSelectionError(error_msg, err.status_code, err.body) from err


async def async_get_devices(
    session: httpx.AsyncClient,
    base_url: str,
    token: str,
) -> list[Player]:
    """Fetch the devices of the selected network.

    Args:
        session: HTTP client session.
        base_url: API base URL.
        token: Bearer token.

    Returns:
        List of decoded Player objects.

    Raises:
        BsnTransportError: If the API cannot be reached.
        BsnHTTPStatusError: If the API does not answer 200.
        BsnEmptyResponseError: If the response has no body.
        BsnDecodeError: If any device cannot be decoded.

    """
    url = f"{base_url}{ENDPOINT_DEVICES}"
    body = await async_request(session, "GET", url, token=token)
    devices = decode_player_list(body)
    _LOGGER.debug("Retrieved %d devices from BSN.cloud", len(devices))
    return devices


async def async_get_networks(
    session: httpx.AsyncClient,
    base_url: str,
    token: str,
) -> list[Network]:
    """Fetch the networks the credentials have access to.

    Args:
        session: HTTP client session.
        base_url: API base URL.
        token: Bearer token.

    Returns:
        List of Network objects.

    Raises:
        BsnTransportError: If the API cannot be reached.
        BsnHTTPStatusError: If the API does not answer 200.
        BsnEmptyResponseError: If the response has no body.
        BsnDecodeError: If the listing cannot be decoded.

    """
    url = f"{base_url}{ENDPOINT_NETWORKS}"
    body = await async_request(session, "GET", url, token=token)
    networks = decode_network_list(body)
    _LOGGER.debug("Retrieved %d networks from BSN.cloud", len(networks))
    return networks
