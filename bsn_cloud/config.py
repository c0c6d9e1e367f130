"""Configuration for the BSN.cloud client."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .const import (
    CONF_BACKOFF_FACTOR,
    CONF_BASE_URL,
    CONF_CLIENT_ID,
    CONF_CLIENT_SECRET,
    CONF_NETWORK_NAME,
    CONF_RETRIES,
    CONF_TIMEOUT,
    CONF_TOKEN_URL,
    DEFAULT_BACKOFF_FACTOR,
    DEFAULT_BASE_URL,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT,
    TOKEN_URL,
)
from .exceptions import BsnCloudError


@dataclass(frozen=True)
class BsnCloudConfig:
    """Settings needed to talk to BSN.cloud.

    Attributes:
        client_id: OAuth2 client id.
        client_secret: OAuth2 client secret.
        network_name: Network (tenant) selected before resource calls.
        base_url: API base URL, without a trailing slash.
        token_url: OAuth2 token endpoint.
        timeout: Per-request timeout in seconds.
        retries: Retries performed by the transport on transient failures.
        backoff_factor: Exponential backoff factor between retries.

    """

    client_id: str
    client_secret: str = field(repr=False)
    network_name: str = ""
    base_url: str = DEFAULT_BASE_URL
    token_url: str = TOKEN_URL
    timeout: float = DEFAULT_TIMEOUT
    retries: int = DEFAULT_RETRIES
    backoff_factor: float = DEFAULT_BACKOFF_FACTOR

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> BsnCloudConfig:
        """Build a configuration from a mapping keyed by the CONF_* constants.

        Args:
            data: Configuration values. Only the credentials are required.

        Returns:
            The configuration, with defaults for every missing option.

        Raises:
            BsnCloudError: If the client id or secret is missing.

        """
        client_id = data.get(CONF_CLIENT_ID)
        client_secret = data.get(CONF_CLIENT_SECRET)
        if not client_id or not client_secret:
            error_msg = "Client id and client secret are required"
            raise BsnCloudError(error_msg)

        return cls(
            client_id=client_id,
            client_secret=client_secret,
            network_name=data.get(CONF_NETWORK_NAME, ""),
            base_url=str(data.get(CONF_BASE_URL, DEFAULT_BASE_URL)).rstrip("/"),
            token_url=data.get(CONF_TOKEN_URL, TOKEN_URL),
            timeout=float(data.get(CONF_TIMEOUT, DEFAULT_TIMEOUT)),
            retries=int(data.get(CONF_RETRIES, DEFAULT_RETRIES)),
            backoff_factor=float(data.get(CONF_BACKOFF_FACTOR, DEFAULT_BACKOFF_FACTOR)),
        )
