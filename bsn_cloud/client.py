"""High level BSN.cloud client."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Self

from . import api
from .const import HTTP_OK
from .session import SessionManager

if TYPE_CHECKING:
    from types import TracebackType

    import httpx

    from .config import BsnCloudConfig
    from .models import Network, Player

_LOGGER = logging.getLogger(__name__)


class BsnCloudClient:
    """Client for the BSN.cloud device management API.

    Example:
        async with BsnCloudClient(config) as client:
            players = await client.async_list_devices()

    """

    def __init__(
        self,
        config: BsnCloudConfig,
        session: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Client configuration.
            session: Optional HTTP client session. When omitted the client
                creates one with retries and closes it in async_close.

        """
        self.config = config
        self._owns_session = session is None
        self._session = session or api.create_session_client(config)
        self.session_manager = SessionManager(self._session, config)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.async_close()

    async def async_close(self) -> None:
        """Close the HTTP client session if this client created it."""
        if self._owns_session:
            await self._session.aclose()

    async def async_request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        expected_status: int = HTTP_OK,
        allow_empty: bool = False,
        select_network: bool = True,
    ) -> bytes:
        """Perform an authenticated request against any API endpoint.

        Args:
            method: HTTP method.
            path: Endpoint path relative to the base URL, e.g. "/Devices".
            json: Optional JSON request body.
            expected_status: Status code the endpoint answers with on success.
            allow_empty: Whether an empty body is acceptable.
            select_network: Whether the network must be selected first.

        Returns:
            Raw response body.

        """
        if select_network:
            token = await self.session_manager.async_ensure_network()
        else:
            token = await self.session_manager.async_ensure_authenticated()

        return await api.async_request(
            self._session,
            method,
            f"{self.config.base_url}{path}",
            token=token,
            json=json,
            expected_status=expected_status,
            allow_empty=allow_empty,
        )

    async def async_select_network(self, network_name: str | None = None) -> None:
        """Select the network (tenant) subsequent calls operate on."""
        await self.session_manager.async_select_network(network_name)

    async def async_list_devices(self) -> list[Player]:
        """Fetch every device of the selected network.

        Returns:
            List of decoded Player objects.

        Raises:
            BsnAuthError: If the credential exchange is refused.
            BsnTenantSelectionError: If the network cannot be selected.
            BsnTransportError: If the API cannot be reached.
            BsnHTTPStatusError: If the API does not answer 200.
            BsnEmptyResponseError: If the response has no body.
            BsnDecodeError: If any device cannot be decoded.

        """
        token = await self.session_manager.async_ensure_network()
        return await api.async_get_devices(self._session, self.config.base_url, token)

    async def async_list_networks(self) -> list[Network]:
        """Fetch the networks available to the configured credentials."""
        token = await self.session_manager.async_ensure_authenticated()
        networks = await api.async_get_networks(
            self._session, self.config.base_url, token
        )
        _LOGGER.debug(
            "Networks available: %s", ", ".join(network.name for network in networks)
        )
        return networks
