"""Session management for the BSN.cloud client.

The session owns the bearer token, its expiry and the selected network.
Refreshing is lazy: the token is exchanged again on the first call made
after it expired, never in the background.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from . import api
from .const import TOKEN_SAFETY_MARGIN
from .exceptions import BsnCloudError, BsnTenantSelectionError

if TYPE_CHECKING:
    import httpx

    from .config import BsnCloudConfig
    from .models import AccessToken

_LOGGER = logging.getLogger(__name__)


class SessionManager:
    """Manage the BSN.cloud token and network context of one client.

    The instance is meant to be shared by concurrent tasks. Only one
    credential exchange runs at a time: tasks that arrive while one is in
    flight wait for it and share its outcome, including its failure.
    """

    def __init__(
        self,
        session: httpx.AsyncClient,
        config: BsnCloudConfig,
    ) -> None:
        """Initialize the session manager.

        Args:
            session: HTTP client session used for the exchanges.
            config: Client configuration holding the credentials.

        """
        self._session = session
        self._config = config
        self._network_name = config.network_name
        self._token: AccessToken | None = None
        # Selecting a network is bound to the token it was done with
        self._network_token: str | None = None
        self._auth_lock = asyncio.Lock()
        self._network_lock = asyncio.Lock()
        self._exchange_count = 0
        self._last_error: BsnCloudError | None = None

    @property
    def token(self) -> AccessToken | None:
        """Return the current token, which may have expired."""
        return self._token

    @property
    def network_name(self) -> str:
        """Return the network resource calls are made against."""
        return self._network_name

    @property
    def is_authenticated(self) -> bool:
        """Return True if the token is usable for at least the safety margin."""
        if self._token is None:
            return False
        return datetime.now(UTC) < self._token.expire_at - TOKEN_SAFETY_MARGIN

    @property
    def is_network_selected(self) -> bool:
        """Return True if the network was selected with the current valid token."""
        return (
            self._token is not None
            and self._network_token == self._token.token
            and self.is_authenticated
        )

    async def async_ensure_authenticated(self) -> str:
        """Return a valid bearer token, exchanging credentials if needed.

        Returns:
            The bearer token string.

        Raises:
            BsnAuthError: If the credential exchange is refused.
            BsnTransportError: If the token endpoint cannot be reached.

        """
        attempt = self._exchange_count
        async with self._auth_lock:
            if self.is_authenticated:
                return self._token.token

            if self._exchange_count != attempt and self._last_error is not None:
                _LOGGER.debug("Credential exchange failed while waiting for it")
                raise self._last_error

            self._last_error = None
            try:
                token = await api.async_fetch_token(
                    self._session,
                    self._config.token_url,
                    self._config.client_id,
                    self._config.client_secret,
                )
            except BsnCloudError as err:
                self._last_error = err
                _LOGGER.warning("BSN.cloud credential exchange failed: %s", err)
                raise
            finally:
                self._exchange_count += 1

            self._token = token
            _LOGGER.info(
                "Obtained BSN.cloud access token valid until %s",
                token.expire_at.isoformat(),
            )
            return token.token

    async def async_select_network(self, network_name: str | None = None) -> None:
        """Select the network (tenant) for the current token.

        Args:
            network_name: Network to select, defaults to the configured one.

        Raises:
            BsnTenantSelectionError: If no network name is known or the API
                refuses the selection. The session is left unchanged.
            BsnAuthError: If the credential exchange is refused.
            BsnTransportError: If the API cannot be reached.

        """
        name = network_name or self._network_name
        if not name:
            error_msg = "Network name must be configured in the client"
            raise BsnTenantSelectionError(error_msg)

        token = await self.async_ensure_authenticated()
        async with self._network_lock:
            await api.async_select_network(
                self._session, self._config.base_url, token, name
            )
            self._network_name = name
            self._network_token = token
        _LOGGER.info("Selected BSN.cloud network %s", name)

    async def async_ensure_network(self) -> str:
        """Return a valid bearer token with the network selected for it.

        The network is selected again whenever the token changed since the
        last selection.

        Returns:
            The bearer token string.

        """
        if not self._network_name:
            error_msg = "Network name must be configured in the client"
            raise BsnTenantSelectionError(error_msg)

        token = await self.async_ensure_authenticated()
        if self._network_token == token:
            return token

        async with self._network_lock:
            if self._network_token != token:
                await api.async_select_network(
                    self._session, self._config.base_url, token, self._network_name
                )
                self._network_token = token
                _LOGGER.info("Selected BSN.cloud network %s", self._network_name)
        return token
