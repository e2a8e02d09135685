"""Main ARI client implementation.

This module provides the ARIClient class which owns the authenticated HTTP
session used to talk to Asterisk's REST Interface (ARI).
"""

import asyncio
import json
import logging
from types import TracebackType
from typing import Any, Dict, Optional, TYPE_CHECKING

import aiohttp
from aiohttp import BasicAuth, ClientTimeout
from yarl import URL

from asterisk_ari.config import ARIConfig
from asterisk_ari.exceptions import ConnectionError, parse_asterisk_error

if TYPE_CHECKING:
    from asterisk_ari.resources import ApplicationsClient

logger = logging.getLogger(__name__)


class ARIClient:
    """Async client for the Asterisk REST Interface (ARI).

    Every request is a single attempt: failures are raised to the caller
    as soon as they happen, with no retry.

    Attributes:
        config: Configuration object with connection settings
        session: aiohttp ClientSession for HTTP requests
        is_connected: Whether the client currently holds an open session

    Example:
        ```python
        import asyncio
        from asterisk_ari import ARIClient, ARIConfig

        async def main():
            config = ARIConfig(
                base_url="http://localhost:8088/ari",
                username="asterisk",
                password="asterisk",
            )

            async with ARIClient(config) as client:
                apps = await client.applications.list()
                print(f"Registered applications: {[app.name for app in apps]}")

        asyncio.run(main())
        ```
    """

    def __init__(self, config: ARIConfig) -> None:
        """Initialize ARI client.

        Args:
            config: Configuration object with connection settings
        """
        self.config = config
        self._session: Optional[aiohttp.ClientSession] = None
        self._applications: Optional["ApplicationsClient"] = None

        if config.debug:
            logging.getLogger("asterisk_ari").setLevel(logging.DEBUG)
            logging.getLogger("aiohttp").setLevel(logging.DEBUG)
        else:
            logging.getLogger("asterisk_ari").setLevel(getattr(logging, config.log_level))

    async def __aenter__(self) -> "ARIClient":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(
            self,
            exc_type: Optional[type],
            exc_val: Optional[Exception],
            exc_tb: Optional[TracebackType],
    ) -> None:
        """Async context manager exit."""
        await self.disconnect()

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get the HTTP session.

        Raises:
            ConnectionError: If the client is not connected
        """
        if self._session is None or self._session.closed:
            raise ConnectionError("Client is not connected. Use async context manager or call connect() first.")
        return self._session

    @property
    def is_connected(self) -> bool:
        return self._session is not None and not self._session.closed

    @property
    def applications(self) -> "ApplicationsClient":
        """The ``/applications`` resource bound to this client."""
        if self._applications is None:
            from asterisk_ari.resources import ApplicationsClient

            self._applications = ApplicationsClient(self)
        return self._applications

    async def connect(self) -> None:
        """Open the authenticated HTTP session.

        No request is sent; credentials are checked by Asterisk on the
        first call.
        """
        if self.is_connected:
            logger.debug("Client already connected")
            return

        logger.info(f"Opening ARI session for {self.config.base_url}")
        self._session = aiohttp.ClientSession(
            timeout=ClientTimeout(**self.config.get_timeout_config()),
            auth=BasicAuth(*self.config.auth_tuple),
            headers={
                "User-Agent": self.config.user_agent,
                "Accept": "application/json",
            },
            json_serialize=json.dumps,
        )

    async def close(self) -> None:
        await self.disconnect()

    async def disconnect(self) -> None:
        """Close the HTTP session."""
        if not self.is_connected:
            logger.debug("Client not connected")
            self._session = None
            return

        logger.info("Closing ARI session")
        await self._session.close()
        self._session = None

    async def _request(
            self,
            method: str,
            endpoint: str,
            params: Optional[Dict[str, Any]] = None,
            json_data: Optional[Dict[str, Any]] = None,
            **kwargs: Any,
    ) -> Any:
        """Make one authenticated HTTP request to the ARI API.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint path, already percent-encoded (e.g., '/applications')
            params: Query parameters
            json_data: JSON data for request body
            **kwargs: Additional arguments for aiohttp request

        Returns:
            Parsed JSON response data, response text for non-JSON bodies,
            or None for an empty body

        Raises:
            AuthenticationError: On HTTP 401
            ResourceNotFoundError: On HTTP 404
            HTTPError: On any other non-2xx status
            ConnectionError: If no response was received
        """
        url = f"{self.config.base_url}{endpoint}"
        logger.debug(f"{method} {url} params={params}")

        try:
            # encoded=True keeps the already-escaped path segments intact
            async with self.session.request(
                    method,
                    URL(url, encoded=True),
                    params=params,
                    json=json_data,
                    **kwargs
            ) as response:
                body = await response.text()

                if not response.ok:
                    logger.warning(
                        f"{method} {url} failed with status {response.status}: {body[:512]}"
                    )
                    raise parse_asterisk_error(
                        body,
                        response.status,
                        method,
                        url,
                        username=self.config.username,
                    )

                if not body:
                    return None
                if response.content_type == "application/json":
                    return json.loads(body)
                return body

        except aiohttp.ClientError as e:
            logger.error(f"Network error during {method} {url}: {e}")
            raise ConnectionError(
                f"Network error during {method} {url}: {e}",
                url=url,
            ) from e
        except asyncio.TimeoutError as e:
            logger.error(f"Timed out during {method} {url}")
            raise ConnectionError(
                f"Request timed out during {method} {url}",
                url=url,
                timeout=self.config.timeout,
            ) from e

    async def get(
            self,
            endpoint: str,
            params: Optional[Dict[str, Any]] = None,
            **kwargs: Any,
    ) -> Any:
        """Make a GET request to the ARI API."""
        return await self._request("GET", endpoint, params=params, **kwargs)

    async def post(
            self,
            endpoint: str,
            params: Optional[Dict[str, Any]] = None,
            json_data: Optional[Dict[str, Any]] = None,
            **kwargs: Any,
    ) -> Any:
        """Make a POST request to the ARI API."""
        return await self._request("POST", endpoint, params=params, json_data=json_data, **kwargs)

    async def put(
            self,
            endpoint: str,
            params: Optional[Dict[str, Any]] = None,
            json_data: Optional[Dict[str, Any]] = None,
            **kwargs: Any,
    ) -> Any:
        """Make a PUT request to the ARI API."""
        return await self._request("PUT", endpoint, params=params, json_data=json_data, **kwargs)

    async def delete(
            self,
            endpoint: str,
            params: Optional[Dict[str, Any]] = None,
            **kwargs: Any,
    ) -> Any:
        """Make a DELETE request to the ARI API."""
        return await self._request("DELETE", endpoint, params=params, **kwargs)
