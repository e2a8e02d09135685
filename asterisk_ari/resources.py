"""Resource-oriented API classes for Asterisk ARI resources.

This module provides the client for the ARI ``/applications`` resource. It
maps list/get/subscribe/unsubscribe onto REST calls and hands back
:class:`~asterisk_ari.models.Application` models.
"""

import logging
from types import TracebackType
from typing import Any, List, Optional, Sequence, Union
from urllib.parse import quote

from asterisk_ari.client import ARIClient
from asterisk_ari.config import ARIConfig
from asterisk_ari.exceptions import ValidationError
from asterisk_ari.models import Application

logger = logging.getLogger(__name__)

EventSource = Union[str, Sequence[str]]


def normalize_event_source(event_source: EventSource) -> str:
    """Turn one event source or a sequence of them into the ``eventSource`` query value.

    ARI takes a single comma separated value, e.g. ``channel:1234,bridge:5678``.

    Raises:
        ValidationError: If no event source is given or an item is not a string
    """
    if isinstance(event_source, str):
        sources = [event_source]
    elif isinstance(event_source, Sequence):
        sources = list(event_source)
    else:
        raise ValidationError(
            "eventSource must be a string or a sequence of strings",
            field_errors={"event_source": "invalid type"},
            invalid_value=event_source,
        )

    if not sources:
        raise ValidationError(
            "At least one event source is required",
            field_errors={"event_source": "empty"},
            invalid_value=event_source,
        )

    for source in sources:
        if not isinstance(source, str) or not source:
            raise ValidationError(
                "Event sources must be non-empty strings",
                field_errors={"event_source": "invalid item"},
                invalid_value=source,
            )

    return ",".join(sources)


def _application_path(application_name: str) -> str:
    if not isinstance(application_name, str) or not application_name.strip():
        raise ValidationError(
            "Application name cannot be empty",
            field_errors={"application_name": "empty"},
            invalid_value=application_name,
        )
    return f"/applications/{quote(application_name, safe='')}"


class ApplicationsClient:
    """REST API resource for ARI Stasis applications (``/applications``).

    Event sources name what to subscribe to: a channel id, a bridge id, an
    endpoint as ``tech/resource`` (e.g. ``PJSIP/6001``) or a device name.
    Asterisk 12.5 added ``endpoint:PJSIP`` (every endpoint of a technology)
    and Asterisk 13.6 added ``channel:`` (every resource of a kind); these
    are passed through as-is.

    Example:
        ```python
        async with ApplicationsClient.from_config(
            base_url="http://pbx.local:8088/ari",
            username="asterisk",
            password="secret",
        ) as applications:
            app = await applications.subscribe("hello_world", ["channel:1234", "endpoint:PJSIP/6001"])
        ```
    """

    def __init__(self, client: ARIClient):
        """Initialize the applications resource.

        Args:
            client: The ARI client used to send requests
        """
        self._client = client

    @classmethod
    def from_config(cls, config: Optional[ARIConfig] = None, **settings: Any) -> "ApplicationsClient":
        """Build a client with its own ARIClient.

        Args:
            config: Ready-made configuration; if omitted one is built from ``settings``
            **settings: ARIConfig fields, e.g. ``base_url``, ``username``, ``password``
        """
        if config is None:
            config = ARIConfig(**settings)
        elif settings:
            raise ValueError("Pass either a config or keyword settings, not both")
        return cls(ARIClient(config))

    @property
    def client(self) -> ARIClient:
        return self._client

    async def __aenter__(self) -> "ApplicationsClient":
        await self._client.connect()
        return self

    async def __aexit__(
            self,
            exc_type: Optional[type],
            exc_val: Optional[Exception],
            exc_tb: Optional[TracebackType],
    ) -> None:
        await self._client.disconnect()

    async def list(self) -> List[Application]:
        """GET /applications

        List all ARI applications registered in Asterisk.

        Returns:
            Every registered application, in server order
        """
        data = await self._client.get("/applications")
        applications = [Application.from_dict(item) for item in data or []]
        logger.debug(f"Listed {len(applications)} applications")
        return applications

    async def get(self, application_name: str) -> Application:
        """GET /applications/{applicationName}

        Retrieve a single ARI application's details.

        Args:
            application_name: Name of the application to retrieve

        Raises:
            ResourceNotFoundError: If the application does not exist (404)
        """
        data = await self._client.get(_application_path(application_name))
        return Application.from_dict(data)

    async def subscribe(self, application_name: str, event_source: EventSource) -> Application:
        """POST /applications/{applicationName}/subscription

        Subscribe an application to one or more event sources.

        Args:
            application_name: Name of the application to register the subscriptions with
            event_source: Event source uri or a sequence of them

        Returns:
            The application, now including the new subscriptions

        Raises:
            ResourceNotFoundError: If the application does not exist (404)
            UnprocessableEntityError: If an event source does not exist (422)
        """
        application = await self._subscription("POST", application_name, event_source)
        logger.info(f"Subscribed application {application.name} to {event_source}")
        return application

    async def unsubscribe(self, application_name: str, event_source: EventSource) -> Application:
        """DELETE /applications/{applicationName}/subscription

        Unsubscribe an application from one or more event sources.

        Args:
            application_name: Name of the application to remove the subscriptions from
            event_source: Event source uri or a sequence of them

        Returns:
            The application with the subscriptions removed

        Raises:
            ResourceNotFoundError: If the application does not exist (404)
            ConflictError: If the application is not subscribed to a source (409)
            UnprocessableEntityError: If an event source does not exist (422)
        """
        application = await self._subscription("DELETE", application_name, event_source)
        logger.info(f"Unsubscribed application {application.name} from {event_source}")
        return application

    async def _subscription(
            self,
            method: str,
            application_name: str,
            event_source: EventSource,
    ) -> Application:
        path = f"{_application_path(application_name)}/subscription"
        params = {"eventSource": normalize_event_source(event_source)}
        data = await self._client._request(method, path, params=params)
        return Application.from_dict(data)
