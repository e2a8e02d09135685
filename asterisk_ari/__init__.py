"""Asterisk ARI applications client.

An async Python client for the ``/applications`` resource of Asterisk's
REST Interface (ARI): list and inspect Stasis applications and manage
their event subscriptions.
"""

__version__ = "0.1.0"
__author__ = "APN Development Team"
__email__ = "dev@apntelecom.com"
__license__ = "MIT"

from asterisk_ari.client import ARIClient
from asterisk_ari.config import ARIConfig
from asterisk_ari.exceptions import (
    ARIError,
    AuthenticationError,
    ConflictError,
    ConnectionError,
    HTTPError,
    ResourceNotFoundError,
    UnprocessableEntityError,
    ValidationError,
)
from asterisk_ari.models import (
    ARIModel,
    Application,
)
from asterisk_ari.resources import (
    ApplicationsClient,
    EventSource,
    normalize_event_source,
)

__all__ = [
    # Core client and config
    "ARIClient",
    "ARIConfig",
    # Exceptions
    "ARIError",
    "AuthenticationError",
    "ConflictError",
    "ConnectionError",
    "HTTPError",
    "ResourceNotFoundError",
    "UnprocessableEntityError",
    "ValidationError",
    # Models
    "ARIModel",
    "Application",
    # Resources
    "ApplicationsClient",
    "EventSource",
    "normalize_event_source",
]
