"""Custom exceptions for the Asterisk ARI applications client.

This module provides the exception hierarchy for the error types that can
occur when talking to the ARI ``/applications`` resource. Every non-2xx
response surfaces as an :class:`HTTPError` (or a subclass of it) carrying
the HTTP status code, the request method and URL and the body Asterisk sent.
"""

import json
from typing import Any, Dict, Optional, Union
from urllib.parse import unquote, urlsplit


class ARIError(Exception):
    """Base exception class for all ARI-related errors.

    Attributes:
        message: Human-readable error message
        details: Additional error details (optional)
        asterisk_response: Original response from Asterisk (optional)
    """

    def __init__(
            self,
            message: str,
            details: Optional[Dict[str, Any]] = None,
            asterisk_response: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.asterisk_response = asterisk_response

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"asterisk_response={self.asterisk_response!r})"
        )


class ConnectionError(ARIError):
    """Exception raised when a request never got an HTTP response.

    This includes DNS resolution failures, refused connections, and request
    timeouts. The underlying aiohttp/asyncio exception is chained as
    ``__cause__``.

    Attributes:
        url: URL the request was sent to
        timeout: Configured request timeout (if applicable)
    """

    def __init__(
            self,
            message: str,
            url: Optional[str] = None,
            timeout: Optional[float] = None,
            details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.url = url
        self.timeout = timeout

    def __str__(self) -> str:
        parts = [self.message]
        if self.url:
            parts.append(f"url={self.url}")
        if self.timeout:
            parts.append(f"timeout={self.timeout}s")

        if len(parts) > 1:
            return f"{parts[0]} ({', '.join(parts[1:])})"
        return parts[0]


class HTTPError(ARIError):
    """Exception raised for non-2xx responses from the ARI REST API.

    Attributes:
        status_code: HTTP status code
        method: HTTP method (GET, POST, etc.)
        url: Request URL
        response_text: Raw response text
        is_client_error: True if 4xx error
        is_server_error: True if 5xx error
    """

    def __init__(
            self,
            message: str,
            status_code: int,
            method: Optional[str] = None,
            url: Optional[str] = None,
            response_text: Optional[str] = None,
            details: Optional[Dict[str, Any]] = None,
            asterisk_response: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details, asterisk_response)
        self.status_code = status_code
        self.method = method
        self.url = url
        self.response_text = response_text

    @property
    def is_client_error(self) -> bool:
        """Return True if this is a 4xx client error."""
        return 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        """Return True if this is a 5xx server error."""
        return 500 <= self.status_code < 600

    def __str__(self) -> str:
        parts = [f"{self.status_code}: {self.message}"]
        if self.method and self.url:
            parts.append(f"{self.method} {self.url}")
        elif self.method:
            parts.append(f"method={self.method}")
        elif self.url:
            parts.append(f"url={self.url}")

        if len(parts) > 1:
            return f"{parts[0]} ({', '.join(parts[1:])})"
        return parts[0]


class AuthenticationError(HTTPError):
    """Exception raised when Asterisk rejects the basic-auth credentials (401).

    Attributes:
        username: Username used for authentication
    """

    def __init__(
            self,
            message: str,
            username: Optional[str] = None,
            method: Optional[str] = None,
            url: Optional[str] = None,
            response_text: Optional[str] = None,
            asterisk_response: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message, 401, method, url, response_text, None, asterisk_response
        )
        self.username = username

    def __str__(self) -> str:
        base = super().__str__()
        if self.username:
            return f"{base} [username={self.username}]"
        return base


class ResourceNotFoundError(HTTPError):
    """Exception raised when the requested ARI resource does not exist (404).

    Attributes:
        resource_type: Type of resource (``application``)
        resource_id: Identifier of the resource that was not found
    """

    def __init__(
            self,
            message: str,
            resource_type: Optional[str] = None,
            resource_id: Optional[str] = None,
            method: Optional[str] = None,
            url: Optional[str] = None,
            response_text: Optional[str] = None,
            asterisk_response: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message, 404, method, url, response_text, None, asterisk_response
        )
        self.resource_type = resource_type
        self.resource_id = resource_id

    def __str__(self) -> str:
        parts = [f"404: {self.message}"]
        if self.resource_type and self.resource_id:
            parts.append(f"{self.resource_type}={self.resource_id}")
        elif self.resource_type:
            parts.append(f"type={self.resource_type}")
        elif self.resource_id:
            parts.append(f"id={self.resource_id}")

        if len(parts) > 1:
            return f"{parts[0]} ({', '.join(parts[1:])})"
        return parts[0]


class ConflictError(HTTPError):
    """Exception raised on 409, e.g. unsubscribing from a source that was never subscribed."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, 409, **kwargs)


class UnprocessableEntityError(HTTPError):
    """Exception raised on 422, i.e. one or more event sources do not exist."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, 422, **kwargs)


class ValidationError(ARIError):
    """Exception raised when arguments fail local validation.

    Nothing is sent to Asterisk when this is raised.

    Attributes:
        field_errors: Dictionary of field-specific validation errors
        invalid_value: The value that failed validation
    """

    def __init__(
            self,
            message: str,
            field_errors: Optional[Dict[str, str]] = None,
            invalid_value: Optional[Any] = None,
            details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.field_errors = field_errors or {}
        self.invalid_value = invalid_value

    def __str__(self) -> str:
        if self.field_errors:
            field_msgs = [f"{field}: {error}" for field, error in self.field_errors.items()]
            return f"{self.message} (field errors: {', '.join(field_msgs)})"
        return self.message


def _resource_from_url(url: Optional[str]) -> tuple[Optional[str], Optional[str]]:
    """Work out which application a failed URL referred to, if any."""
    if not url:
        return None, None
    path_parts = urlsplit(url).path.strip("/").split("/")
    try:
        index = path_parts.index("applications")
    except ValueError:
        return None, None
    if index + 1 < len(path_parts):
        return "application", unquote(path_parts[index + 1])
    return "application", None


def parse_asterisk_error(
        response_data: Union[Dict[str, Any], str, None],
        status_code: int,
        method: Optional[str] = None,
        url: Optional[str] = None,
        username: Optional[str] = None,
) -> ARIError:
    """Parse an Asterisk error response and return the matching exception.

    Asterisk reports failures as ``{"message": "..."}``; anything else is
    kept as the raw response text.

    Args:
        response_data: Response data from Asterisk (dict or string)
        status_code: HTTP status code
        method: HTTP method
        url: Request URL
        username: Username the request was authenticated with

    Returns:
        Appropriate ARIError subclass instance

    Example:
        ```python
        async with session.request(method, url) as response:
            if not response.ok:
                raise parse_asterisk_error(await response.text(), response.status, method, url)
        ```
    """
    response_text: Optional[str] = None
    if isinstance(response_data, str):
        response_text = response_data
        try:
            data = json.loads(response_data) if response_data else {}
        except json.JSONDecodeError:
            data = {"message": response_data}
    else:
        data = response_data if response_data is not None else {}
        if data:
            response_text = json.dumps(data)

    if not isinstance(data, dict):
        data = {"message": str(data)}

    message = data.get("message") or f"HTTP {status_code} error"
    common = {
        "method": method,
        "url": url,
        "response_text": response_text,
        "asterisk_response": data,
    }

    if status_code == 401:
        return AuthenticationError(message, username=username, **common)
    elif status_code == 404:
        resource_type, resource_id = _resource_from_url(url)
        return ResourceNotFoundError(
            message,
            resource_type=resource_type,
            resource_id=resource_id,
            **common,
        )
    elif status_code == 409:
        return ConflictError(message, **common)
    elif status_code == 422:
        return UnprocessableEntityError(message, **common)
    elif 400 <= status_code < 600:
        return HTTPError(message, status_code=status_code, **common)
    else:
        return ARIError(
            message,
            details={"status_code": status_code, "method": method, "url": url},
            asterisk_response=data,
        )
