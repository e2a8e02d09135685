"""Unit tests for the exception hierarchy and parse_asterisk_error."""

import pytest

from asterisk_ari.exceptions import (
    ARIError,
    AuthenticationError,
    ConflictError,
    ConnectionError,
    HTTPError,
    ResourceNotFoundError,
    UnprocessableEntityError,
    ValidationError,
    parse_asterisk_error,
)

URL = "http://pbx:8088/ari/applications/my%20app/subscription"


class TestParseAsteriskError:
    """Test cases for mapping Asterisk error responses to exceptions."""

    @pytest.mark.parametrize(
        "status, expected_type",
        [
            (400, HTTPError),
            (401, AuthenticationError),
            (404, ResourceNotFoundError),
            (409, ConflictError),
            (422, UnprocessableEntityError),
            (500, HTTPError),
            (503, HTTPError),
        ],
    )
    def test_status_mapping(self, status, expected_type):
        error = parse_asterisk_error('{"message": "boom"}', status, "POST", URL)

        assert type(error) is expected_type
        assert isinstance(error, HTTPError)
        assert error.status_code == status
        assert error.method == "POST"
        assert error.url == URL
        assert error.message == "boom"
        assert error.asterisk_response == {"message": "boom"}
        assert error.response_text == '{"message": "boom"}'

    def test_not_found_extracts_application(self):
        error = parse_asterisk_error({"message": "Application not found"}, 404, "DELETE", URL)

        assert error.resource_type == "application"
        assert error.resource_id == "my app"
        assert str(error) == "404: Application not found (application=my app)"

    def test_not_found_outside_applications(self):
        error = parse_asterisk_error({}, 404, "GET", "http://pbx:8088/ari/channels/1")

        assert error.resource_type is None
        assert error.resource_id is None
        assert error.message == "HTTP 404 error"

    def test_plain_text_body(self):
        error = parse_asterisk_error("Internal Server Error", 500, "GET", URL)

        assert error.message == "Internal Server Error"
        assert error.response_text == "Internal Server Error"
        assert error.is_server_error
        assert not error.is_client_error

    def test_empty_body(self):
        error = parse_asterisk_error("", 422, "POST", URL)

        assert error.message == "HTTP 422 error"
        assert error.is_client_error

    def test_authentication_error_carries_username(self):
        error = parse_asterisk_error({"message": "Unauthorized"}, 401, "GET", URL, username="asterisk")

        assert error.username == "asterisk"
        assert "username=asterisk" in str(error)

    def test_unexpected_status_is_generic(self):
        error = parse_asterisk_error({"message": "odd"}, 302, "GET", URL)

        assert type(error) is ARIError
        assert error.details["status_code"] == 302


class TestExceptionFormatting:
    """Test cases for exception string representations."""

    def test_http_error_str(self):
        error = HTTPError("Bad request", 400, method="GET", url="http://x/ari/applications")
        assert str(error) == "400: Bad request (GET http://x/ari/applications)"

    def test_connection_error_str(self):
        error = ConnectionError("Network error", url="http://x/ari", timeout=5.0)
        assert str(error) == "Network error (url=http://x/ari, timeout=5.0s)"

    def test_validation_error_str(self):
        error = ValidationError("Invalid", field_errors={"event_source": "empty"}, invalid_value=[])
        assert str(error) == "Invalid (field errors: event_source: empty)"
        assert error.invalid_value == []

    def test_ari_error_repr(self):
        error = ARIError("oops", details={"a": 1})
        assert str(error) == "oops (details: {'a': 1})"
        assert repr(error).startswith("ARIError(message='oops'")
