"""
Tests for the HTTP transport and error helpers.
"""

from unittest.mock import MagicMock

import pytest
import requests

from backoffice_client.http import (
    ApiHttpError,
    HttpClient,
    extract_error_message,
    format_api_error,
    handle_api_response,
)
from backoffice_client.models import ApiResponse


class TestExtractErrorMessage:
    def test_validation_error_list(self):
        body = '{"errors": {"Validation Error": ["Name required", "Price must be positive"]}}'
        assert extract_error_message(422, body) == "Name required. Price must be positive"

    def test_validation_error_string(self):
        body = '{"errors": {"Validation Error": "Name required"}}'
        assert extract_error_message(422, body) == "Name required"

    def test_validation_shape_only_special_for_422(self):
        body = '{"errors": {"Validation Error": ["a"]}, "title": "Bad input"}'
        assert extract_error_message(400, body) == "Bad input"

    def test_blank_message_falls_through_to_error(self):
        assert extract_error_message(400, '{"message": "", "error": "nope"}') == "nope"

    def test_json_without_known_fields_returns_raw_text(self):
        body = '{"detail": "something"}'
        assert extract_error_message(400, body) == body

    def test_json_array_returns_raw_text(self):
        assert extract_error_message(400, '["a", "b"]') == '["a", "b"]'

    def test_plain_text(self):
        assert extract_error_message(502, "Bad Gateway") == "Bad Gateway"

    @pytest.mark.parametrize("text", [None, ""])
    def test_no_body(self, text):
        assert extract_error_message(404, text) == "Request failed with status 404"


class TestHandleApiResponse:
    def test_returns_data(self):
        assert handle_api_response(ApiResponse.success({"id": 1}, 200)) == {"id": 1}

    def test_raises_with_status(self):
        with pytest.raises(ApiHttpError) as exc_info:
            handle_api_response(ApiResponse.failure("Forbidden branch", 403))

        assert exc_info.value.status_code == 403
        assert str(exc_info.value) == "Forbidden branch"


class TestFormatApiError:
    @pytest.mark.parametrize(
        "error, expected",
        [
            (None, "An unexpected error occurred"),
            ("Name required", "Name required"),
            (ValueError("bad price"), "bad price"),
            ({"message": "from api"}, "from api"),
            ({"errors": {"Name": ["required"], "Price": ["must be positive"]}}, "required. must be positive"),
            ({"errors": {"Name": "required"}}, "required"),
            ({"unexpected": True}, "An unexpected error occurred"),
            (42, "An unexpected error occurred"),
        ],
    )
    def test_formatting(self, error, expected):
        assert format_api_error(error) == expected


class TestHttpClient:
    def test_send_forwards_arguments(self):
        session = MagicMock(spec=requests.Session)
        client = HttpClient(session=session, default_timeout_seconds=12)

        client.send("POST", "https://api.test/x", {"Accept": "*/*"}, json_body={"a": 1})

        session.request.assert_called_once_with(
            "POST",
            "https://api.test/x",
            headers={"Accept": "*/*"},
            json={"a": 1},
            params=None,
            data=None,
            files=None,
            timeout=12,
        )

    def test_explicit_timeout_wins(self):
        session = MagicMock(spec=requests.Session)
        client = HttpClient(session=session)

        client.send("GET", "https://api.test/x", {}, timeout=3)

        assert session.request.call_args.kwargs["timeout"] == 3

    def test_network_errors_propagate(self):
        session = MagicMock(spec=requests.Session)
        session.request.side_effect = requests.ConnectionError("refused")
        client = HttpClient(session=session)

        with pytest.raises(requests.ConnectionError):
            client.send("GET", "https://api.test/x", {})

    def test_close_closes_session(self):
        session = MagicMock(spec=requests.Session)
        HttpClient(session=session).close()
        session.close.assert_called_once_with()
