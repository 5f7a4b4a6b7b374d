from __future__ import annotations

from typing import Any, Mapping

import requests

from backoffice_client.models import ApiResponse

VALIDATION_ERROR_KEY = "Validation Error"


class ApiHttpError(RuntimeError):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code


class HttpClient:
    """Single-shot transport. Network failures propagate as requests.RequestException."""

    def __init__(self, session: requests.Session | None = None, default_timeout_seconds: float = 30):
        self._session = session or requests.Session()
        self._default_timeout_seconds = default_timeout_seconds

    def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        json_body: Any = None,
        params: Mapping[str, Any] | None = None,
        data: Any = None,
        files: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> requests.Response:
        return self._session.request(
            method,
            url,
            headers=dict(headers),
            json=json_body,
            params=params,
            data=data,
            files=files,
            timeout=timeout if timeout is not None else self._default_timeout_seconds,
        )

    def close(self) -> None:
        self._session.close()


def extract_error_message(status_code: int, text: str | None) -> str:
    """Build a displayable message from an error response body.

    A 422 body shaped ``{"errors": {"Validation Error": [...]}}`` yields the
    entries joined with ". ". Other JSON objects yield their ``message``,
    ``error`` or ``title`` field. Non-JSON bodies are returned verbatim.
    """
    if not text:
        return f"Request failed with status {status_code}"

    try:
        parsed = requests.models.complexjson.loads(text)
    except ValueError:
        return text

    if not isinstance(parsed, dict):
        return text

    errors = parsed.get("errors")
    if status_code == 422 and isinstance(errors, dict) and errors.get(VALIDATION_ERROR_KEY):
        validation_errors = errors[VALIDATION_ERROR_KEY]
        if isinstance(validation_errors, list):
            return ". ".join(str(item) for item in validation_errors)
        return str(validation_errors)

    for key in ("message", "error", "title"):
        value = parsed.get(key)
        if value:
            return str(value)
    return text


def handle_api_response(response: ApiResponse) -> Any:
    if response.error is not None:
        raise ApiHttpError(status_code=response.status, message=response.error)
    return response.data


def format_api_error(error: Any) -> str:
    if not error:
        return "An unexpected error occurred"

    if isinstance(error, str):
        return error

    if isinstance(error, BaseException):
        return str(error) or "An unexpected error occurred"

    if isinstance(error, Mapping):
        message = error.get("message")
        if message:
            return str(message)

        errors = error.get("errors")
        if isinstance(errors, Mapping):
            messages: list[str] = []
            for value in errors.values():
                if isinstance(value, (list, tuple)):
                    messages.extend(str(item) for item in value)
                else:
                    messages.append(str(value))
            if messages:
                return ". ".join(messages)

    return "An unexpected error occurred"
