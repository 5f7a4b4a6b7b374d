from __future__ import annotations

import copy
from dataclasses import replace
from enum import Enum
import logging
import threading
from typing import Any, Mapping

import requests
from requests.structures import CaseInsensitiveDict

from backoffice_client.config import DEFAULT_HEADERS, ApiConfig, EndpointKey, resolve_path
from backoffice_client.http import HttpClient, extract_error_message
from backoffice_client.logging_utils import mask_secret
from backoffice_client.models import ApiResponse, TokenPair
from backoffice_client.token_store import MemoryTokenStore, TokenStore

logger = logging.getLogger(__name__)

ALLOWED_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})
BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})

AUTHENTICATION_FAILED_MESSAGE = "Authentication failed. Please login again."
NETWORK_ERROR_MESSAGE = "Network error occurred"

_STATUS_LOG_LABELS = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    422: "Validation Error",
    500: "Internal Server Error",
}


class CallState(Enum):
    AWAITING_RESPONSE = "awaiting_response"
    REFRESHING = "refreshing"
    RETRYING = "retrying"
    SUCCESS = "success"
    FAILURE = "failure"
    NETWORK_FAILURE = "network_failure"


def _endpoint_name(endpoint_key: str | EndpointKey) -> str:
    if isinstance(endpoint_key, EndpointKey):
        return endpoint_key.value
    return str(endpoint_key)


def _is_success(response: requests.Response) -> bool:
    return 200 <= response.status_code < 300


def _rewind_files(files: Mapping[str, Any]) -> None:
    """Seek uploaded file objects back to the start so a retry re-sends their content."""
    for value in files.values():
        file_obj = value[1] if isinstance(value, (tuple, list)) and len(value) > 1 else value
        seek = getattr(file_obj, "seek", None)
        if seek is None:
            continue
        seekable = getattr(file_obj, "seekable", None)
        if seekable is not None and not seekable():
            continue
        seek(0)


class ApiRepository:
    """Authenticated client for the back-office REST API.

    Attaches the bearer token to authenticated calls, refreshes it once when
    the API answers 401 and retries the original request once. HTTP and
    network failures come back as ``ApiResponse`` values; ``call`` does not
    raise for them.
    """

    def __init__(
        self,
        config: ApiConfig,
        token_store: TokenStore | None = None,
        http_client: HttpClient | None = None,
    ):
        self._config = copy.deepcopy(config)
        self._token_store = token_store if token_store is not None else MemoryTokenStore()
        self._http_client = http_client or HttpClient()
        self._refresh_lock = threading.Lock()
        self._tokens: TokenPair | None = self._token_store.load()

    def call(
        self,
        endpoint_key: str | EndpointKey,
        method: str = "GET",
        body: Any = None,
        custom_headers: Mapping[str, str] | None = None,
        requires_auth: bool = True,
        path_params: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
    ) -> ApiResponse:
        key = _endpoint_name(endpoint_key)
        template = self._config.endpoints.get(key)
        if template is None:
            return ApiResponse.failure(f"Endpoint '{key}' not found in configuration", 404)

        method = method.upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported HTTP method '{method}'")

        url = f"{self._config.base_url}{resolve_path(template, path_params)}"
        headers = self._build_headers(custom_headers, is_multipart=bool(files))

        sent_token: str | None = None
        if requires_auth and self._tokens is not None:
            sent_token = self._tokens.access_token
            headers["Authorization"] = f"Bearer {sent_token}"

        json_body = None
        form_data = None
        if method in BODY_METHODS and body is not None:
            if files:
                form_data = body
            else:
                json_body = body

        state = CallState.AWAITING_RESPONSE
        result: ApiResponse | None = None
        while result is None:
            if state in (CallState.AWAITING_RESPONSE, CallState.RETRYING):
                try:
                    response = self._http_client.send(
                        method,
                        url,
                        headers=headers,
                        json_body=json_body,
                        params=params,
                        data=form_data,
                        files=files,
                        timeout=self._config.timeout_seconds,
                    )
                except requests.RequestException as exc:
                    state = CallState.NETWORK_FAILURE
                    logger.error("Network error calling %s %s: %s", method, url, exc)
                    result = ApiResponse.failure(str(exc) or NETWORK_ERROR_MESSAGE, 0)
                    continue

                if state is CallState.AWAITING_RESPONSE and self._can_refresh(response, requires_auth):
                    state = CallState.REFRESHING
                elif _is_success(response):
                    state = CallState.SUCCESS
                    result = self._parse_success(response)
                else:
                    state = CallState.FAILURE
                    result = self._parse_failure(response)

            elif state is CallState.REFRESHING:
                logger.info("Token expired, attempting to refresh...")
                new_token = self._refresh_access_token(sent_token)
                if new_token is None:
                    state = CallState.FAILURE
                    result = ApiResponse.failure(AUTHENTICATION_FAILED_MESSAGE, 401)
                    continue

                headers["Authorization"] = f"Bearer {new_token}"
                if files:
                    _rewind_files(files)
                state = CallState.RETRYING

        logger.debug("%s %s finished in state %s with status %s", method, url, state.value, result.status)
        return result

    def _build_headers(
        self,
        custom_headers: Mapping[str, str] | None,
        is_multipart: bool,
    ) -> CaseInsensitiveDict:
        headers = CaseInsensitiveDict(DEFAULT_HEADERS)
        headers.update(self._config.headers)
        if custom_headers:
            headers.update(custom_headers)
        if is_multipart:
            # requests writes the multipart boundary itself.
            headers.pop("Content-Type", None)
        return headers

    def _can_refresh(self, response: requests.Response, requires_auth: bool) -> bool:
        tokens = self._tokens
        return (
            response.status_code == 401
            and requires_auth
            and tokens is not None
            and bool(tokens.refresh_token)
        )

    @staticmethod
    def _parse_success(response: requests.Response) -> ApiResponse:
        if response.status_code == 204 or not response.content:
            return ApiResponse.success(None, response.status_code)

        try:
            return ApiResponse.success(response.json(), response.status_code)
        except ValueError:
            return ApiResponse.success(None, response.status_code)

    def _parse_failure(self, response: requests.Response) -> ApiResponse:
        status = response.status_code
        try:
            text = response.text
        except requests.RequestException:
            text = None

        message = extract_error_message(status, text)
        label = _STATUS_LOG_LABELS.get(status, "API Error")
        logger.error("%s: %s", label, message)

        if status == 401:
            self._handle_authentication_failure()

        return ApiResponse.failure(message, status)

    def _refresh_access_token(self, stale_access_token: str | None) -> str | None:
        with self._refresh_lock:
            tokens = self._tokens
            if tokens is not None and tokens.access_token != stale_access_token:
                logger.info("Access token already refreshed by a concurrent call")
                return tokens.access_token

            if tokens is None or not tokens.refresh_token:
                self._clear_tokens()
                return None

            template = self._config.endpoints.get(EndpointKey.REFRESH_TOKEN.value)
            if template is None:
                logger.error("No refresh endpoint configured")
                self._handle_authentication_failure()
                return None

            headers = CaseInsensitiveDict(DEFAULT_HEADERS)
            headers.update(self._config.headers)
            headers.pop("Authorization", None)

            try:
                response = self._http_client.send(
                    "POST",
                    f"{self._config.base_url}{template}",
                    headers=headers,
                    json_body={"refreshToken": tokens.refresh_token},
                    timeout=self._config.timeout_seconds,
                )
            except requests.RequestException as exc:
                logger.warning("Token refresh failed: %s", exc)
                self._handle_authentication_failure()
                return None

            if not _is_success(response):
                logger.warning("Token refresh rejected with status %s", response.status_code)
                self._handle_authentication_failure()
                return None

            try:
                payload = response.json()
            except ValueError:
                payload = None

            new_access = payload.get("accessToken") if isinstance(payload, dict) else None
            if not isinstance(new_access, str) or not new_access:
                logger.warning("Token refresh response did not contain an access token")
                self._handle_authentication_failure()
                return None

            new_refresh = payload.get("refreshToken")
            if not isinstance(new_refresh, str) or not new_refresh:
                new_refresh = tokens.refresh_token

            self._store_tokens(TokenPair(access_token=new_access, refresh_token=new_refresh))
            logger.info("Access token refreshed (%s)", mask_secret(new_access))
            return new_access

    # In-memory tokens are authoritative; the store only carries them across restarts.
    def _store_tokens(self, tokens: TokenPair) -> None:
        self._tokens = tokens
        try:
            self._token_store.save(tokens)
        except OSError as exc:
            logger.warning("Could not persist tokens: %s", exc)

    def _clear_tokens(self) -> None:
        self._tokens = None
        try:
            self._token_store.clear()
        except OSError as exc:
            logger.warning("Could not clear persisted tokens: %s", exc)

    def _handle_authentication_failure(self) -> None:
        self._clear_tokens()
        logger.info("Authentication failed. Tokens cleared.")

    def set_tokens(self, access_token: str, refresh_token: str | None = None) -> None:
        self._store_tokens(TokenPair(access_token=access_token, refresh_token=refresh_token))

    def clear_tokens(self) -> None:
        self._clear_tokens()

    def get_access_token(self) -> str | None:
        tokens = self._tokens
        return tokens.access_token if tokens is not None else None

    def is_authenticated(self) -> bool:
        return self._tokens is not None

    def update_config(self, **changes: Any) -> None:
        for name in ("endpoints", "headers"):
            if name in changes:
                changes[name] = dict(changes[name])
        self._config = replace(self._config, **changes)

    def update_endpoint(self, endpoint_key: str | EndpointKey, path: str) -> None:
        endpoints = dict(self._config.endpoints)
        endpoints[_endpoint_name(endpoint_key)] = path
        self._config = replace(self._config, endpoints=endpoints)

    def get_config(self) -> ApiConfig:
        return copy.deepcopy(self._config)

    def close(self) -> None:
        self._http_client.close()
