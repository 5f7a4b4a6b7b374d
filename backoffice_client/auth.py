from __future__ import annotations

import logging
from typing import Any

from backoffice_client.config import EndpointKey
from backoffice_client.models import ApiResponse, AuthState
from backoffice_client.repository import ApiRepository

logger = logging.getLogger(__name__)


class AuthenticationError(RuntimeError):
    def __init__(self, message: str, status_code: int = 401):
        super().__init__(message)
        self.status_code = status_code


class AuthManager:
    def __init__(self, repository: ApiRepository):
        self._repository = repository
        self._username: str | None = None

    def sign_in(self, username: str, password: str) -> AuthState:
        username = username.strip()
        if not username or not password:
            raise AuthenticationError("Username and password are required", status_code=400)

        response = self._repository.call(
            EndpointKey.LOGIN,
            "POST",
            {"username": username, "password": password},
            requires_auth=False,
        )
        if not response.ok:
            raise AuthenticationError(f"Login failed: {response.error}", status_code=response.status)

        access_token, refresh_token = self._get_tokens(response.data)
        if not access_token:
            raise AuthenticationError(
                "Login response did not contain an access token",
                status_code=response.status,
            )

        self._repository.set_tokens(access_token, refresh_token)
        self._username = username
        logger.info("Signed in as %s", username)
        return self.get_auth_state()

    def sign_up(self, payload: dict[str, Any]) -> ApiResponse:
        return self._repository.call(EndpointKey.SIGNUP, "POST", payload, requires_auth=False)

    def sign_out(self) -> None:
        self._repository.clear_tokens()
        self._username = None
        logger.info("Signed out")

    def get_auth_state(self) -> AuthState:
        if not self._repository.is_authenticated():
            return AuthState(is_signed_in=False)
        return AuthState(is_signed_in=True, username=self._username)

    @staticmethod
    def _get_tokens(data: Any) -> tuple[str | None, str | None]:
        if not isinstance(data, dict):
            return None, None

        access_token = data.get("accessToken")
        refresh_token = data.get("refreshToken")
        return (
            str(access_token) if access_token else None,
            str(refresh_token) if refresh_token else None,
        )
