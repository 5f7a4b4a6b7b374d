from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str | None = None

    def __post_init__(self) -> None:
        if not self.access_token:
            raise ValueError("access_token must be a non-empty string")
        if self.refresh_token == "":
            object.__setattr__(self, "refresh_token", None)

    def to_dict(self) -> dict[str, Any]:
        return {"accessToken": self.access_token, "refreshToken": self.refresh_token}

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "TokenPair | None":
        access_token = payload.get("accessToken")
        if not isinstance(access_token, str) or not access_token:
            return None
        refresh_token = payload.get("refreshToken")
        if not isinstance(refresh_token, str):
            refresh_token = None
        return cls(access_token=access_token, refresh_token=refresh_token)


@dataclass(frozen=True)
class ApiResponse:
    """Outcome of one API call.

    Exactly one of ``data``/``error`` is meaningful. ``status`` is the HTTP
    status code, or 0 when no response was obtained.
    """

    status: int
    data: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: Any, status: int) -> "ApiResponse":
        return cls(status=status, data=data)

    @classmethod
    def failure(cls, error: str, status: int) -> "ApiResponse":
        return cls(status=status, error=error)


@dataclass(frozen=True)
class AuthState:
    is_signed_in: bool
    username: str | None = None
