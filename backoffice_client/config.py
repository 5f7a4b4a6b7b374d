from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import os
from pathlib import Path
import re
from typing import Any, Mapping
from urllib.parse import quote


class ConfigurationError(ValueError):
    pass


class EndpointKey(str, Enum):
    LOGIN = "login"
    SIGNUP = "signup"
    REFRESH_TOKEN = "refreshToken"

    GET_ENTITIES = "getEntities"
    CREATE_ENTITY = "createEntity"
    GET_ENTITY_BY_ID = "getEntityById"
    UPDATE_ENTITY = "updateEntity"
    DELETE_ENTITY = "deleteEntity"

    GET_BRANCHES = "getBranches"
    CREATE_BRANCH = "createBranch"
    UPDATE_BRANCH = "updateBranch"
    DELETE_BRANCH = "deleteBranch"

    GET_MENU_ITEMS = "getMenuItems"
    GET_MENU_ITEM_BY_ID = "getMenuItemById"
    CREATE_MENU_ITEM = "createMenuItem"
    UPDATE_MENU_ITEM = "updateMenuItem"
    DELETE_MENU_ITEM = "deleteMenuItem"
    GET_MENU_CATEGORIES_BY_BRANCH = "getMenuCategoriesByBranch"

    GET_ORDERS = "getOrders"
    GET_ORDER_BY_ID = "getOrderById"
    CREATE_ORDER = "createOrder"
    UPDATE_ORDER = "updateOrder"
    DELETE_ORDER = "deleteOrder"

    GET_USERS = "getUsers"

    GET_ANALYTICS = "getAnalytics"
    GET_FEEDBACKS = "getFeedbacks"
    GET_TICKETS = "getTickets"


DEFAULT_ENDPOINTS: dict[str, str] = {
    EndpointKey.LOGIN.value: "/api/auth/login",
    EndpointKey.SIGNUP.value: "/api/User/restaurant-owner",
    EndpointKey.REFRESH_TOKEN.value: "/api/auth/refresh",
    EndpointKey.GET_ENTITIES.value: "/api/Entity",
    EndpointKey.CREATE_ENTITY.value: "/api/Entity",
    EndpointKey.GET_ENTITY_BY_ID.value: "/api/Entity/{id}",
    EndpointKey.UPDATE_ENTITY.value: "/api/Entity/{id}",
    EndpointKey.DELETE_ENTITY.value: "/api/Entity/{id}",
    EndpointKey.GET_BRANCHES.value: "/api/branches",
    EndpointKey.CREATE_BRANCH.value: "/api/branches",
    EndpointKey.UPDATE_BRANCH.value: "/api/branches/{id}",
    EndpointKey.DELETE_BRANCH.value: "/api/branches/{id}",
    EndpointKey.GET_MENU_ITEMS.value: "/api/menu-items",
    EndpointKey.GET_MENU_ITEM_BY_ID.value: "/api/menu-items/{id}",
    EndpointKey.CREATE_MENU_ITEM.value: "/api/menu-items",
    EndpointKey.UPDATE_MENU_ITEM.value: "/api/menu-items/{id}",
    EndpointKey.DELETE_MENU_ITEM.value: "/api/menu-items/{id}",
    EndpointKey.GET_MENU_CATEGORIES_BY_BRANCH.value: "/api/branches/{branchId}/menu-categories",
    EndpointKey.GET_ORDERS.value: "/api/orders",
    EndpointKey.GET_ORDER_BY_ID.value: "/api/orders/{id}",
    EndpointKey.CREATE_ORDER.value: "/api/orders",
    EndpointKey.UPDATE_ORDER.value: "/api/orders/{id}",
    EndpointKey.DELETE_ORDER.value: "/api/orders/{id}",
    EndpointKey.GET_USERS.value: "/api/User/users",
    EndpointKey.GET_ANALYTICS.value: "/api/analytics",
    EndpointKey.GET_FEEDBACKS.value: "/api/feedbacks",
    EndpointKey.GET_TICKETS.value: "/api/tickets",
}

DEFAULT_HEADERS: dict[str, str] = {
    "Accept": "*/*",
    "Content-Type": "application/json",
}

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def resolve_path(template: str, path_params: Mapping[str, Any] | None = None) -> str:
    """Fill ``{name}`` placeholders of an endpoint template.

    Values are URL-quoted. Parameters without a matching placeholder are
    ignored; a placeholder without a value raises ConfigurationError.
    """
    params = path_params or {}
    missing = [name for name in _PLACEHOLDER.findall(template) if name not in params]
    if missing:
        raise ConfigurationError(
            f"Missing path parameters for '{template}': " + ", ".join(missing)
        )

    return _PLACEHOLDER.sub(lambda match: quote(str(params[match.group(1)]), safe=""), template)


@dataclass(frozen=True)
class ApiConfig:
    base_url: str
    endpoints: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ENDPOINTS))
    headers: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))
    timeout_seconds: float = 30


@dataclass(frozen=True)
class AppSettings:
    base_url: str
    timeout_seconds: int
    token_cache_path: str
    log_level: str

    @staticmethod
    def from_env() -> "AppSettings":
        _load_dotenv_if_present()

        base_url = os.getenv("BACKOFFICE_BASE_URL", "").strip().rstrip("/")
        raw_timeout = os.getenv("BACKOFFICE_TIMEOUT_SECONDS", "30").strip()
        try:
            timeout_seconds = int(raw_timeout)
        except ValueError as exc:
            raise ConfigurationError(
                f"BACKOFFICE_TIMEOUT_SECONDS must be an integer, got '{raw_timeout}'"
            ) from exc

        default_cache_path = os.path.join(
            os.getenv("LOCALAPPDATA", os.getcwd()),
            "BackofficeApiClient",
            "tokens.json",
        )
        token_cache_path = os.getenv("BACKOFFICE_TOKEN_CACHE_PATH", default_cache_path)
        log_level = os.getenv("BACKOFFICE_LOG_LEVEL", "INFO").strip().upper()

        settings = AppSettings(
            base_url=base_url,
            timeout_seconds=timeout_seconds,
            token_cache_path=token_cache_path,
            log_level=log_level,
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        if not self.base_url:
            raise ConfigurationError("Missing required settings: BACKOFFICE_BASE_URL")

        if not self.base_url.startswith(("http://", "https://")):
            raise ConfigurationError("BACKOFFICE_BASE_URL must start with http:// or https://")

        if self.timeout_seconds <= 0:
            raise ConfigurationError("BACKOFFICE_TIMEOUT_SECONDS must be greater than 0")

        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level not in valid_levels:
            raise ConfigurationError(
                "BACKOFFICE_LOG_LEVEL must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL"
            )

    def api_config(self) -> ApiConfig:
        return ApiConfig(
            base_url=self.base_url,
            endpoints=dict(DEFAULT_ENDPOINTS),
            headers=dict(DEFAULT_HEADERS),
            timeout_seconds=self.timeout_seconds,
        )


def _load_dotenv_if_present(file_name: str = ".env") -> None:
    # An explicit BACKOFFICE_ENV_FILE is read first, so its values win over ./.env.
    explicit = os.getenv("BACKOFFICE_ENV_FILE", "").strip()
    paths = [Path(explicit).expanduser()] if explicit else []
    paths.append(Path.cwd() / file_name)

    loaded: set[Path] = set()
    for path in paths:
        resolved = path.resolve()
        if resolved not in loaded:
            loaded.add(resolved)
            _load_env_file(path)


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return

    try:
        with path.open("r", encoding="utf-8") as env_file:
            for raw_line in env_file:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue

                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"').strip("'")

                if key and key not in os.environ:
                    os.environ[key] = value
    except OSError:
        return
