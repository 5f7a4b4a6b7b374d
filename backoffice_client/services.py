from __future__ import annotations

from typing import Any

from backoffice_client.apis import BranchesApi, EntitiesApi, MenuApi, OrdersApi, ReportsApi, UsersApi
from backoffice_client.auth import AuthManager
from backoffice_client.config import AppSettings
from backoffice_client.http import HttpClient
from backoffice_client.logging_utils import configure_logging
from backoffice_client.models import AuthState
from backoffice_client.repository import ApiRepository
from backoffice_client.token_store import FileTokenStore


class BackofficeService:
    def __init__(
        self,
        repository: ApiRepository,
        auth_manager: AuthManager,
        entities_api: EntitiesApi,
        branches_api: BranchesApi,
        menu_api: MenuApi,
        orders_api: OrdersApi,
        users_api: UsersApi,
        reports_api: ReportsApi,
    ):
        self._repository = repository
        self._auth_manager = auth_manager
        self.entities = entities_api
        self.branches = branches_api
        self.menu = menu_api
        self.orders = orders_api
        self.users = users_api
        self.reports = reports_api

    @property
    def repository(self) -> ApiRepository:
        return self._repository

    def auth_state(self) -> AuthState:
        return self._auth_manager.get_auth_state()

    def sign_in(self, username: str, password: str) -> AuthState:
        return self._auth_manager.sign_in(username, password)

    def sign_up(self, payload: dict[str, Any]):
        return self._auth_manager.sign_up(payload)

    def sign_out(self) -> None:
        self._auth_manager.sign_out()

    def close(self) -> None:
        self._repository.close()


def build_service(settings: AppSettings | None = None) -> BackofficeService:
    settings = settings or AppSettings.from_env()
    configure_logging(settings.log_level)

    repository = ApiRepository(
        settings.api_config(),
        token_store=FileTokenStore(settings.token_cache_path),
        http_client=HttpClient(default_timeout_seconds=settings.timeout_seconds),
    )
    return BackofficeService(
        repository=repository,
        auth_manager=AuthManager(repository),
        entities_api=EntitiesApi(repository),
        branches_api=BranchesApi(repository),
        menu_api=MenuApi(repository),
        orders_api=OrdersApi(repository),
        users_api=UsersApi(repository),
        reports_api=ReportsApi(repository),
    )
