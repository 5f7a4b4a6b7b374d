from __future__ import annotations

from typing import Any

from backoffice_client.config import EndpointKey
from backoffice_client.models import ApiResponse
from backoffice_client.pagination import PaginationRequest, build_pagination_query
from backoffice_client.repository import ApiRepository


class BranchesApi:
    def __init__(self, repository: ApiRepository):
        self._repository = repository

    def list(
        self,
        entity_id: int | str | None = None,
        pagination: PaginationRequest | None = None,
    ) -> ApiResponse:
        params: dict[str, Any] = build_pagination_query(pagination) if pagination else {}
        if entity_id is not None:
            params["EntityId"] = str(entity_id)
        return self._repository.call(EndpointKey.GET_BRANCHES, "GET", params=params or None)

    def create(self, payload: dict[str, Any]) -> ApiResponse:
        return self._repository.call(EndpointKey.CREATE_BRANCH, "POST", payload)

    def update(self, branch_id: int | str, payload: dict[str, Any]) -> ApiResponse:
        return self._repository.call(
            EndpointKey.UPDATE_BRANCH,
            "PUT",
            payload,
            path_params={"id": branch_id},
        )

    def delete(self, branch_id: int | str) -> ApiResponse:
        return self._repository.call(EndpointKey.DELETE_BRANCH, "DELETE", path_params={"id": branch_id})
