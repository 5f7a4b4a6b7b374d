from __future__ import annotations

from typing import Any

from backoffice_client.config import EndpointKey
from backoffice_client.models import ApiResponse
from backoffice_client.pagination import PaginationRequest, build_pagination_query
from backoffice_client.repository import ApiRepository


class EntitiesApi:
    def __init__(self, repository: ApiRepository):
        self._repository = repository

    def list(self, pagination: PaginationRequest | None = None) -> ApiResponse:
        params = build_pagination_query(pagination) if pagination else None
        return self._repository.call(EndpointKey.GET_ENTITIES, "GET", params=params)

    def get(self, entity_id: int | str) -> ApiResponse:
        return self._repository.call(EndpointKey.GET_ENTITY_BY_ID, "GET", path_params={"id": entity_id})

    def create(self, payload: dict[str, Any], logo: Any = None) -> ApiResponse:
        """Create an entity; ``logo`` switches the request to a multipart upload."""
        files = {"logo": logo} if logo is not None else None
        return self._repository.call(EndpointKey.CREATE_ENTITY, "POST", payload, files=files)

    def update(self, entity_id: int | str, payload: dict[str, Any]) -> ApiResponse:
        return self._repository.call(
            EndpointKey.UPDATE_ENTITY,
            "PUT",
            payload,
            path_params={"id": entity_id},
        )

    def delete(self, entity_id: int | str) -> ApiResponse:
        return self._repository.call(EndpointKey.DELETE_ENTITY, "DELETE", path_params={"id": entity_id})
