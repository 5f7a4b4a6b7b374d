from __future__ import annotations

from typing import Any

from backoffice_client.config import EndpointKey
from backoffice_client.models import ApiResponse
from backoffice_client.pagination import PaginationRequest, build_pagination_query
from backoffice_client.repository import ApiRepository


class OrdersApi:
    def __init__(self, repository: ApiRepository):
        self._repository = repository

    def list(self, pagination: PaginationRequest | None = None, status: str | None = None) -> ApiResponse:
        params: dict[str, Any] = build_pagination_query(pagination) if pagination else {}
        if status:
            params["Status"] = status
        return self._repository.call(EndpointKey.GET_ORDERS, "GET", params=params or None)

    def get(self, order_id: int | str) -> ApiResponse:
        return self._repository.call(EndpointKey.GET_ORDER_BY_ID, "GET", path_params={"id": order_id})

    def create(self, payload: dict[str, Any]) -> ApiResponse:
        return self._repository.call(EndpointKey.CREATE_ORDER, "POST", payload)

    def update(self, order_id: int | str, payload: dict[str, Any]) -> ApiResponse:
        return self._repository.call(
            EndpointKey.UPDATE_ORDER,
            "PATCH",
            payload,
            path_params={"id": order_id},
        )

    def delete(self, order_id: int | str) -> ApiResponse:
        return self._repository.call(EndpointKey.DELETE_ORDER, "DELETE", path_params={"id": order_id})
