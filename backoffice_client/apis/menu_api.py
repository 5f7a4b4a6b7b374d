from __future__ import annotations

from typing import Any

from backoffice_client.config import EndpointKey
from backoffice_client.models import ApiResponse
from backoffice_client.pagination import PaginationRequest, build_pagination_query
from backoffice_client.repository import ApiRepository

DEFAULT_CATEGORY_PAGINATION = PaginationRequest(page_number=1, page_size=100, sort_by="name")


class MenuApi:
    def __init__(self, repository: ApiRepository):
        self._repository = repository

    def list_items(self, pagination: PaginationRequest | None = None) -> ApiResponse:
        params = build_pagination_query(pagination) if pagination else None
        return self._repository.call(EndpointKey.GET_MENU_ITEMS, "GET", params=params)

    def get_item(self, item_id: int | str) -> ApiResponse:
        return self._repository.call(EndpointKey.GET_MENU_ITEM_BY_ID, "GET", path_params={"id": item_id})

    def create_item(self, payload: dict[str, Any], image: Any = None) -> ApiResponse:
        """Create a menu item; ``image`` switches the request to a multipart upload."""
        files = {"image": image} if image is not None else None
        return self._repository.call(EndpointKey.CREATE_MENU_ITEM, "POST", payload, files=files)

    def update_item(self, item_id: int | str, payload: dict[str, Any]) -> ApiResponse:
        return self._repository.call(
            EndpointKey.UPDATE_MENU_ITEM,
            "PUT",
            payload,
            path_params={"id": item_id},
        )

    def delete_item(self, item_id: int | str) -> ApiResponse:
        return self._repository.call(EndpointKey.DELETE_MENU_ITEM, "DELETE", path_params={"id": item_id})

    def list_categories(
        self,
        branch_id: int | str,
        pagination: PaginationRequest | None = None,
    ) -> ApiResponse:
        return self._repository.call(
            EndpointKey.GET_MENU_CATEGORIES_BY_BRANCH,
            "GET",
            path_params={"branchId": branch_id},
            params=build_pagination_query(pagination or DEFAULT_CATEGORY_PAGINATION),
        )
