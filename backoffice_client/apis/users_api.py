from __future__ import annotations

from backoffice_client.config import EndpointKey
from backoffice_client.models import ApiResponse
from backoffice_client.pagination import PaginationRequest, PaginationResponse, build_pagination_query
from backoffice_client.repository import ApiRepository


class UsersApi:
    def __init__(self, repository: ApiRepository):
        self._repository = repository

    def list(self, pagination: PaginationRequest | None = None) -> ApiResponse:
        request = pagination or PaginationRequest(sort_by="name")
        response = self._repository.call(
            EndpointKey.GET_USERS,
            "GET",
            params=build_pagination_query(request),
        )
        if not response.ok:
            return response
        return ApiResponse.success(PaginationResponse.from_payload(response.data), response.status)
