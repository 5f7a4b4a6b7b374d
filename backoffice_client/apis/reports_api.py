from __future__ import annotations

from backoffice_client.config import EndpointKey
from backoffice_client.models import ApiResponse
from backoffice_client.repository import ApiRepository


class ReportsApi:
    def __init__(self, repository: ApiRepository):
        self._repository = repository

    def analytics(self) -> ApiResponse:
        return self._repository.call(EndpointKey.GET_ANALYTICS, "GET")

    def feedbacks(self) -> ApiResponse:
        return self._repository.call(EndpointKey.GET_FEEDBACKS, "GET")

    def tickets(self) -> ApiResponse:
        return self._repository.call(EndpointKey.GET_TICKETS, "GET")
