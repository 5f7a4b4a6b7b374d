from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_PAGE_SIZE = 10
PAGE_SIZE_OPTIONS = (10, 20, 50)


@dataclass(frozen=True)
class PaginationRequest:
    page_number: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort_by: str | None = None
    is_ascending: bool = True
    search_term: str | None = None

    def __post_init__(self) -> None:
        if self.page_number < 1:
            raise ValueError("page_number must be 1 or greater")
        if self.page_size < 1:
            raise ValueError("page_size must be 1 or greater")


def build_pagination_query(request: PaginationRequest) -> dict[str, str]:
    query = {
        "PageNumber": str(request.page_number),
        "PageSize": str(request.page_size),
    }
    if request.sort_by:
        query["SortBy"] = request.sort_by
    query["IsAscending"] = "true" if request.is_ascending else "false"

    search_term = (request.search_term or "").strip()
    if search_term:
        query["SearchTerm"] = search_term
    return query


@dataclass(frozen=True)
class PaginationResponse:
    items: list[Any] = field(default_factory=list)
    page_number: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_count: int = 0
    total_pages: int = 0

    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @classmethod
    def from_payload(cls, payload: Any) -> "PaginationResponse":
        if isinstance(payload, list):
            return cls(items=list(payload), page_size=max(len(payload), 1), total_count=len(payload), total_pages=1)
        if not isinstance(payload, dict):
            return cls()

        items = payload.get("items")
        if not isinstance(items, list):
            items = []

        page_size = _as_int(payload.get("pageSize"), DEFAULT_PAGE_SIZE)
        total_count = _as_int(payload.get("totalCount"), len(items))
        total_pages = _as_int(payload.get("totalPages"), -(-total_count // page_size) if page_size else 0)

        return cls(
            items=items,
            page_number=_as_int(payload.get("pageNumber"), 1),
            page_size=page_size,
            total_count=total_count,
            total_pages=total_pages,
        )


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
