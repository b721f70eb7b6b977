"""Helper utilities shared across API route handlers."""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import urlencode

from app.domain.entities import PagedResult


def build_query_params(values: Mapping[str, object]) -> str:
    """Encode the non-empty ``values`` as a query string."""

    return urlencode({key: value for key, value in values.items() if value not in (None, "")})


def build_page_link(
    route: str,
    *,
    page: int,
    limit: int,
    sort: str,
    filter_text: str,
    params: str,
) -> str:
    query = build_query_params(
        {"page": page, "limit": limit, "sort": sort, "filter": filter_text}
    )
    if params:
        query = f"{query}&{params}"
    return f"{route}?{query}"


def page_envelope(
    route: str,
    result: PagedResult,
    *,
    data: list,
    filter_text: str,
    params: Mapping[str, object] | None = None,
) -> dict[str, object]:
    """Describe ``result`` with its counts and links to neighbouring pages."""

    encoded_params = build_query_params(params or {})
    page = result.page.page
    limit = result.page.limit
    sort = result.sort.token

    next_page = None
    if page * limit < result.total_filtered_count:
        next_page = build_page_link(
            route,
            page=page + 1,
            limit=limit,
            sort=sort,
            filter_text=filter_text,
            params=encoded_params,
        )
    previous_page = None
    if page > 1:
        previous_page = build_page_link(
            route,
            page=page - 1,
            limit=limit,
            sort=sort,
            filter_text=filter_text,
            params=encoded_params,
        )

    return {
        "route": route,
        "page": page,
        "limit": limit,
        "total_count": result.total_count,
        "total_filtered_count": result.total_filtered_count,
        "sort": sort,
        "filter": filter_text,
        "params": encoded_params,
        "next_page": next_page,
        "previous_page": previous_page,
        "data": data,
    }
