"""Normalization of paging and sorting parameters received from callers."""

from __future__ import annotations

from collections.abc import Iterable

from app.config import Settings, get_settings
from app.domain.entities import MAX_RECORD_ID, PageRequest, SortSpec

DESCENDING_SUFFIX = "|desc"


def normalize_page_request(
    page: int | None,
    limit: int | None,
    *,
    settings: Settings | None = None,
) -> PageRequest:
    """Clamp ``page`` and ``limit`` to usable values.

    Pages below 1 become 1 and pages past ``MAX_RECORD_ID`` are capped. With
    ``legacy_limit_clamp`` enabled any limit below the default page size is
    raised to it; otherwise only limits below 1 are replaced. Limits are
    capped at ``max_page_limit``.
    """

    settings = settings or get_settings()
    page = min(max(page or 1, 1), MAX_RECORD_ID)
    default_limit = settings.default_page_limit
    if limit is None or limit < 1:
        limit = default_limit
    elif settings.legacy_limit_clamp:
        limit = max(limit, default_limit)
    return PageRequest(page=page, limit=min(limit, settings.max_page_limit))


def parse_sort(token: str | None, allowed: Iterable[str]) -> SortSpec:
    """Parse ``field`` or ``field|desc``; unknown fields sort by id ascending."""

    if not token:
        return SortSpec()
    raw = token.strip().lower()
    descending = raw.endswith(DESCENDING_SUFFIX)
    field = raw[: -len(DESCENDING_SUFFIX)] if descending else raw
    if field not in set(allowed):
        return SortSpec()
    return SortSpec(field=field, descending=descending)


__all__ = ["DESCENDING_SUFFIX", "normalize_page_request", "parse_sort"]
