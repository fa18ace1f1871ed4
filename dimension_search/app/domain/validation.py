"""
검색 쿼리스트링(q, limit, offset) 검증.
"""

from __future__ import annotations

import re

from dimension_search.app.domain.models import SearchRequest
from dimension_search.app.platform.exceptions import (
    EmptyQuery,
    InvalidParameter,
    OffsetTooLarge,
)


# ASCII 10진수만 허용 (공백, "_", 유니코드 숫자 불가)
_INTEGER = re.compile(r"[+-]?[0-9]+")


def _parse_non_negative(field: str, raw: str) -> int:
    if not _INTEGER.fullmatch(raw):
        raise InvalidParameter(field, f"invalid literal for int() with base 10: {raw!r}")
    value = int(raw)
    if value < 0:
        raise InvalidParameter(field, f"{field} must be a non-negative integer, got {raw!r}")
    return value


def parse_search_request(
    q: str | None,
    limit: str | None,
    offset: str | None,
    *,
    default_limit: int,
    max_offset: int,
) -> SearchRequest:
    """
    쿼리스트링 원본 값을 SearchRequest로 변환한다.

    Args:
        q: 검색어(필수)
        limit: 결과 개수(없으면 default_limit)
        offset: 시작 위치(없으면 0, max_offset 이하)
        default_limit: limit 기본값
        max_offset: offset 상한(포함)
    Returns:
        SearchRequest
    Raises:
        EmptyQuery, InvalidParameter, OffsetTooLarge
    """
    if q is None or not q.strip():
        raise EmptyQuery()

    lim = default_limit if limit is None else _parse_non_negative("limit", limit)
    off = 0 if offset is None else _parse_non_negative("offset", offset)
    if off > max_offset:
        raise OffsetTooLarge(max_offset)

    return SearchRequest(query=q, limit=lim, offset=off)
