"""
검색 백엔드 hit 목록 → SearchResults 응답 변환.
"""

from __future__ import annotations

from typing import Iterable

from dimension_search.app.domain.highlights import HighlightRecomputer
from dimension_search.app.domain.models import (
    HIGHLIGHT_FIELDS,
    DimensionRef,
    Matches,
    RawHit,
    SearchHits,
    SearchRequest,
    SearchResultItem,
    SearchResults,
)
from dimension_search.app.domain.utils import build_dimension_option_url


class SearchResultMapper:

    def __init__(self, host: str, recomputer: HighlightRecomputer) -> None:
        self._host = host
        self._recomputer = recomputer

    def map(self, hits: SearchHits, request: SearchRequest, ref: DimensionRef) -> SearchResults:
        """
        Args:
            hits: 백엔드 결과(전체 건수 + 현재 페이지)
            request: 검증된 요청(limit/offset 그대로 응답에 반영)
            ref: 요청 경로의 데이터셋/에디션/버전/차원
        Returns:
            SearchResults: items 순서는 백엔드 순서 그대로
        """
        return SearchResults(
            count=hits.total,
            limit=request.limit,
            offset=request.offset,
            items=list(self._map_items(hits.hits, ref)),
        )

    def _map_items(self, hits: Iterable[RawHit], ref: DimensionRef) -> Iterable[SearchResultItem]:
        for hit in hits:
            yield self.map_hit(hit, ref)

    def map_hit(self, hit: RawHit, ref: DimensionRef) -> SearchResultItem:
        src = hit.source
        code = str(src.get("code", ""))
        matches = {
            field: self._recomputer.recompute(str(src.get(field) or ""), hit.highlight.get(field))
            for field in HIGHLIGHT_FIELDS
        }
        return SearchResultItem(
            code=code,
            dimension_option_url=build_dimension_option_url(self._host, ref, code),
            has_data=bool(src.get("has_data", False)),
            label=str(src.get("label") or ""),
            number_of_children=int(src.get("number_of_children") or 0),
            matches=Matches(**matches),
        )
