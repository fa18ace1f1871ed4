# app/domain/services/search_service.py
"""
SearchService
==============

차원 검색(읽기 경로) 오케스트레이터.

Flow:
    (검증된 SearchRequest) → Dataset API 버전 확인 → 검색 인덱스 질의 → 응답 변환

- 도메인은 **Port(인터페이스)** 에만 의존합니다. (DIP)
- 구현체는 adapters 레이어에서 주입(의존성 주입; DI)합니다.
- 포트가 던진 도메인 예외(ResourceNotFound/UpstreamFailure/MalformedHighlight)는 그대로 전파합니다.

예시:
    svc = SearchService(datasets, searcher, mapper)
    results = svc.search(ref, request)
"""

from __future__ import annotations

import logging

from dimension_search.app.domain.ports import DatasetPort, SearchPort
from dimension_search.app.domain.models import DimensionRef, SearchRequest, SearchResults
from dimension_search.app.domain.services.result_mapper import SearchResultMapper

logger = logging.getLogger(__name__)


class SearchService:

    def __init__(
        self,
        datasets: DatasetPort,
        searcher: SearchPort,
        mapper: SearchResultMapper) -> None:
        self._datasets = datasets
        self._searcher = searcher
        self._mapper = mapper

    # ================= public API =================
    def search(
        self,
        ref: DimensionRef,
        request: SearchRequest,
        authenticated: bool = False) -> SearchResults:
        """
        차원 검색을 수행하는 메서드.
        Args:
            ref: DimensionRef           : 데이터셋/에디션/버전/차원
            request: SearchRequest      : 검증된 검색 요청
            authenticated: bool         : Dataset API 호출 시 서비스 인증 사용 여부
        Returns:
            SearchResults: 검색 결과
        """
        data = {"ref": ref.model_dump(), "query": request.query,
                "limit": request.limit, "offset": request.offset}
        logger.info("service.search", extra={"data": data})

        version = self._datasets.get_version(ref, authenticated=authenticated)
        hits = self._searcher.search(version.id, ref.dimension, request)
        results = self._mapper.map(hits, request, ref)

        logger.info("service.search: done", extra={"data": {**data, "count": results.count,
                                                             "returned": len(results.items)}})
        return results
