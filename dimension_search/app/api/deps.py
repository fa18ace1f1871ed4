from __future__ import annotations

from fastapi import Depends, Query, Request
from opensearchpy import OpenSearch

from dimension_search.app.domain.ports import (
    DatasetPort, IdentityPort, IndexPort, OutputQueuePort, SearchPort
)
from dimension_search.app.domain.highlights import HighlightRecomputer
from dimension_search.app.domain.models import SearchRequest
from dimension_search.app.domain.validation import parse_search_request
from dimension_search.app.domain.services.search_service import SearchService
from dimension_search.app.domain.services.index_service import IndexService
from dimension_search.app.domain.services.result_mapper import SearchResultMapper
from dimension_search.app.adapters.datasets.dataset_api_client import DatasetAPIClient
from dimension_search.app.adapters.identity.zebedee_identity import ZebedeeIdentity
from dimension_search.app.adapters.indexers.opensearch_indexer import OpenSearchIndexer
from dimension_search.app.adapters.searchers.opensearch_searcher import OpenSearchSearcher
from dimension_search.app.platform.config import Settings


# ---- 설정/클라이언트 ----
# main.py의 create_app/lifespan에서 app.state에 한 번만 만들어 넣어둔 것을 꺼낸다.
def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_opensearch(request: Request) -> OpenSearch:
    return request.app.state.opensearch


def get_datasets(request: Request, settings: Settings = Depends(get_settings)) -> DatasetPort:
    return DatasetAPIClient(
        request.app.state.http_session,
        settings.DATASET_API_URL,
        service_auth_token=settings.SERVICE_AUTH_TOKEN,
        timeout=settings.REQUEST_TIMEOUT,
    )


def get_identity(request: Request, settings: Settings = Depends(get_settings)) -> IdentityPort:
    return ZebedeeIdentity(
        request.app.state.http_session,
        settings.AUTH_API_URL,
        timeout=settings.REQUEST_TIMEOUT,
    )


def get_output_queue(request: Request) -> OutputQueuePort:
    return request.app.state.output_queue


# ---- 서비스 ----
def get_search_service(
    os: OpenSearch = Depends(get_opensearch),
    datasets: DatasetPort = Depends(get_datasets),
    settings: Settings = Depends(get_settings),
) -> SearchService:
    """
    FastAPI DI에서 OpenSearch/Dataset API 클라이언트를 받아 SearchService를 생성해 주입한다.
    """
    searcher: SearchPort = OpenSearchSearcher(
        os, settings.HIGHLIGHT_PRE_TAG, settings.HIGHLIGHT_POST_TAG)
    mapper = SearchResultMapper(
        settings.SEARCH_API_URL,
        HighlightRecomputer(settings.HIGHLIGHT_PRE_TAG, settings.HIGHLIGHT_POST_TAG),
    )
    return SearchService(datasets, searcher, mapper)


def get_index_service(
    os: OpenSearch = Depends(get_opensearch),
    datasets: DatasetPort = Depends(get_datasets),
    output_queue: OutputQueuePort = Depends(get_output_queue),
) -> IndexService:
    """
    FastAPI DI에서 OpenSearch/Dataset API/Kafka 클라이언트를 받아 IndexService를 생성해 주입한다.
    """
    indexer: IndexPort = OpenSearchIndexer(os)
    return IndexService(datasets, indexer, output_queue)


# ---- 요청 ----
def get_search_request(
    q: str | None = Query(None, description="검색어"),
    limit: str | None = Query(None, description="결과 개수"),
    offset: str | None = Query(None, description="결과 시작 위치"),
    settings: Settings = Depends(get_settings),
) -> SearchRequest:
    """
    쿼리스트링을 검증해 SearchRequest로 만든다.
    라우터에서 다른 의존성(호출자 식별 등)보다 먼저 선언해 외부 호출 전에 400을 낸다.
    limit/offset은 문자열로 받아 직접 검증한다(400 + 원인 메시지).
    """
    return parse_search_request(
        q, limit, offset,
        default_limit=settings.DEFAULT_MAX_RESULTS,
        max_offset=settings.MAX_SEARCH_RESULTS_OFFSET,
    )
