from unittest.mock import MagicMock
import pytest

from dimension_search.app.domain.models import (
    DimensionRef,
    SearchHits,
    SearchRequest,
    SearchResults,
    VersionRef,
)
from dimension_search.app.domain.services.search_service import SearchService
from dimension_search.app.platform.exceptions import ResourceNotFound, UpstreamFailure

REF = DimensionRef(dataset_id="123", edition="2017", version="1", dimension="aggregate")
REQ = SearchRequest(query="term", limit=20, offset=0)


@pytest.fixture
def datasets():
    m = MagicMock()
    m.get_version.return_value = VersionRef(id="inst-1")
    return m


@pytest.fixture
def searcher():
    m = MagicMock()
    m.search.return_value = SearchHits(total=0, hits=[])
    return m


@pytest.fixture
def mapper():
    m = MagicMock()
    m.map.return_value = SearchResults(count=0, limit=20, offset=0)
    return m


@pytest.fixture
def service(datasets, searcher, mapper):
    return SearchService(datasets, searcher, mapper)


def test_search_checks_version_then_queries_instance_index(service, datasets, searcher, mapper):
    # when
    res = service.search(REF, REQ)

    # then
    assert res == mapper.map.return_value
    datasets.get_version.assert_called_once_with(REF, authenticated=False)
    searcher.search.assert_called_once_with("inst-1", "aggregate", REQ)
    mapper.map.assert_called_once_with(searcher.search.return_value, REQ, REF)


def test_search_passes_authenticated_flag(service, datasets):
    service.search(REF, REQ, authenticated=True)
    datasets.get_version.assert_called_once_with(REF, authenticated=True)


def test_search_version_not_found_skips_query(service, datasets, searcher):
    """
    버전이 없으면 검색 백엔드는 호출하지 않고 예외를 그대로 전파
    """
    datasets.get_version.side_effect = ResourceNotFound("version")

    with pytest.raises(ResourceNotFound):
        service.search(REF, REQ)

    searcher.search.assert_not_called()


def test_search_propagates_backend_failure(service, searcher, mapper):
    searcher.search.side_effect = UpstreamFailure("opensearch", "down")

    with pytest.raises(UpstreamFailure) as ei:
        service.search(REF, REQ)

    assert "down" in str(ei.value)
    mapper.map.assert_not_called()
