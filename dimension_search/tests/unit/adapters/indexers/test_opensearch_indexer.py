# dimension_search/tests/unit/adapters/indexers/test_opensearch_indexer.py

from unittest.mock import MagicMock
import pytest

from dimension_search.app.adapters.indexers.opensearch_indexer import OpenSearchIndexer
from dimension_search.app.platform.exceptions import ResourceNotFound, UpstreamFailure
from opensearchpy.exceptions import ConnectionError, NotFoundError, RequestError
"""
create_index: 인덱스 존재/미존재 분기, indices.create 호출 여부 검증
delete_index: 삭제, 인덱스 없음(404), 연결 오류 변환
_load_index_schema: 번들된 스키마 파일 로딩
"""


# ----------------------
# 공용 픽스처
# ----------------------
@pytest.fixture
def mock_client():
    """OpenSearch 클라이언트 목 객체 (indices 네임스페이스 포함)"""
    client = MagicMock()
    client.indices = MagicMock()
    return client


@pytest.fixture
def indexer(mock_client):
    return OpenSearchIndexer(client=mock_client)


def test_schema_loaded_from_resources(indexer):
    props = indexer.index_schema["mappings"]["properties"]
    assert {"code", "label", "has_data", "number_of_children"} <= set(props)
    assert props["label"]["fields"]["raw"]["type"] == "keyword"


# ----------------------
# create_index
# ----------------------
def test_create_index_when_not_exists(indexer: OpenSearchIndexer, mock_client: MagicMock):
    mock_client.indices.exists.return_value = False

    name = indexer.create_index("123", "aggregate")

    assert name == "123_aggregate"
    mock_client.indices.exists.assert_called_once_with(index="123_aggregate")
    mock_client.indices.create.assert_called_once_with(index="123_aggregate", body=indexer.index_schema)


def test_create_index_when_exists(indexer: OpenSearchIndexer, mock_client: MagicMock):
    mock_client.indices.exists.return_value = True

    name = indexer.create_index("123", "geography")

    assert name == "123_geography"
    mock_client.indices.create.assert_not_called()


def test_create_index_connection_error(indexer: OpenSearchIndexer, mock_client: MagicMock):
    mock_client.indices.exists.return_value = False
    mock_client.indices.create.side_effect = ConnectionError("N/A", "down", None)

    with pytest.raises(UpstreamFailure):
        indexer.create_index("123", "aggregate")


def test_create_index_lost_race_is_accepted(indexer: OpenSearchIndexer, mock_client: MagicMock):
    """
    exists 확인과 create 사이에 다른 요청이 인덱스를 만든 경우 기존 인덱스로 간주
    """
    mock_client.indices.exists.return_value = False
    mock_client.indices.create.side_effect = RequestError(400, "resource_already_exists_exception", {})

    assert indexer.create_index("123", "aggregate") == "123_aggregate"


def test_create_index_other_request_error(indexer: OpenSearchIndexer, mock_client: MagicMock):
    mock_client.indices.exists.return_value = False
    mock_client.indices.create.side_effect = RequestError(400, "mapper_parsing_exception", {})

    with pytest.raises(UpstreamFailure):
        indexer.create_index("123", "aggregate")


# ----------------------
# delete_index
# ----------------------
def test_delete_index(indexer: OpenSearchIndexer, mock_client: MagicMock):
    assert indexer.delete_index("123", "aggregate") == "123_aggregate"
    mock_client.indices.delete.assert_called_once_with(index="123_aggregate")


def test_delete_index_not_found(indexer: OpenSearchIndexer, mock_client: MagicMock):
    mock_client.indices.delete.side_effect = NotFoundError(404, "index_not_found_exception", {})

    with pytest.raises(ResourceNotFound):
        indexer.delete_index("123", "aggregate")


def test_delete_index_connection_error(indexer: OpenSearchIndexer, mock_client: MagicMock):
    mock_client.indices.delete.side_effect = ConnectionError("N/A", "down", None)

    with pytest.raises(UpstreamFailure):
        indexer.delete_index("123", "aggregate")
