"""
차원 검색 인덱스를 OpenSearch에 생성/삭제하는 IndexPort 구현체
"""

from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from opensearchpy import OpenSearch
from opensearchpy.exceptions import NotFoundError, OpenSearchException, RequestError
from dimension_search.app.domain.ports import IndexPort
from dimension_search.app.domain.utils import build_index_name
from dimension_search.app.platform.exceptions import ResourceNotFound, UpstreamFailure

logger = logging.getLogger(__name__)

ALREADY_EXISTS = "resource_already_exists_exception"


class OpenSearchIndexer(IndexPort):

    def __init__(self, client: OpenSearch) -> None:
        self.client = client
        self._load_index_schema()

    def _load_index_schema(self) -> None:
        """
            인덱스 스키마를 JSON 파일에서 로드한다.
        """
        root_dir = Path(os.path.dirname(__file__)).resolve().parents[2]
        schema_path = root_dir / "resources/schema/dimension_index.json"
        with open(schema_path, 'r', encoding='utf-8') as f:
            self.index_schema = json.load(f)

    def create_index(self, instance_id: str, dimension: str) -> str:
        """
            로드된 스키마를 사용해 인덱스를 생성한다.
            인덱스 이름 형식: {instance_id}_{dimension}
            이미 존재하면 그대로 사용한다.

            Args:
                instance_id: Dataset API instance id
                dimension: 차원 이름
            Returns:
                생성된 인덱스 이름
            Raises:
                UpstreamFailure: 검색 백엔드 오류
        """
        index_name = build_index_name(instance_id, dimension)
        try:
            if self.client.indices.exists(index=index_name):
                logger.info("index '%s' already exists", index_name)
                return index_name
            self.client.indices.create(index=index_name, body=self.index_schema)
        except RequestError as e:
            # exists 확인 뒤 다른 요청이 먼저 만든 경우
            if e.error != ALREADY_EXISTS:
                raise UpstreamFailure("opensearch", str(e)) from e
            logger.info("index '%s' already exists", index_name)
            return index_name
        except OpenSearchException as e:
            raise UpstreamFailure("opensearch", str(e)) from e
        logger.info("index '%s' created", index_name)
        return index_name

    def delete_index(self, instance_id: str, dimension: str) -> str:
        """
            인덱스를 삭제한다.

            Args:
                instance_id: Dataset API instance id
                dimension: 차원 이름
            Returns:
                삭제된 인덱스 이름
            Raises:
                ResourceNotFound: 인덱스 없음
                UpstreamFailure: 검색 백엔드 오류
        """
        index_name = build_index_name(instance_id, dimension)
        try:
            self.client.indices.delete(index=index_name)
        except NotFoundError as e:
            raise ResourceNotFound("search index", f"search index {index_name} not found") from e
        except OpenSearchException as e:
            raise UpstreamFailure("opensearch", str(e)) from e
        logger.info("index '%s' deleted", index_name)
        return index_name
