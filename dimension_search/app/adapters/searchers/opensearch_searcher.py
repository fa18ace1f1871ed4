"""
차원 검색 쿼리를 받아 검색하는 SearchPort 구현체.
"""

from __future__ import annotations

from typing import Any, Dict
from opensearchpy import OpenSearch
from opensearchpy.exceptions import NotFoundError, OpenSearchException
from dimension_search.app.domain.ports import SearchPort
from dimension_search.app.domain.models import RawHit, SearchHits, SearchRequest
from dimension_search.app.domain.utils import build_index_name
from dimension_search.app.platform.exceptions import ResourceNotFound, UpstreamFailure


class OpenSearchSearcher(SearchPort):

    def __init__(self, client: OpenSearch, pre_tag: str, post_tag: str) -> None:
        self.client = client
        self.pre_tag = pre_tag
        self.post_tag = post_tag

    def search(self, instance_id: str, dimension: str, request: SearchRequest) -> SearchHits:
        """
        {instance_id}_{dimension} 인덱스에 검색을 수행하여 결과를 반환한다.

        Args:
            instance_id (str): Dataset API instance id
            dimension (str): 차원 이름
            request (SearchRequest): 검증된 검색 요청
        Returns:
            SearchHits: 전체 매칭 건수와 현재 페이지 hit 목록
        Raises:
            ResourceNotFound: 인덱스 없음
            UpstreamFailure: 그 밖의 검색 백엔드 오류
        """
        index_name = build_index_name(instance_id, dimension)
        body = self._build_query(request.query, size=request.limit, offset=request.offset)
        try:
            res = self.client.search(index=index_name, body=body)
        except NotFoundError as e:
            raise ResourceNotFound("search index", f"search index {index_name} not found") from e
        except OpenSearchException as e:
            raise UpstreamFailure("opensearch", str(e)) from e
        return self._parse_response(res)

    def _parse_response(self, res: Dict[str, Any]) -> SearchHits:
        hits = res.get("hits") or {}
        total = hits.get("total", 0)
        # ES 7+ : {"value": n, "relation": "eq"}, ES 6 : n
        if isinstance(total, dict):
            total = total.get("value", 0)
        return SearchHits(
            total=int(total or 0),
            hits=[RawHit.from_hit(h) for h in hits.get("hits") or []],
        )

    def _build_query(
        self,
        query: str,
        size: int = 20,
        offset: int = 0) -> Dict[str, Any]:
        """
        검색 쿼리 바디를 구성한다.

        - code: 정확히 일치하면 가장 높게
        - label: 전체 단어 일치 > 일부 단어 일치
        - 하이라이트는 필드 전체를 조각 하나로(number_of_fragments=0) 받는다.

        Args:
            query (str): 검색어
            size (int): 가져올 문서 개수
            offset (int): 시작 위치
        Returns:
            Dict[str, Any]: 검색 쿼리 바디
        """
        body = {
            "from": offset,
            "size": size,
            "track_total_hits": True,
            "query": {
                "bool": {
                    "should": [
                        {
                            "match": {
                                "code": {
                                    "query": query,
                                    "boost": 10
                                }
                            }
                        },
                        {
                            "match": {
                                "label": {
                                    "query": query,
                                    "operator": "and",
                                    "boost": 5
                                }
                            }
                        },
                        {
                            "match": {
                                "label": {
                                    "query": query,
                                    "operator": "or"
                                }
                            }
                        }
                    ],
                    "minimum_should_match": 1
                }
            },
            "highlight": {
                "pre_tags": [self.pre_tag],
                "post_tags": [self.post_tag],
                "fields": {
                    "code": {"number_of_fragments": 0},
                    "label": {"number_of_fragments": 0}
                }
            },
            "sort": [
                {"_score": {"order": "desc"}},
                {"label.raw": {"order": "asc"}}
            ]
        }
        return body
