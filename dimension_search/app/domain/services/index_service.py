"""
IndexService
==============

차원 검색 인덱스 생성/삭제(쓰기 경로) 오케스트레이터.

Flow:
    create: Dataset API instance/차원 확인 → 인덱스 생성 → 완료 이벤트 발행
    delete: 인덱스 삭제

- 이벤트 발행 실패 시 이미 생성된 인덱스는 되돌리지 않습니다.
  (at-least-once 이벤트, 정합성은 하위 소비자가 맞춘다) 호출자에게는 실패(500)로 알립니다.
"""

from __future__ import annotations

import logging

from dimension_search.app.domain.ports import DatasetPort, IndexPort, OutputQueuePort
from dimension_search.app.domain.models import (
    HierarchyBuiltEvent,
    IndexLifecycleRequest,
    Operation,
)
from dimension_search.app.platform.exceptions import UpstreamFailure

logger = logging.getLogger(__name__)


class IndexService:
    """검색 인덱스 생명주기를 관리하는 유스케이스 서비스."""

    def __init__(
        self,
        datasets: DatasetPort,
        indexer: IndexPort,
        output_queue: OutputQueuePort,
    ) -> None:
        """
        인덱스 서비스 초기화.
        Args:
            datasets: DatasetPort           : instance/차원 존재 확인
            indexer: IndexPort              : 검색 인덱스 생성/삭제
            output_queue: OutputQueuePort   : 생성 완료 이벤트 발행
        """
        self._datasets = datasets
        self._indexer = indexer
        self._output_queue = output_queue

    # ================= public API =================
    def handle(self, req: IndexLifecycleRequest) -> str:
        if req.operation is Operation.create:
            return self.create(req.instance_id, req.dimension)
        return self.delete(req.instance_id, req.dimension)

    def create(self, instance_id: str, dimension: str) -> str:
        """
        검색 인덱스를 생성하고 완료 이벤트를 발행한다.

        Returns:
            str: 인덱스 이름
        """
        data = {"instance_id": instance_id, "dimension": dimension}
        logger.info("service.create_index", extra={"data": data})

        self._datasets.check_instance_dimension(instance_id, dimension)
        index_name = self._indexer.create_index(instance_id, dimension)

        event = HierarchyBuiltEvent(instance_id=instance_id, dimension_name=dimension)
        try:
            self._output_queue.queue(event)
        except UpstreamFailure:
            logger.error(
                "index created but hierarchy built event was not published",
                extra={"data": {**data, "index_name": index_name}},
            )
            raise

        logger.info("service.create_index: done", extra={"data": {**data, "index_name": index_name}})
        return index_name

    def delete(self, instance_id: str, dimension: str) -> str:
        """
        검색 인덱스를 삭제한다.

        Returns:
            str: 삭제된 인덱스 이름
        """
        data = {"instance_id": instance_id, "dimension": dimension}
        logger.info("service.delete_index", extra={"data": data})

        index_name = self._indexer.delete_index(instance_id, dimension)

        logger.info("service.delete_index: done", extra={"data": {**data, "index_name": index_name}})
        return index_name
