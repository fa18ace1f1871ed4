"""
인덱스 생성 완료 이벤트를 Kafka로 발행하는 OutputQueuePort 구현체.
"""

from __future__ import annotations

import json
import logging
from typing import List

from kafka import KafkaProducer
from kafka.errors import KafkaError

from dimension_search.app.domain.ports import OutputQueuePort
from dimension_search.app.domain.models import HierarchyBuiltEvent
from dimension_search.app.platform.exceptions import UpstreamFailure

logger = logging.getLogger(__name__)


def build_producer(brokers: List[str], max_bytes: int, retries: int, timeout: float) -> KafkaProducer:
    """
    앱 시작 시 1회 생성해서 공유한다.
    메타데이터를 못 받을 때 send()가 막히는 시간도 timeout(초)으로 제한한다.
    """
    return KafkaProducer(
        bootstrap_servers=brokers,
        max_request_size=max_bytes,
        retries=retries,
        acks="all",
        max_block_ms=int(timeout * 1000),
        key_serializer=lambda k: k.encode("utf-8"),
        value_serializer=lambda v: json.dumps(v, ensure_ascii=False).encode("utf-8"),
    )


class KafkaOutputQueue(OutputQueuePort):

    def __init__(self, producer: KafkaProducer, topic: str, send_timeout: float = 10.0) -> None:
        self.producer = producer
        self.topic = topic
        self.send_timeout = send_timeout

    def queue(self, event: HierarchyBuiltEvent) -> None:
        """
        이벤트를 발행하고 브로커 ack까지 기다린다.

        Raises:
            UpstreamFailure: 발행 실패(타임아웃 포함)
        """
        key = f"{event.instance_id}_{event.dimension_name}"
        try:
            future = self.producer.send(self.topic, key=key, value=event.model_dump())
            meta = future.get(timeout=self.send_timeout)
        except KafkaError as e:
            raise UpstreamFailure("kafka", str(e)) from e
        logger.info(
            "hierarchy built event published",
            extra={"data": {"topic": meta.topic, "partition": meta.partition,
                            "offset": meta.offset, **event.model_dump()}},
        )

    def ping(self) -> bool:
        return self.producer.bootstrap_connected()

    def close(self) -> None:
        self.producer.flush(timeout=self.send_timeout)
        self.producer.close(timeout=self.send_timeout)
