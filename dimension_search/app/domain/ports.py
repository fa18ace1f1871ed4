"""
도메인 포트(추상 인터페이스).

애플리케이션 서비스(유스케이스)는 아래 포트들(추상)에만 의존합니다.
구체 구현은 adapters 레이어에서 제공하고, FastAPI DI로 주입합니다.

포트 구현체는 라이브러리 예외를 도메인 예외로 변환해서 던져야 합니다.
    - 대상 없음: ResourceNotFound
    - 연결/응답 오류: UpstreamFailure
"""

from __future__ import annotations

from typing import Mapping, Protocol
from .models import (
    DimensionRef,
    HierarchyBuiltEvent,
    SearchHits,
    SearchRequest,
    VersionRef,
)


class SearchPort(Protocol):
    """차원 검색 인덱스에 질의한다."""

    def search(self, instance_id: str, dimension: str, request: SearchRequest) -> SearchHits:
        """
        Returns:
            SearchHits: 전체 건수 + 현재 페이지 hit 목록
        """
        ...


class IndexPort(Protocol):
    """차원 검색 인덱스를 생성/삭제한다."""

    def create_index(self, instance_id: str, dimension: str) -> str:
        """
        Returns:
            str: 생성된(또는 이미 존재하는) 인덱스 이름
        """
        ...

    def delete_index(self, instance_id: str, dimension: str) -> str:
        """
        Returns:
            str: 삭제된 인덱스 이름
        """
        ...


class DatasetPort(Protocol):
    """Dataset API 리소스 존재 여부를 확인한다."""

    def get_version(self, ref: DimensionRef, authenticated: bool = False) -> VersionRef:
        ...

    def check_instance_dimension(self, instance_id: str, dimension: str) -> None:
        ...

    def ping(self) -> bool:
        ...


class OutputQueuePort(Protocol):
    """인덱스 생성 완료 이벤트를 발행한다."""

    def queue(self, event: HierarchyBuiltEvent) -> None:
        ...

    def ping(self) -> bool:
        ...


class IdentityPort(Protocol):
    """요청 헤더로 호출자를 식별한다."""

    def identify(self, headers: Mapping[str, str]) -> str | None:
        """
        Returns:
            str | None: 식별자(식별 실패 시 None)
        """
        ...

    def ping(self) -> bool:
        ...
