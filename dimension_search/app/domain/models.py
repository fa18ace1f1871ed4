"""
도메인 모델 정의.

- SearchRequest: 검증/한도 적용이 끝난 검색 요청
- RawHit: 검색 백엔드가 돌려준 hit 1건(원문 필드 + 하이라이트 조각)
- MatchSpan/Matches: 원문(마커 제거) 기준 매칭 구간
- SearchResultItem/SearchResults: API 응답 엔벨로프
- IndexLifecycleRequest: 인덱스 생성/삭제 요청
- HierarchyBuiltEvent: 인덱스 생성 완료 후 큐로 발행하는 이벤트

Pydantic v2 기반 모델이라 검증/직렬화가 용이합니다.
"""

from __future__ import annotations

from enum import Enum
from typing import Any
from pydantic import BaseModel, ConfigDict, Field


JSONDict = dict[str, Any]

# 하이라이트를 계산하는 필드
HIGHLIGHT_FIELDS: tuple[str, ...] = ("code", "label")


class SearchRequest(BaseModel):
    """검증이 끝난 검색 요청(요청 단위로 생성, 불변)."""
    model_config = ConfigDict(frozen=True)

    query: str = Field(..., min_length=1, description="검색어")
    limit: int = Field(..., ge=0, description="가져올 결과 개수")
    offset: int = Field(0, ge=0, description="결과 시작 위치")


class DimensionRef(BaseModel):
    """검색 대상 차원(데이터셋/에디션/버전/차원명)."""
    model_config = ConfigDict(frozen=True)

    dataset_id: str
    edition: str
    version: str
    dimension: str


class VersionRef(BaseModel):
    """Dataset API 버전 문서 중 게이트웨이가 사용하는 부분."""
    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="버전에 연결된 instance id (검색 인덱스 이름에 사용)")
    state: str | None = None


class RawHit(BaseModel):
    """검색 백엔드 hit 1건. 코어에서는 읽기 전용."""
    model_config = ConfigDict(frozen=True)

    source: JSONDict = Field(default_factory=dict, description="원문 필드")
    highlight: dict[str, list[str]] = Field(
        default_factory=dict, description="필드별 하이라이트 조각(마커 포함)"
    )

    @classmethod
    def from_hit(cls, hit: JSONDict) -> "RawHit":
        return cls(source=hit.get("_source") or {}, highlight=hit.get("highlight") or {})


class MatchSpan(BaseModel):
    """원문 기준 [start, end) 문자 오프셋."""
    model_config = ConfigDict(frozen=True)

    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)


class Matches(BaseModel):
    code: list[MatchSpan] = Field(default_factory=list)
    label: list[MatchSpan] = Field(default_factory=list)


class SearchResultItem(BaseModel):
    code: str
    dimension_option_url: str
    has_data: bool = False
    label: str = ""
    number_of_children: int = 0
    matches: Matches = Field(default_factory=Matches)


class SearchResults(BaseModel):
    """검색 응답 엔벨로프. count는 페이지가 아닌 전체 매칭 건수."""
    count: int = Field(..., ge=0)
    limit: int = Field(..., ge=0)
    offset: int = Field(..., ge=0)
    items: list[SearchResultItem] = Field(default_factory=list)


class SearchHits(BaseModel):
    """검색 백엔드 응답에서 필요한 부분만 추린 결과."""
    total: int = Field(..., ge=0)
    hits: list[RawHit] = Field(default_factory=list)


class Operation(str, Enum):
    create = "create"
    delete = "delete"


class IndexLifecycleRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    instance_id: str
    dimension: str
    operation: Operation


class HierarchyBuiltEvent(BaseModel):
    """인덱스 생성 완료 이벤트. 하위 빌드 파이프라인이 소비한다."""
    instance_id: str
    dimension_name: str
