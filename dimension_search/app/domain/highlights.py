"""
검색 백엔드 하이라이트 → 원문 기준 매칭 구간 변환.

백엔드는 매칭된 부분을 시작/끝 마커로 감싼 문자열(조각)을 돌려준다.
    "04 \\x01SHousing\\x01E, water"  →  [MatchSpan(start=3, end=10)]

오프셋은 마커를 제거한 원문 기준의 문자(code point) 단위 [start, end) 이다.
"""

from __future__ import annotations

from typing import Sequence

from dimension_search.app.domain.models import MatchSpan
from dimension_search.app.platform.exceptions import MalformedHighlight

DEFAULT_PRE_TAG = "\u0001S"
DEFAULT_POST_TAG = "\u0001E"


class HighlightRecomputer:

    def __init__(self, pre_tag: str = DEFAULT_PRE_TAG, post_tag: str = DEFAULT_POST_TAG) -> None:
        if not pre_tag or not post_tag or pre_tag == post_tag:
            raise ValueError("highlight markers must be non-empty and distinct")
        self.pre_tag = pre_tag
        self.post_tag = post_tag

    def strip(self, fragment: str) -> str:
        """마커를 제거한 문자열."""
        return fragment.replace(self.pre_tag, "").replace(self.post_tag, "")

    def scan(self, fragment: str) -> tuple[str, list[MatchSpan]]:
        """
        조각 하나를 왼쪽부터 읽으며 마커 위치를 구간으로 바꾼다.

        Returns:
            (마커 제거 문자열, 조각 기준 구간 목록)
        Raises:
            MalformedHighlight: 마커 짝이 맞지 않을 때
        """
        out: list[str] = []
        spans: list[MatchSpan] = []
        length = 0
        start: int | None = None
        i = 0
        while i < len(fragment):
            if fragment.startswith(self.pre_tag, i):
                if start is not None:
                    raise MalformedHighlight(fragment, "nested start marker")
                start = length
                i += len(self.pre_tag)
            elif fragment.startswith(self.post_tag, i):
                if start is None:
                    raise MalformedHighlight(fragment, "end marker without start")
                spans.append(MatchSpan(start=start, end=length))
                start = None
                i += len(self.post_tag)
            else:
                out.append(fragment[i])
                length += 1
                i += 1
        if start is not None:
            raise MalformedHighlight(fragment, "unclosed start marker")
        return "".join(out), spans

    def recompute(self, value: str, fragments: Sequence[str] | None) -> list[MatchSpan]:
        """
        원문 값과 하이라이트 조각 목록으로 원문 기준 구간 목록을 만든다.

        조각이 원문 전체(number_of_fragments=0)가 아닐 수도 있으므로
        마커 제거한 조각을 원문에서 찾아(이전 조각 이후부터) 그 위치만큼 구간을 옮긴다.
        """
        if not fragments:
            return []

        result: list[MatchSpan] = []
        cursor = 0
        for fragment in fragments:
            plain, spans = self.scan(fragment)
            base = value.find(plain, cursor)
            if base < 0:
                raise MalformedHighlight(fragment, "fragment does not match field value")
            for s in spans:
                result.append(MatchSpan(start=base + s.start, end=base + s.end))
            cursor = base + len(plain)
        return result
