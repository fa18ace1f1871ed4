import pytest

from dimension_search.app.domain.highlights import HighlightRecomputer
from dimension_search.app.domain.models import (
    DimensionRef,
    MatchSpan,
    RawHit,
    SearchHits,
    SearchRequest,
)
from dimension_search.app.domain.services.result_mapper import SearchResultMapper
from dimension_search.app.platform.exceptions import MalformedHighlight

PRE, POST = "\u0001S", "\u0001E"
REF = DimensionRef(dataset_id="cpih01", edition="time-series", version="1", dimension="aggregate")


@pytest.fixture
def mapper():
    return SearchResultMapper("http://localhost:23100", HighlightRecomputer(PRE, POST))


def make_hit(code, label, highlight=None, **extra):
    return RawHit(source={"code": code, "label": label, **extra}, highlight=highlight or {})


def test_map_envelope_echoes_request_and_backend_total(mapper):
    """
    count는 백엔드 전체 건수, limit/offset은 요청값 그대로
    """
    hits = SearchHits(total=57, hits=[make_hit("A", "alpha"), make_hit("B", "beta")])
    req = SearchRequest(query="a", limit=2, offset=10)

    res = mapper.map(hits, req, REF)

    assert res.count == 57
    assert res.limit == 2
    assert res.offset == 10
    assert [i.code for i in res.items] == ["A", "B"]


def test_map_hit_fields_and_matches(mapper):
    hit = make_hit(
        "cpih1dim1G40100",
        "04 Housing, water",
        highlight={"label": [f"04 {PRE}Housing{POST}, water"]},
        has_data=True,
        number_of_children=5,
    )

    item = mapper.map_hit(hit, REF)

    assert item.code == "cpih1dim1G40100"
    assert item.label == "04 Housing, water"
    assert item.has_data is True
    assert item.number_of_children == 5
    assert item.dimension_option_url == (
        "http://localhost:23100/datasets/cpih01/editions/time-series/versions/1"
        "/dimensions/aggregate/options/cpih1dim1G40100"
    )
    assert item.matches.code == []
    assert item.matches.label == [MatchSpan(start=3, end=10)]


def test_map_hit_missing_optional_fields_default(mapper):
    item = mapper.map_hit(RawHit(source={"code": "X"}), REF)
    assert item.label == ""
    assert item.has_data is False
    assert item.number_of_children == 0


def test_map_propagates_malformed_highlight(mapper):
    hits = SearchHits(total=1, hits=[make_hit("A", "alpha", highlight={"code": [f"{PRE}A"]})])
    with pytest.raises(MalformedHighlight):
        mapper.map(hits, SearchRequest(query="a", limit=1, offset=0), REF)
