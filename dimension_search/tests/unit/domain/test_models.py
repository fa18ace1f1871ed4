import pytest
from pydantic import ValidationError

from dimension_search.app.domain import utils
from dimension_search.app.domain.models import (
    DimensionRef,
    RawHit,
    SearchRequest,
    SearchResults,
    VersionRef,
)


def test_raw_hit_from_opensearch_hit():
    hit = {
        "_id": "1",
        "_source": {"code": "A1", "label": "alpha"},
        "highlight": {"label": ["\u0001Salpha\u0001E"]},
    }
    raw = RawHit.from_hit(hit)
    assert raw.source == {"code": "A1", "label": "alpha"}
    assert raw.highlight == {"label": ["\u0001Salpha\u0001E"]}


def test_raw_hit_without_highlight():
    raw = RawHit.from_hit({"_source": {"code": "A1"}})
    assert raw.highlight == {}


@pytest.mark.parametrize("kwargs", [
    {"query": "", "limit": 1, "offset": 0},
    {"query": "q", "limit": -1, "offset": 0},
    {"query": "q", "limit": 1, "offset": -1},
])
def test_search_request_rejects_invalid_values(kwargs):
    with pytest.raises(ValidationError):
        SearchRequest(**kwargs)


def test_version_ref_ignores_unknown_fields():
    v = VersionRef.model_validate({"id": "inst-1", "state": "published", "links": {}})
    assert v.id == "inst-1"


def test_search_results_json_shape():
    body = SearchResults(count=0, limit=20, offset=0).model_dump()
    assert body == {"count": 0, "limit": 20, "offset": 0, "items": []}


def test_build_index_name():
    assert utils.build_index_name("6E1F2A", "Aggregate") == "6e1f2a_aggregate"


def test_build_dimension_option_url():
    ref = DimensionRef(dataset_id="cpih01", edition="time-series", version="1", dimension="aggregate")
    url = utils.build_dimension_option_url("http://localhost:23100/", ref, "cpih1dim1A0")
    assert url == (
        "http://localhost:23100/datasets/cpih01/editions/time-series/versions/1"
        "/dimensions/aggregate/options/cpih1dim1A0"
    )


def test_build_dimension_option_url_escapes_path_segments():
    ref = DimensionRef(dataset_id="a b", edition="e", version="1", dimension="geo")
    url = utils.build_dimension_option_url("http://h", ref, "K/1")
    assert url == "http://h/datasets/a%20b/editions/e/versions/1/dimensions/geo/options/K%2F1"
