import json
import logging

from dimension_search.app.platform.logging import JsonFormatter, RequestIDFilter, request_id_ctx


def make_record(**extra):
    record = logging.LogRecord(
        name="dimension_search.test", level=logging.INFO, pathname=__file__, lineno=1,
        msg="search completed", args=(), exc_info=None,
    )
    for k, v in extra.items():
        setattr(record, k, v)
    return record


def test_json_formatter_includes_structured_data():
    record = make_record(data={"instance_id": "123", "count": 2}, request_id="req-1")

    out = json.loads(JsonFormatter().format(record))

    assert out["message"] == "search completed"
    assert out["level"] == "INFO"
    assert out["request_id"] == "req-1"
    assert out["data"] == {"instance_id": "123", "count": 2}
    assert "exc_info" not in out


def test_json_formatter_access_fields():
    record = make_record(http_method="GET", path="/healthcheck", status_code=200, duration_ms=1.5)

    out = json.loads(JsonFormatter().format(record))

    assert out["http_method"] == "GET"
    assert out["status_code"] == 200
    assert "client_ip" not in out


def test_request_id_filter_uses_context():
    token = request_id_ctx.set("abc")
    try:
        record = make_record()
        assert RequestIDFilter().filter(record) is True
        assert record.request_id == "abc"
    finally:
        request_id_ctx.reset(token)
