import textwrap

from dimension_search.app.platform.config import Settings


def test_default_settings():
    """기본값이 올바르게 설정되는지 검증"""
    s = Settings(_env_file=None)
    assert s.APP_NAME == "dimension-search-api"
    assert s.DEBUG is False
    assert s.OPENSEARCH_HOST.startswith("http://")
    assert s.DEFAULT_MAX_RESULTS == 20
    assert s.MAX_SEARCH_RESULTS_OFFSET == 1000
    assert s.ENABLE_PRIVATE_ENDPOINTS is True
    assert s.KAFKA_ADDR == ["localhost:9092"]
    assert s.HIGHLIGHT_PRE_TAG == "\u0001S"
    assert s.HIGHLIGHT_POST_TAG == "\u0001E"


def test_override_with_env(monkeypatch):
    """환경변수로 설정값이 덮어써지는지 검증"""
    monkeypatch.setenv("APP_NAME", "custom-app")
    monkeypatch.setenv("DEBUG", "true")
    monkeypatch.setenv("OPENSEARCH_HOST", "http://test:9999")
    monkeypatch.setenv("ENABLE_PRIVATE_ENDPOINTS", "false")
    monkeypatch.setenv("MAX_SEARCH_RESULTS_OFFSET", "50")

    s = Settings(_env_file=None)
    assert s.APP_NAME == "custom-app"
    assert s.DEBUG is True
    assert s.OPENSEARCH_HOST == "http://test:9999"
    assert s.ENABLE_PRIVATE_ENDPOINTS is False
    assert s.MAX_SEARCH_RESULTS_OFFSET == 50


def test_env_file_loading(tmp_path):
    """env 파일에서 로딩되는지 검증"""
    env_file = tmp_path / ".env"
    env_file.write_text(textwrap.dedent("""
        APP_NAME=env-app
        DEBUG=true
        DATASET_API_URL=http://dataset:22000
    """))

    s = Settings(_env_file=env_file)
    assert s.APP_NAME == "env-app"
    assert s.DEBUG is True
    assert s.DATASET_API_URL == "http://dataset:22000"


def test_kafka_addr_comma_separated(monkeypatch):
    """KAFKA_ADDR 는 콤마로 구분된 브로커 목록"""
    monkeypatch.setenv("KAFKA_ADDR", "kafka-1:9092, kafka-2:9092,")

    s = Settings(_env_file=None)
    assert s.KAFKA_ADDR == ["kafka-1:9092", "kafka-2:9092"]


def test_safe_dump_excludes_service_token(monkeypatch):
    """서비스 토큰은 로그용 dump 에서 빠져야 한다"""
    monkeypatch.setenv("SERVICE_AUTH_TOKEN", "secret-token")

    s = Settings(_env_file=None)
    assert s.SERVICE_AUTH_TOKEN == "secret-token"
    dumped = s.safe_dump()
    assert "SERVICE_AUTH_TOKEN" not in dumped
    assert "secret-token" not in str(dumped)
