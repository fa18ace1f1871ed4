import sys
from pathlib import Path

# 프로젝트 루트 경로를 sys.path에 추가 (…/<project-root>)
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from unittest.mock import MagicMock
import pytest

from dimension_search.app.platform.config import Settings

@pytest.fixture
def make_settings():
    """테스트용 Settings (.env 파일 무시)"""
    def _make(**overrides) -> Settings:
        values = dict(
            SEARCH_API_URL="http://localhost:8080",
            DEFAULT_MAX_RESULTS=20,
            MAX_SEARCH_RESULTS_OFFSET=20,
            ENABLE_PRIVATE_ENDPOINTS=True,
            SERVICE_AUTH_TOKEN="coffee",
        )
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make


@pytest.fixture
def os_client():
    """OpenSearch 클라이언트 목 객체 (indices 네임스페이스 포함)"""
    client = MagicMock()
    client.indices = MagicMock()
    return client
