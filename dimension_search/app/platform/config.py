from typing import Annotated, Any, Dict, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "dimension-search-api"
    DEBUG: bool = False

    # 외부 서비스
    SEARCH_API_URL: str = "http://localhost:23100"
    DATASET_API_URL: str = "http://localhost:22000"
    AUTH_API_URL: str = "http://localhost:8082"
    OPENSEARCH_HOST: str = "http://localhost:10200"

    # 검색 파라미터 한도
    DEFAULT_MAX_RESULTS: int = Field(20, ge=0, description="limit 미지정 시 기본값")
    MAX_SEARCH_RESULTS_OFFSET: int = Field(1000, ge=0, description="offset 상한(포함)")

    # 인덱스 생성/삭제 엔드포인트 노출 여부
    ENABLE_PRIVATE_ENDPOINTS: bool = True

    # Kafka
    KAFKA_ADDR: Annotated[List[str], NoDecode] = ["localhost:9092"]
    HIERARCHY_BUILT_TOPIC: str = "hierarchy-built"
    KAFKA_MAX_BYTES: int = 2000000

    # 클라이언트 재시도/타임아웃 (코어는 재시도하지 않음)
    REQUEST_MAX_RETRIES: int = 3
    REQUEST_TIMEOUT: float = 10.0

    # 민감 정보: dump/로그에서 제외
    SERVICE_AUTH_TOKEN: str = Field("", exclude=True)

    # 검색 백엔드에 전달하는 하이라이트 구분자
    HIGHLIGHT_PRE_TAG: str = "\u0001S"
    HIGHLIGHT_POST_TAG: str = "\u0001E"

    # 로깅
    LOG_LEVEL: str = "INFO"
    LOG_AS_JSON: bool = True
    LOG_TO_FILE: bool = False
    LOG_DIR: str = "/var/log/app"

    @field_validator("KAFKA_ADDR", mode="before")
    @classmethod
    def _split_brokers(cls, v: Any) -> Any:
        # KAFKA_ADDR=host1:9092,host2:9092
        if isinstance(v, str):
            return [b.strip() for b in v.split(",") if b.strip()]
        return v

    def safe_dump(self) -> Dict[str, Any]:
        """로그 출력용 설정값(민감 필드 제외)."""
        return self.model_dump()


settings = Settings()
