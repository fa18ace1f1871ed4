from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from urllib.parse import urlparse
from opensearchpy import OpenSearch
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from dimension_search.app.api.routers import (
    health,
    search,
    index
)
from dimension_search.app.adapters.datasets.dataset_api_client import build_session
from dimension_search.app.adapters.queues.kafka_output_queue import (
    KafkaOutputQueue,
    build_producer
)
from dimension_search.app.platform.config import Settings, settings as default_settings
from dimension_search.app.platform.logging import setup_logging
from dimension_search.app.platform.errors import (
    http_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
    domain_exception_handler
)
from dimension_search.app.platform import exceptions as domainex
from dimension_search.app.middlewares.request_context import RequestContextMiddleware

logger = logging.getLogger(__name__)


def build_opensearch(settings: Settings) -> OpenSearch:
    u = urlparse(settings.OPENSEARCH_HOST)
    return OpenSearch(
        hosts=[{"host": u.hostname, "port": u.port or 9200, "scheme": u.scheme or "http"}],
        verify_certs=False,
        timeout=settings.REQUEST_TIMEOUT,
        max_retries=settings.REQUEST_MAX_RETRIES,
        retry_on_timeout=True,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    # 로깅 등 공통 준비
    setup_logging(
        log_to_file=settings.LOG_TO_FILE,
        log_dir=settings.LOG_DIR,
        as_json=settings.LOG_AS_JSON,
        level=settings.LOG_LEVEL,
    )
    logger.info("config on startup", extra={"data": settings.safe_dump()})

    # 외부 클라이언트는 한 번만 생성해서 모든 요청이 공유(읽기 전용)
    app.state.opensearch = build_opensearch(settings)
    app.state.http_session = build_session(settings.REQUEST_MAX_RETRIES)
    try:
        producer = build_producer(
            settings.KAFKA_ADDR, settings.KAFKA_MAX_BYTES, settings.REQUEST_MAX_RETRIES,
            settings.REQUEST_TIMEOUT)
    except Exception:
        logger.exception("error creating kafka hierarchy built producer")
        app.state.http_session.close()
        app.state.opensearch.close()
        raise
    app.state.output_queue = KafkaOutputQueue(
        producer, settings.HIERARCHY_BUILT_TOPIC, send_timeout=settings.REQUEST_TIMEOUT)
    try:
        yield
    finally:
        # 요청 처리가 끝난 뒤 외부 연결 정리
        try:
            app.state.output_queue.close()
        except Exception:
            logger.exception("error while shutting down hierarchy built kafka producer")
        app.state.http_session.close()
        app.state.opensearch.close()
        logger.info("shutdown complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(title="Dimension Search API", lifespan=lifespan)
    app.state.settings = settings

    app.include_router(health.router)
    app.include_router(search.router)
    # 인덱스 생성/삭제는 private 배포에서만 노출
    if settings.ENABLE_PRIVATE_ENDPOINTS:
        app.include_router(index.router)

    # Global Exception Filter
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(domainex.DomainError, domain_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # 요청 컨텍스트/액세스 로그 미들웨어
    app.add_middleware(RequestContextMiddleware)
    return app


app = create_app()
