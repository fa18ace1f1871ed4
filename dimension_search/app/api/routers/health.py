import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from opensearchpy import OpenSearch
from opensearchpy.exceptions import OpenSearchException

from dimension_search.app.api.deps import (
    get_datasets, get_identity, get_opensearch, get_output_queue, get_settings
)
from dimension_search.app.domain.ports import DatasetPort, IdentityPort, OutputQueuePort
from dimension_search.app.platform.config import Settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/healthcheck", tags=["health"])


def _check_opensearch(client: OpenSearch) -> bool:
    try:
        return bool(client.ping())
    except OpenSearchException:
        logger.warning("opensearch health check failed", exc_info=True)
        return False


@router.get("")
def health(
    os: OpenSearch = Depends(get_opensearch),
    datasets: DatasetPort = Depends(get_datasets),
    output_queue: OutputQueuePort = Depends(get_output_queue),
    identity: IdentityPort = Depends(get_identity),
    settings: Settings = Depends(get_settings),
):
    checks = {
        "opensearch": _check_opensearch(os),
        "dataset_api": datasets.ping(),
        "kafka_producer": output_queue.ping(),
    }
    # 인증 서비스는 private 엔드포인트에서만 쓰인다
    if settings.ENABLE_PRIVATE_ENDPOINTS:
        checks["identity"] = identity.ping()
    ok = all(checks.values())
    return JSONResponse(
        status_code=200 if ok else 500,
        content={"status": "OK" if ok else "CRITICAL", "checks": checks},
    )
