from fastapi import APIRouter, Depends, Response
from dimension_search.app.api.deps import get_index_service, IndexService
from dimension_search.app.domain.models import IndexLifecycleRequest, Operation
from dimension_search.app.security.guards import require_identity
import logging
logger = logging.getLogger(__name__)


# private 엔드포인트: ENABLE_PRIVATE_ENDPOINTS=true 일 때만 main.py에서 등록한다.
router = APIRouter(
    prefix="/search/instances",
    tags=["index"],
    dependencies=[Depends(require_identity)],
)

_RESPONSES = {
    200: {"description": "성공(빈 본문)"},
    404: {"description": "인증 실패 또는 리소스 없음(구분하지 않음)"},
    500: {"description": "서버 내부 오류"},
}


def _run(svc: IndexService, instance_id: str, dimension: str, op: Operation) -> Response:
    req = IndexLifecycleRequest(instance_id=instance_id, dimension=dimension, operation=op)
    logger.info(f"IndexLifecycleRequest: {req}")
    svc.handle(req)
    return Response(status_code=200)


@router.put(
    "/{instance_id}/dimensions/{dimension}",
    summary="차원 검색 인덱스 생성",
    description=(
        "instance의 차원에 대한 검색 인덱스를 생성하고, 생성 완료 이벤트를 발행합니다. "
        "이벤트 발행에 실패해도 생성된 인덱스는 유지됩니다."
    ),
    operation_id="createSearchIndex",
    status_code=200,
    responses=_RESPONSES,
)
def create_search_index(instance_id: str, dimension: str,
                        svc: IndexService = Depends(get_index_service)):
    return _run(svc, instance_id, dimension, Operation.create)


@router.delete(
    "/{instance_id}/dimensions/{dimension}",
    summary="차원 검색 인덱스 삭제",
    operation_id="deleteSearchIndex",
    status_code=200,
    responses=_RESPONSES,
)
def delete_search_index(instance_id: str, dimension: str,
                        svc: IndexService = Depends(get_index_service)):
    return _run(svc, instance_id, dimension, Operation.delete)
