import logging

from fastapi import Depends, Request

from dimension_search.app.api.deps import get_identity, get_settings
from dimension_search.app.domain.ports import IdentityPort
from dimension_search.app.platform.config import Settings
from dimension_search.app.platform.exceptions import ResourceNotFound

logger = logging.getLogger(__name__)


def require_identity(
    request: Request,
    identity: IdentityPort = Depends(get_identity),
) -> str:
    """
    쓰기 엔드포인트 진입 전 호출자 식별 단계.
    식별 실패는 리소스 없음(404)과 같은 응답으로 내려 엔드포인트 존재를 드러내지 않는다.
    """
    caller = identity.identify(request.headers)
    if not caller:
        logger.info("caller identity check failed path=%s", request.url.path)
        raise ResourceNotFound("resource")
    return caller


def optional_identity(
    request: Request,
    settings: Settings = Depends(get_settings),
    identity: IdentityPort = Depends(get_identity),
) -> str | None:
    """
    읽기 엔드포인트용. private 모드에서 식별된 호출자만 미게시 버전을 조회할 수 있다.
    """
    if not settings.ENABLE_PRIVATE_ENDPOINTS:
        return None
    return identity.identify(request.headers)
