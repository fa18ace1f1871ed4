from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi import status
from starlette.exceptions import HTTPException as StarletteHTTPException
from dimension_search.app.platform.logging import request_id_ctx
from dimension_search.app.platform import exceptions as domainex
import logging

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Resource not found"
INTERNAL_ERROR_MESSAGE = "Failed to process the request due to an internal error"


def error_envelope(message, code="BAD_REQUEST", details=None, trace_id=None):
    return {
        "success": False,
        "error": {
            "code": code, "message": message, "details": details
        },
        "trace_id": trace_id
    }

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # 4xx, 5xx 에러 (라우트 없음, 메서드 불일치 등)
    return JSONResponse(status_code=exc.status_code,
                        content=error_envelope(
                            exc.detail,
                            code=f"HTTP_{exc.status_code}",
                            trace_id=request_id_ctx.get()))

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # 422 Unprocessable Entity
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
                        content=error_envelope(
                            "Unprocessable Entity",
                            code="VALIDATION_ERROR",
                            details=exc.errors(),
                            trace_id=request_id_ctx.get()))

async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception")
    # 500 Internal server error
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                        content=error_envelope(
                            INTERNAL_ERROR_MESSAGE,
                            code="INTERNAL_ERROR",
                            trace_id=request_id_ctx.get()))

async def domain_exception_handler(request: Request, exc: domainex.DomainError):
    """
    도메인/유즈케이스 예외를 HTTP로 매핑.

    - 404 응답은 원인(인증 실패/리소스 없음)과 무관하게 동일한 본문을 사용한다.
    - 500 응답에는 내부 오류 내용을 노출하지 않는다.
    """
    path = request.url.path
    if isinstance(exc, domainex.InvalidInput):
        http_status = status.HTTP_400_BAD_REQUEST
        code = "INVALID_INPUT"
        message = str(exc)
        logger.info("Invalid input: %s path=%s", exc, path)
    elif isinstance(exc, domainex.ResourceNotFound):
        http_status = status.HTTP_404_NOT_FOUND
        code = "NOT_FOUND"
        message = NOT_FOUND_MESSAGE
        logger.info("Not found: %s path=%s", exc, path)
    elif isinstance(exc, domainex.Defect):
        http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
        code = "INTERNAL_ERROR"
        message = INTERNAL_ERROR_MESSAGE
        logger.error("Defect detected: %s path=%s", exc, path)
    elif isinstance(exc, domainex.UpstreamFailure):
        http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
        code = "INTERNAL_ERROR"
        message = INTERNAL_ERROR_MESSAGE
        logger.warning("Upstream failure: %s path=%s", exc, path)
    else:
        http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
        code = "INTERNAL_ERROR"
        message = INTERNAL_ERROR_MESSAGE
        logger.error("Domain error: %s path=%s", exc, path)

    return JSONResponse(
        status_code=http_status,
        content=error_envelope(
            message,
            code=code,
            trace_id=request_id_ctx.get())
    )
