class DomainError(Exception):
    """도메인/유즈케이스 공통 베이스 예외"""
    pass


# ---- 400: 클라이언트 입력 오류 ----
class InvalidInput(DomainError):
    def __init__(self, message: str):
        super().__init__(message)


class EmptyQuery(InvalidInput):
    def __init__(self):
        super().__init__("search term empty")


class InvalidParameter(InvalidInput):
    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class OffsetTooLarge(InvalidInput):
    def __init__(self, max_offset: int):
        super().__init__(
            f"the maximum offset has been reached, the offset cannot be more than {max_offset}"
        )
        self.max_offset = max_offset


# ---- 404: 리소스 없음(인증 실패 포함) ----
class ResourceNotFound(DomainError):
    def __init__(self, resource: str, detail: str | None = None):
        super().__init__(detail or f"{resource} not found")
        self.resource = resource


# ---- 500: 외부 시스템 장애 ----
class UpstreamFailure(DomainError):
    def __init__(self, service: str, reason: str):
        super().__init__(f"{service} request failed: {reason}")
        self.service = service
        self.reason = reason


# ---- 500: 코어 로직/백엔드 계약 위반 ----
class Defect(DomainError):
    pass


class MalformedHighlight(Defect):
    def __init__(self, fragment: str, reason: str):
        super().__init__(f"malformed highlight ({reason}): {fragment!r}")
        self.fragment = fragment
        self.reason = reason
