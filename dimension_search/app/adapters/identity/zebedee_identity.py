"""
인증 서비스(Zebedee) /identity 로 호출자를 식별하는 IdentityPort 구현체.
"""

from __future__ import annotations

import logging
from typing import Mapping

import requests

from dimension_search.app.domain.ports import IdentityPort
from dimension_search.app.platform.exceptions import UpstreamFailure

FLORENCE_HEADER = "X-Florence-Token"
AUTH_HEADER = "Authorization"

logger = logging.getLogger(__name__)


class ZebedeeIdentity(IdentityPort):

    def __init__(self, session: requests.Session, auth_api_url: str, timeout: float = 10.0) -> None:
        self.session = session
        self.auth_api_url = auth_api_url.rstrip("/")
        self.timeout = timeout

    def identify(self, headers: Mapping[str, str]) -> str | None:
        """
        사용자 토큰(X-Florence-Token) 또는 서비스 토큰(Authorization)으로 식별한다.

        Returns:
            str | None: 식별자, 토큰이 없거나 거부되면 None
        Raises:
            UpstreamFailure: 인증 서비스 장애
        """
        forward = {h: headers[h] for h in (FLORENCE_HEADER, AUTH_HEADER) if headers.get(h)}
        if not forward:
            return None

        url = f"{self.auth_api_url}/identity"
        try:
            response = self.session.get(url, headers=forward, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamFailure("identity", f"GET {url}: {e}") from e

        if response.status_code in (401, 403, 404):
            return None
        if response.status_code != 200:
            raise UpstreamFailure("identity", f"GET {url}: unexpected status {response.status_code}")
        try:
            return response.json().get("identifier") or None
        except ValueError as e:
            raise UpstreamFailure("identity", f"GET {url}: invalid json") from e

    def ping(self) -> bool:
        """헬스체크용: 인증 서비스 /health 응답 여부."""
        try:
            return self.session.get(f"{self.auth_api_url}/health", timeout=self.timeout).ok
        except requests.RequestException:
            logger.warning("identity service health check failed", exc_info=True)
            return False
