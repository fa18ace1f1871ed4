"""
Dataset API로 버전/instance 존재 여부를 확인하는 DatasetPort 구현체.
"""

from __future__ import annotations

import logging
from typing import Any, Dict
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from dimension_search.app.domain.ports import DatasetPort
from dimension_search.app.domain.models import DimensionRef, VersionRef
from dimension_search.app.platform.exceptions import ResourceNotFound, UpstreamFailure

logger = logging.getLogger(__name__)


def build_session(max_retries: int) -> requests.Session:
    """
    재시도 정책을 가진 공유 세션을 만든다(앱 시작 시 1회).
    """
    retry = Retry(
        total=max_retries,
        backoff_factor=0.3,
        status_forcelist=(429, 502, 503, 504),
        allowed_methods=("GET",),
    )
    adapter = HTTPAdapter(max_retries=retry, pool_connections=10, pool_maxsize=10)
    session = requests.Session()
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({"Accept": "application/json"})
    return session


class DatasetAPIClient(DatasetPort):

    def __init__(
        self,
        session: requests.Session,
        base_url: str,
        service_auth_token: str = "",
        timeout: float = 10.0) -> None:
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.service_auth_token = service_auth_token
        self.timeout = timeout

    def get_version(self, ref: DimensionRef, authenticated: bool = False) -> VersionRef:
        """
        데이터셋 버전 문서를 조회한다.

        인증 없이 호출하면 Dataset API는 게시(published)된 버전만 돌려준다.

        Args:
            ref: 데이터셋/에디션/버전
            authenticated: 서비스 토큰 전달 여부
        Returns:
            VersionRef: 버전에 연결된 instance id 포함
        Raises:
            ResourceNotFound: 버전 없음
            UpstreamFailure: Dataset API 오류
        """
        path = (
            f"/datasets/{quote(ref.dataset_id, safe='')}"
            f"/editions/{quote(ref.edition, safe='')}"
            f"/versions/{quote(ref.version, safe='')}"
        )
        doc = self._get(path, resource="version", authenticated=authenticated)
        try:
            return VersionRef.model_validate(doc)
        except ValueError as e:
            raise UpstreamFailure("dataset-api", f"unexpected version document: {e}") from e

    def check_instance_dimension(self, instance_id: str, dimension: str) -> None:
        """
        instance가 존재하고 해당 차원을 가지고 있는지 확인한다.

        Raises:
            ResourceNotFound: instance 없음 또는 차원 없음
            UpstreamFailure: Dataset API 오류
        """
        doc = self._get(f"/instances/{quote(instance_id, safe='')}", resource="instance",
                        authenticated=True)
        names = {d.get("name") for d in doc.get("dimensions") or [] if isinstance(d, dict)}
        if dimension not in names:
            raise ResourceNotFound(
                "dimension", f"dimension {dimension} not found on instance {instance_id}")

    # ================== internal ==================
    def _headers(self, authenticated: bool) -> Dict[str, str]:
        if authenticated and self.service_auth_token:
            return {"Authorization": f"Bearer {self.service_auth_token}"}
        return {}

    def _get(self, path: str, resource: str, authenticated: bool) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, headers=self._headers(authenticated), timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamFailure("dataset-api", f"GET {url}: {e}") from e

        if response.status_code == 404:
            raise ResourceNotFound(resource, f"{resource} not found: {path}")
        if response.status_code != 200:
            raise UpstreamFailure("dataset-api", f"GET {url}: unexpected status {response.status_code}")
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamFailure("dataset-api", f"GET {url}: invalid json") from e

    def ping(self) -> bool:
        """헬스체크용: Dataset API /health 응답 여부."""
        try:
            return self.session.get(f"{self.base_url}/health", timeout=self.timeout).ok
        except requests.RequestException:
            logger.warning("dataset api health check failed", exc_info=True)
            return False
