"""
유틸리티 함수.
"""

from urllib.parse import quote

from dimension_search.app.domain.models import DimensionRef


def build_index_name(instance_id: str, dimension: str) -> str:
    """
    instance/차원 조합의 검색 인덱스 이름.
    ex. build_index_name("6e1f2a", "aggregate") -> "6e1f2a_aggregate"
    """
    return f"{instance_id}_{dimension}".lower()


def build_dimension_option_url(host: str, ref: DimensionRef, code: str) -> str:
    """
    검색 결과 항목의 차원 옵션 URL.
    Args:
        host: 공개 base URL (ex. http://localhost:23100)
        ref: 데이터셋/에디션/버전/차원
        code: 옵션 코드
    Returns:
        str: {host}/datasets/{id}/editions/{edition}/versions/{version}/dimensions/{name}/options/{code}
    """
    return (
        f"{host.rstrip('/')}/datasets/{quote(ref.dataset_id, safe='')}"
        f"/editions/{quote(ref.edition, safe='')}"
        f"/versions/{quote(ref.version, safe='')}"
        f"/dimensions/{quote(ref.dimension, safe='')}"
        f"/options/{quote(code, safe='')}"
    )
