from fastapi import APIRouter, Depends
from dimension_search.app.api.deps import get_search_request, get_search_service, SearchService
from dimension_search.app.domain.models import DimensionRef, SearchRequest, SearchResults
from dimension_search.app.security.guards import optional_identity
import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


@router.get(
    "/datasets/{dataset_id}/editions/{edition}/versions/{version}/dimensions/{name}",
    summary="차원 옵션 검색",
    description=(
        "데이터셋 버전의 차원 옵션을 검색합니다. `limit`/`offset`으로 페이지를 지정하며, "
        "각 결과의 `matches`에는 code/label에서 검색어가 매칭된 위치(start, end)가 포함됩니다."
    ),
    operation_id="searchDimensionOptions",
    status_code=200,
    response_model=SearchResults,
    responses={
        200: {
            "description": "검색 성공",
            "content": {
                "application/json": {
                    "examples": {
                        "basic": {
                            "summary": "기본 검색 예시",
                            "value": {
                                "count": 1,
                                "limit": 20,
                                "offset": 0,
                                "items": [
                                    {
                                        "code": "cpih1dim1G40100",
                                        "dimension_option_url": "http://localhost:23100/datasets/cpih01/editions/time-series/versions/1/dimensions/aggregate/options/cpih1dim1G40100",
                                        "has_data": True,
                                        "label": "04 Housing, water, electricity, gas and other fuels",
                                        "number_of_children": 5,
                                        "matches": {
                                            "code": [],
                                            "label": [{"start": 3, "end": 10}]
                                        }
                                    }
                                ]
                            }
                        }
                    }
                }
            },
        },
        400: {"description": "잘못된 요청 값(검색어 없음, limit/offset 오류)"},
        404: {"description": "버전 또는 검색 인덱스 없음"},
        500: {"description": "서버 내부 오류"},
    },
)
def search(
    dataset_id: str,
    edition: str,
    version: str,
    name: str,
    # 선언 순서대로 해석된다: 검증 → 호출자 식별 → 서비스 생성
    req: SearchRequest = Depends(get_search_request),
    caller: str | None = Depends(optional_identity),
    svc: SearchService = Depends(get_search_service),
):
    ref = DimensionRef(dataset_id=dataset_id, edition=edition, version=version, dimension=name)
    logger.info(f"SearchRequest: {req} ref={ref}")
    return svc.search(ref, req, authenticated=caller is not None)
