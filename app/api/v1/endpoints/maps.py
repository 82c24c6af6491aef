"""
노선도 조회 REST API 엔드포인트
ETag / If-None-Match 조건부 요청 지원
"""

from typing import Optional
import logging

from fastapi import APIRouter, Depends, Header, Response, status

from app.api.deps import get_map_cache
from app.db.cache import MapCache
from app.models.responses import MapResponse

router = APIRouter()
logger = logging.getLogger(__name__)


def make_etag(fingerprint: str) -> str:
    return f'"{fingerprint}"'


def etag_matches(if_none_match: Optional[str], etag: str) -> bool:
    """If-None-Match 헤더 비교 (목록, 약한 검증자 W/, * 허용)"""
    if not if_none_match:
        return False

    for candidate in if_none_match.split(","):
        candidate = candidate.strip()
        if candidate == "*":
            return True
        if candidate.startswith("W/"):
            candidate = candidate[2:]
        if candidate == etag:
            return True
    return False


@router.get(
    "",
    response_model=MapResponse,
    responses={304: {"description": "노선도 변경 없음 (본문 없음)"}},
)
def load_map(
    response: Response,
    if_none_match: Optional[str] = Header(None),
    map_cache: MapCache = Depends(get_map_cache),
):
    """
    전체 노선도 조회

    - 노선별로 정렬된 역 목록
    - ETag: 노선도 내용 해시, 변경이 없으면 304 Not Modified

    Example:
        GET /v1/maps
        If-None-Match: "3f2a..."
    """
    snapshot = map_cache.get_map()
    etag = make_etag(snapshot.fingerprint)

    if etag_matches(if_none_match, etag):
        logger.debug(f"노선도 304 Not Modified: {snapshot.fingerprint[:12]}")
        return Response(
            status_code=status.HTTP_304_NOT_MODIFIED,
            headers={"ETag": etag, "Cache-Control": "no-cache"},
        )

    response.headers["ETag"] = etag
    response.headers["Cache-Control"] = "no-cache"
    return MapResponse.of(snapshot)
