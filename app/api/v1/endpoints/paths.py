"""
경로 조회 REST API 엔드포인트
"""

from fastapi import APIRouter, Depends, Query
import logging

from app.api.deps import get_map_cache, get_pathfinding_service
from app.db.cache import MapCache
from app.models.domain import PathMetric
from app.models.responses import PathResponse
from app.services.pathfinding_service import PathfindingService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=PathResponse)
def find_path(
    source: int = Query(..., description="출발역 id"),
    target: int = Query(..., description="도착역 id"),
    type: PathMetric = Query(PathMetric.DISTANCE, description="DISTANCE / DURATION"),
    service: PathfindingService = Depends(get_pathfinding_service),
    map_cache: MapCache = Depends(get_map_cache),
):
    """
    두 역 사이 최단 경로

    - **source**: 출발역 id
    - **target**: 도착역 id
    - **type**: DISTANCE(최단 거리) / DURATION(최소 시간)

    Returns:
        경로 역 목록(역별 노선 포함), 구간별 노선, 거리, 시간, 요금

    Example:
        GET /v1/paths?source=1&target=4&type=DURATION
    """
    logger.info(f"REST 경로 조회: {source} → {target}, type={type.value}")
    # 경로 계산과 응답의 역별 노선 표시에 같은 스냅샷 사용
    graph = map_cache.get_map().graph
    path = service.find_path(source, target, type, graph)
    return PathResponse.of(path, graph)
