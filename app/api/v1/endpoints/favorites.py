"""
즐겨찾기 REST API 엔드포인트
Authorization: Bearer <token> 필수, 토큰 subject가 즐겨찾기 소유자
"""

from fastapi import APIRouter, Depends, Query, Response, status
from typing import List
import logging

from app.api.deps import get_current_active_user, get_favorite_service, get_map_cache
from app.db.cache import MapCache
from app.models.domain import PathMetric, User
from app.models.requests import FavoritePathCreateRequest, FavoriteStationCreateRequest
from app.models.responses import FavoritePathResponse, FavoriteStationResponse
from app.services.favorite_service import FavoriteService

router = APIRouter()
logger = logging.getLogger(__name__)


def _station_response(favorite, service: FavoriteService, graph):
    station = service.find_station(favorite.station_id)
    lines = graph.lines_of(favorite.station_id)
    return FavoriteStationResponse.of(favorite, station, lines)


# ========== 역 ==========


@router.post(
    "/stations",
    response_model=FavoriteStationResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_favorite_station(
    request: FavoriteStationCreateRequest,
    current_user: User = Depends(get_current_active_user),
    service: FavoriteService = Depends(get_favorite_service),
    map_cache: MapCache = Depends(get_map_cache),
):
    favorite = service.add_favorite_station(current_user.user_id, request.station_id)
    return _station_response(favorite, service, map_cache.get_map().graph)


@router.get("/stations", response_model=List[FavoriteStationResponse])
def list_favorite_stations(
    current_user: User = Depends(get_current_active_user),
    service: FavoriteService = Depends(get_favorite_service),
    map_cache: MapCache = Depends(get_map_cache),
):
    graph = map_cache.get_map().graph
    return [
        _station_response(favorite, service, graph)
        for favorite in service.list_favorite_stations(current_user.user_id)
    ]


@router.delete("/stations/{favorite_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_favorite_station(
    favorite_id: int,
    current_user: User = Depends(get_current_active_user),
    service: FavoriteService = Depends(get_favorite_service),
):
    service.delete_favorite_station(current_user.user_id, favorite_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ========== 경로 ==========


@router.post(
    "/paths",
    response_model=FavoritePathResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_favorite_path(
    request: FavoritePathCreateRequest,
    type: PathMetric = Query(PathMetric.DISTANCE),
    current_user: User = Depends(get_current_active_user),
    service: FavoriteService = Depends(get_favorite_service),
    map_cache: MapCache = Depends(get_map_cache),
):
    """
    즐겨찾기 경로 등록 (출발/도착역 id만 저장, 응답에는 계산된 경로 포함)

    Example:
        POST /v1/favorites/paths
        {"source_station_id": 1, "target_station_id": 4}
    """
    graph = map_cache.get_map().graph
    resolved = service.add_favorite_path(
        current_user.user_id,
        request.source_station_id,
        request.target_station_id,
        type,
        graph,
    )
    return FavoritePathResponse.of(resolved, graph)


@router.get("/paths", response_model=List[FavoritePathResponse])
def list_favorite_paths(
    type: PathMetric = Query(PathMetric.DISTANCE),
    current_user: User = Depends(get_current_active_user),
    service: FavoriteService = Depends(get_favorite_service),
    map_cache: MapCache = Depends(get_map_cache),
):
    """즐겨찾기 경로 목록 => 조회할 때마다 현재 노선도로 재계산"""
    graph = map_cache.get_map().graph
    return [
        FavoritePathResponse.of(resolved, graph)
        for resolved in service.list_favorite_paths(current_user.user_id, type, graph)
    ]


@router.delete("/paths/{favorite_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_favorite_path(
    favorite_id: int,
    current_user: User = Depends(get_current_active_user),
    service: FavoriteService = Depends(get_favorite_service),
):
    service.delete_favorite_path(current_user.user_id, favorite_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
