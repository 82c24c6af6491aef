# 즐겨찾기 서비스
# 즐겨찾기 경로는 (출발, 도착) id만 저장, 조회할 때마다 PathfindingService로 재계산

import logging
from typing import List, Optional

from app.algorithms.graph import SubwayGraph
from app.core.exceptions import (
    SameStationError,
    StationNotFoundError,
    SubwayMapException,
)
from app.models.domain import (
    FavoriteStation,
    PathMetric,
    ResolvedFavoritePath,
    Station,
)
from app.services.pathfinding_service import PathfindingService

logger = logging.getLogger(__name__)


class FavoriteService:
    def __init__(self, store, topology, pathfinding_service: PathfindingService):
        """
        Args:
            store: InMemoryFavoriteStore / RedisFavoriteStore
            topology: 역 조회용 노선도 저장소
            pathfinding_service: 즐겨찾기 경로 재계산
        """
        self.store = store
        self.topology = topology
        self.pathfinding_service = pathfinding_service

    # ========== 역 ==========

    def add_favorite_station(self, owner: str, station_id: int) -> FavoriteStation:
        self._require_station(station_id)
        favorite = self.store.add_station(owner, station_id)
        logger.info(f"즐겨찾기 역 등록: owner={owner}, station={station_id}")
        return favorite

    def list_favorite_stations(self, owner: str) -> List[FavoriteStation]:
        return self.store.list_stations(owner)

    def delete_favorite_station(self, owner: str, favorite_id: int) -> None:
        self.store.delete_station(owner, favorite_id)
        logger.info(f"즐겨찾기 역 삭제: owner={owner}, id={favorite_id}")

    # ========== 경로 ==========

    def add_favorite_path(
        self,
        owner: str,
        source_id: int,
        target_id: int,
        metric: PathMetric = PathMetric.DISTANCE,
        graph: SubwayGraph = None,
    ) -> ResolvedFavoritePath:
        self._require_station(source_id)
        self._require_station(target_id)
        if source_id == target_id:
            raise SameStationError(source_id)

        favorite = self.store.add_path(owner, source_id, target_id)
        logger.info(f"즐겨찾기 경로 등록: owner={owner}, {source_id} → {target_id}")
        return self._resolve(favorite, metric, graph)

    def list_favorite_paths(
        self,
        owner: str,
        metric: PathMetric = PathMetric.DISTANCE,
        graph: SubwayGraph = None,
    ) -> List[ResolvedFavoritePath]:
        """graph => 목록 전체를 같은 스냅샷으로 재계산"""
        return [
            self._resolve(favorite, metric, graph)
            for favorite in self.store.list_paths(owner)
        ]

    def delete_favorite_path(self, owner: str, favorite_id: int) -> None:
        self.store.delete_path(owner, favorite_id)
        logger.info(f"즐겨찾기 경로 삭제: owner={owner}, id={favorite_id}")

    # ========== helpers ==========

    def find_station(self, station_id: int) -> Optional[Station]:
        """즐겨찾기 등록 이후 삭제된 역이면 None"""
        return self.topology.get_station(station_id)

    def _require_station(self, station_id: int) -> Station:
        station = self.topology.get_station(station_id)
        if station is None:
            raise StationNotFoundError(station_id)
        return station

    def _resolve(
        self, favorite, metric: PathMetric, graph: SubwayGraph = None
    ) -> ResolvedFavoritePath:
        # 노선 변경으로 더 이상 갈 수 없는 즐겨찾기 => 에러 코드와 함께 반환
        try:
            path = self.pathfinding_service.find_path(
                favorite.source_id, favorite.target_id, metric, graph
            )
        except SubwayMapException as e:
            logger.warning(
                f"즐겨찾기 경로 재계산 실패: id={favorite.id}, "
                f"{favorite.source_id} → {favorite.target_id}, {e.code}"
            )
            return ResolvedFavoritePath(
                favorite=favorite, error={"code": e.code, "message": e.message}
            )
        return ResolvedFavoritePath(favorite=favorite, path=path)
