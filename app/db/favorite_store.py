"""
즐겨찾기 저장소 (메모리)

역/경로 모두 식별자만 저장 => 경로는 조회 시점에 재계산
"""

import itertools
import logging
from threading import Lock
from typing import Dict, List

from app.core.exceptions import FavoriteNotFoundError
from app.models.domain import FavoritePath, FavoriteStation

logger = logging.getLogger(__name__)


class InMemoryFavoriteStore:
    def __init__(self):
        self._lock = Lock()
        self._stations: Dict[int, FavoriteStation] = {}
        self._paths: Dict[int, FavoritePath] = {}
        self._station_seq = itertools.count(1)
        self._path_seq = itertools.count(1)

    def add_station(self, owner: str, station_id: int) -> FavoriteStation:
        with self._lock:
            favorite = FavoriteStation(next(self._station_seq), owner, station_id)
            self._stations[favorite.id] = favorite
        logger.debug(f"즐겨찾기 역 추가: owner={owner}, station={station_id}")
        return favorite

    def list_stations(self, owner: str) -> List[FavoriteStation]:
        with self._lock:
            return [f for f in self._stations.values() if f.owner == owner]

    def delete_station(self, owner: str, favorite_id: int) -> None:
        with self._lock:
            favorite = self._stations.get(favorite_id)
            # 다른 사용자의 즐겨찾기도 존재하지 않는 것으로 취급
            if favorite is None or favorite.owner != owner:
                raise FavoriteNotFoundError(favorite_id)
            del self._stations[favorite_id]

    def add_path(self, owner: str, source_id: int, target_id: int) -> FavoritePath:
        with self._lock:
            favorite = FavoritePath(next(self._path_seq), owner, source_id, target_id)
            self._paths[favorite.id] = favorite
        logger.debug(
            f"즐겨찾기 경로 추가: owner={owner}, {source_id} → {target_id}"
        )
        return favorite

    def list_paths(self, owner: str) -> List[FavoritePath]:
        with self._lock:
            return [f for f in self._paths.values() if f.owner == owner]

    def delete_path(self, owner: str, favorite_id: int) -> None:
        with self._lock:
            favorite = self._paths.get(favorite_id)
            if favorite is None or favorite.owner != owner:
                raise FavoriteNotFoundError(favorite_id)
            del self._paths[favorite_id]
