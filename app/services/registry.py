"""
서비스 인스턴스 관리
서버 시작 시 한 번 생성, 모든 요청이 동일한 인스턴스 참조
"""

import logging
from dataclasses import dataclass
from threading import Lock
from typing import Optional

from app.core.config import settings
from app.db.cache import MapCache, init_map_cache, reset_map_cache
from app.db.loader import load_topology
from app.db.redis_client import create_favorite_store
from app.db.repository import InMemoryTopologyRepository
from app.services.favorite_service import FavoriteService
from app.services.pathfinding_service import PathfindingService
from app.services.topology_service import TopologyService

logger = logging.getLogger(__name__)


@dataclass
class Services:
    repository: InMemoryTopologyRepository
    map_cache: MapCache
    topology_service: TopologyService
    pathfinding_service: PathfindingService
    favorite_service: FavoriteService


_services: Optional[Services] = None
_services_lock = Lock()


def init_services(repository=None, favorite_store=None) -> Services:
    """
    Args:
        repository: 노선도 저장소 (없으면 TOPOLOGY_DATA_FILE 로드 또는 빈 저장소)
        favorite_store: 즐겨찾기 저장소 (없으면 FAVORITE_STORE 설정 사용)
    """
    global _services

    with _services_lock:
        if repository is None:
            if settings.TOPOLOGY_DATA_FILE:
                repository = load_topology(settings.TOPOLOGY_DATA_FILE)
            else:
                logger.info("노선도 초기 데이터 없음 => 빈 노선도로 시작")
                repository = InMemoryTopologyRepository()

        if favorite_store is None:
            favorite_store = create_favorite_store()

        map_cache = init_map_cache(repository)
        pathfinding_service = PathfindingService(map_cache)

        _services = Services(
            repository=repository,
            map_cache=map_cache,
            topology_service=TopologyService(repository, map_cache),
            pathfinding_service=pathfinding_service,
            favorite_service=FavoriteService(
                favorite_store, repository, pathfinding_service
            ),
        )
        return _services


def get_services() -> Services:
    if _services is None:
        raise RuntimeError("서비스가 초기화되지 않았습니다")
    return _services


def reset_services() -> None:
    global _services
    with _services_lock:
        _services = None
        reset_map_cache()
