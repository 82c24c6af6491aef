"""
노선도 저장소, 노선도 캐시, 즐겨찾기 저장소
"""

from app.db.cache import (
    MapCache,
    compute_fingerprint,
    init_map_cache,
    get_map_cache,
    reset_map_cache,
)
from app.db.repository import InMemoryTopologyRepository
from app.db.loader import load_topology
from app.db.favorite_store import InMemoryFavoriteStore
from app.db.redis_client import RedisFavoriteStore, create_favorite_store

__all__ = [
    "MapCache",
    "compute_fingerprint",
    "init_map_cache",
    "get_map_cache",
    "reset_map_cache",
    "InMemoryTopologyRepository",
    "load_topology",
    "InMemoryFavoriteStore",
    "RedisFavoriteStore",
    "create_favorite_store",
]
