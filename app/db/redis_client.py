import redis
import json
from typing import Dict, List, Optional
import logging

from app.core.config import settings
from app.core.exceptions import FavoriteNotFoundError
from app.models.domain import FavoritePath, FavoriteStation

logger = logging.getLogger(__name__)

STATION_KIND = "stations"
PATH_KIND = "paths"


class RedisFavoriteStore:
    """
    즐겨찾기 Redis 저장소

    key 구조
    - favorites:{kind}:{owner} => hash {favorite_id: json}
    - favorites:{kind}:seq => id 발급용 counter
    """

    def __init__(self, redis_client: Optional[redis.Redis] = None):
        self.redis_client = redis_client or redis.Redis(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            db=settings.REDIS_DB,
            decode_responses=True,
        )

    # ========== 역 ==========

    def add_station(self, owner: str, station_id: int) -> FavoriteStation:
        favorite_id = self._insert(STATION_KIND, owner, {"station_id": station_id})
        return FavoriteStation(favorite_id, owner, station_id)

    def list_stations(self, owner: str) -> List[FavoriteStation]:
        return [
            FavoriteStation(favorite_id, owner, data["station_id"])
            for favorite_id, data in self._list(STATION_KIND, owner)
        ]

    def delete_station(self, owner: str, favorite_id: int) -> None:
        self._delete(STATION_KIND, owner, favorite_id)

    # ========== 경로 ==========

    def add_path(self, owner: str, source_id: int, target_id: int) -> FavoritePath:
        favorite_id = self._insert(
            PATH_KIND, owner, {"source_id": source_id, "target_id": target_id}
        )
        return FavoritePath(favorite_id, owner, source_id, target_id)

    def list_paths(self, owner: str) -> List[FavoritePath]:
        return [
            FavoritePath(favorite_id, owner, data["source_id"], data["target_id"])
            for favorite_id, data in self._list(PATH_KIND, owner)
        ]

    def delete_path(self, owner: str, favorite_id: int) -> None:
        self._delete(PATH_KIND, owner, favorite_id)

    # ========== 공통 ==========

    @staticmethod
    def _key(kind: str, owner: str) -> str:
        return f"favorites:{kind}:{owner}"

    def _insert(self, kind: str, owner: str, data: Dict) -> int:
        try:
            favorite_id = int(self.redis_client.incr(f"favorites:{kind}:seq"))
            self.redis_client.hset(
                self._key(kind, owner), str(favorite_id), json.dumps(data)
            )
            logger.debug(f"즐겨찾기 저장: kind={kind}, owner={owner}, id={favorite_id}")
            return favorite_id
        except redis.RedisError as e:
            logger.error(f"즐겨찾기 저장 실패: kind={kind}, owner={owner}, 오류: {e}")
            raise

    def _list(self, kind: str, owner: str) -> List[tuple]:
        try:
            raw = self.redis_client.hgetall(self._key(kind, owner)) or {}
        except redis.RedisError as e:
            logger.error(f"즐겨찾기 조회 실패: kind={kind}, owner={owner}, 오류: {e}")
            raise

        # 등록 순서 == id 순서
        return sorted(
            ((int(favorite_id), json.loads(value)) for favorite_id, value in raw.items()),
            key=lambda item: item[0],
        )

    def _delete(self, kind: str, owner: str, favorite_id: int) -> None:
        try:
            removed = self.redis_client.hdel(self._key(kind, owner), str(favorite_id))
        except redis.RedisError as e:
            logger.error(f"즐겨찾기 삭제 실패: kind={kind}, owner={owner}, 오류: {e}")
            raise

        if not removed:
            raise FavoriteNotFoundError(favorite_id)
        logger.debug(f"즐겨찾기 삭제: kind={kind}, owner={owner}, id={favorite_id}")


def create_favorite_store():
    """설정에 따라 즐겨찾기 저장소 생성"""
    if settings.FAVORITE_STORE == "redis":
        logger.info(
            f"즐겨찾기 저장소: redis ({settings.REDIS_HOST}:{settings.REDIS_PORT})"
        )
        return RedisFavoriteStore()

    from app.db.favorite_store import InMemoryFavoriteStore

    logger.info("즐겨찾기 저장소: memory")
    return InMemoryFavoriteStore()
