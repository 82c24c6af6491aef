from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from app.auth.security import access_token_subject, decode_token
from app.db.cache import MapCache
from app.models.domain import User
from app.services.favorite_service import FavoriteService
from app.services.pathfinding_service import PathfindingService
from app.services.registry import get_services
from app.services.topology_service import TopologyService

# auto_error=False -> token이 없어도 에러를 내지 않고 None을 반환
# => 401 응답을 직접 구성하기 위함
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


# ========== 서비스 ==========


def get_map_cache() -> MapCache:
    return get_services().map_cache


def get_topology_service() -> TopologyService:
    return get_services().topology_service


def get_pathfinding_service() -> PathfindingService:
    return get_services().pathfinding_service


def get_favorite_service() -> FavoriteService:
    return get_services().favorite_service


# ========== 인증 ==========


async def get_current_user(token: Optional[str] = Depends(oauth2_scheme)) -> Optional[User]:
    if token is None:
        return None

    payload = decode_token(token)
    user_id = access_token_subject(payload)
    if user_id is None:
        return None

    return User(user_id=user_id, scopes=list(payload.get("scopes", [])))


# error 반환 -> 로그인이 필수인 엔드포인트(즐겨찾기)에서 사용
async def get_current_active_user(current_user: Optional[User] = Depends(get_current_user)) -> User:
    if current_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return current_user
