"""API v1 main router
모든 엔드포인트를 통합하여 하나의 API 라우터로 제공
"""

from fastapi import APIRouter
from app.api.v1.endpoints import favorites, lines, maps, paths, stations

# API v1 main router
api_router = APIRouter()

# 각 엔드 포인트 라우터 통합
api_router.include_router(maps.router, prefix="/maps", tags=["maps"])

api_router.include_router(paths.router, prefix="/paths", tags=["paths"])

api_router.include_router(stations.router, prefix="/stations", tags=["stations"])

api_router.include_router(lines.router, prefix="/lines", tags=["lines"])

api_router.include_router(favorites.router, prefix="/favorites", tags=["favorites"])
