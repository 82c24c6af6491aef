"""
pydantic models for 요청, 응답 / dataclass 도메인 객체
"""


from app.models.requests import (
    StationCreateRequest,
    LineCreateRequest,
    LineUpdateRequest,
    LineEdgeCreateRequest,
    FavoriteStationCreateRequest,
    FavoritePathCreateRequest,
)
from app.models.responses import (
    StationResponse,
    LineResponse,
    MapResponse,
    PathResponse,
    FavoriteStationResponse,
    FavoritePathResponse,
    ErrorResponse,
)
from app.models.domain import Station, Edge, Line, Path, PathMetric, MapSnapshot

__all__ = [
    "StationCreateRequest",
    "LineCreateRequest",
    "LineUpdateRequest",
    "LineEdgeCreateRequest",
    "FavoriteStationCreateRequest",
    "FavoritePathCreateRequest",
    "StationResponse",
    "LineResponse",
    "MapResponse",
    "PathResponse",
    "FavoriteStationResponse",
    "FavoritePathResponse",
    "ErrorResponse",
    "Station",
    "Edge",
    "Line",
    "Path",
    "PathMetric",
    "MapSnapshot",
]
