"""
Core 설정 및 utilities, 커스텀 예외
"""

from app.core.config import settings

from app.core.exceptions import (
    SubwayMapException,
    MalformedLineError,
    UnknownStationError,
    StationNotFoundError,
    SameStationError,
    NoPathError,
    InvalidDistanceError,
    LineNotFoundError,
    InvalidEdgeError,
    StationInUseError,
    FavoriteNotFoundError,
)

__all__ = [
    "settings",
    "SubwayMapException",
    "MalformedLineError",
    "UnknownStationError",
    "StationNotFoundError",
    "SameStationError",
    "NoPathError",
    "InvalidDistanceError",
    "LineNotFoundError",
    "InvalidEdgeError",
    "StationInUseError",
    "FavoriteNotFoundError",
]
