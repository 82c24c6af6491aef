from datetime import datetime, time
from typing import List, Optional
from pydantic import BaseModel, Field

from app.models.domain import (
    FavoriteStation,
    Line,
    MapSnapshot,
    Path,
    ResolvedFavoritePath,
    Station,
)

# service 별 응답 구조 정의


# 에러 응답
class ErrorResponse(BaseModel):
    error: str = Field(..., description="에러 메시지")
    code: Optional[str] = Field(None, description="에러 코드")


class LineSummaryResponse(BaseModel):
    id: int
    name: str


class StationResponse(BaseModel):
    id: int
    name: str

    @classmethod
    def of(cls, station: Station) -> "StationResponse":
        return cls(id=station.id, name=station.name)


# 역 + 경유 노선 (경로/즐겨찾기 응답용)
class StationWithLinesResponse(BaseModel):
    id: int
    name: str
    lines: List[LineSummaryResponse] = Field(default_factory=list)

    @classmethod
    def of(cls, station: Station, lines: List[Line]) -> "StationWithLinesResponse":
        return cls(
            id=station.id,
            name=station.name,
            lines=[LineSummaryResponse(id=line.id, name=line.name) for line in lines],
        )


class EdgeResponse(BaseModel):
    source_station_id: int
    target_station_id: int
    distance: float
    duration: float


class LineResponse(BaseModel):
    id: int
    name: str
    color: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    interval_time: Optional[int] = None
    extra_fare: int = 0
    station_ids: List[int] = Field(default_factory=list, description="노선 순서대로 정렬된 역 id")
    edges: List[EdgeResponse] = Field(default_factory=list)

    @classmethod
    def of(cls, line: Line) -> "LineResponse":
        return cls(
            id=line.id,
            name=line.name,
            color=line.color,
            start_time=line.start_time,
            end_time=line.end_time,
            interval_time=line.interval_time,
            extra_fare=line.extra_fare,
            station_ids=line.station_ids(),
            edges=[
                EdgeResponse(
                    source_station_id=e.source_id,
                    target_station_id=e.target_id,
                    distance=e.distance,
                    duration=e.duration,
                )
                for e in line.edges
            ],
        )


# ========== 노선도 ==========


class MapLineStationResponse(BaseModel):
    station: StationResponse
    pre_station_id: Optional[int] = Field(None, description="이전 역 id (첫 역은 null)")
    distance: float = Field(..., description="이전 역으로부터의 거리 (m)")
    duration: float = Field(..., description="이전 역으로부터의 소요시간 (분)")


class MapLineResponse(BaseModel):
    id: int
    name: str
    color: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    interval_time: Optional[int] = None
    stations: List[MapLineStationResponse] = Field(..., description="노선 순서대로 정렬된 역")


class MapResponse(BaseModel):
    lines: List[MapLineResponse]
    fingerprint: str = Field(..., description="노선도 내용 해시 (ETag)")
    built_at: datetime

    @classmethod
    def of(cls, snapshot: MapSnapshot) -> "MapResponse":
        return cls(
            lines=[
                MapLineResponse(
                    id=view.line.id,
                    name=view.line.name,
                    color=view.line.color,
                    start_time=view.line.start_time,
                    end_time=view.line.end_time,
                    interval_time=view.line.interval_time,
                    stations=[
                        MapLineStationResponse(
                            station=StationResponse.of(s.station),
                            pre_station_id=s.pre_station_id,
                            distance=s.distance,
                            duration=s.duration,
                        )
                        for s in view.stations
                    ],
                )
                for view in snapshot.lines
            ],
            fingerprint=snapshot.fingerprint,
            built_at=snapshot.built_at,
        )


# ========== 경로 ==========


class PathResponse(BaseModel):
    start_station_id: int = Field(..., description="출발역 id")
    end_station_id: int = Field(..., description="도착역 id")
    stations: List[StationWithLinesResponse] = Field(..., description="경로 순서대로 정렬된 역")
    segment_line_ids: List[int] = Field(..., description="구간별 노선 id")
    transfers: int = Field(..., description="환승 횟수")
    distance: float = Field(..., description="총 거리 (m)")
    duration: float = Field(..., description="총 소요시간 (분)")
    fare: Optional[int] = Field(None, description="요금 (원)")

    @classmethod
    def of(cls, path: Path, graph) -> "PathResponse":
        return cls(
            start_station_id=path.source.id,
            end_station_id=path.target.id,
            stations=[
                StationWithLinesResponse.of(station, graph.lines_of(station.id))
                for station in path.stations
            ],
            segment_line_ids=list(path.segment_lines),
            transfers=path.transfers,
            distance=path.distance,
            duration=path.duration,
            fare=path.fare,
        )


# ========== 즐겨찾기 ==========


class FavoriteStationResponse(BaseModel):
    id: int
    owner: str
    station_id: int
    station: Optional[StationWithLinesResponse] = Field(
        None, description="역 정보 (삭제된 역이면 null)"
    )

    @classmethod
    def of(
        cls,
        favorite: FavoriteStation,
        station: Optional[Station],
        lines: List[Line],
    ) -> "FavoriteStationResponse":
        return cls(
            id=favorite.id,
            owner=favorite.owner,
            station_id=favorite.station_id,
            station=StationWithLinesResponse.of(station, lines) if station else None,
        )


class FavoritePathResponse(BaseModel):
    id: int
    owner: str
    source_station_id: int
    target_station_id: int
    paths: List[PathResponse] = Field(default_factory=list, description="재계산된 경로")
    error: Optional[ErrorResponse] = Field(None, description="경로 재계산 실패 시")

    @classmethod
    def of(cls, resolved: ResolvedFavoritePath, graph) -> "FavoritePathResponse":
        favorite = resolved.favorite
        return cls(
            id=favorite.id,
            owner=favorite.owner,
            source_station_id=favorite.source_id,
            target_station_id=favorite.target_id,
            paths=[PathResponse.of(resolved.path, graph)] if resolved.path else [],
            error=(
                ErrorResponse(error=resolved.error["message"], code=resolved.error["code"])
                if resolved.error
                else None
            ),
        )
