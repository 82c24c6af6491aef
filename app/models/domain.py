from datetime import datetime, time
from enum import Enum
from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass, field

# domain 정의
# 모든 도메인 객체는 불변 => 그래프/스냅샷을 여러 요청이 락 없이 공유


@dataclass(frozen=True)
class Station:
    id: int  # 내부 연산은 id로 통일
    name: str = field(compare=False)  # 동등성은 id로만 판단


@dataclass(frozen=True)
class Edge:
    source_id: int
    target_id: int
    distance: float  # m
    duration: float  # 분

    def __post_init__(self):
        # 거리 0 구간은 요금 계산이 불가능한 경로를 만듦
        if self.distance <= 0:
            raise ValueError(f"구간 거리는 0보다 커야 합니다: distance={self.distance}")
        if self.duration < 0:
            raise ValueError(f"구간 소요시간은 음수일 수 없습니다: duration={self.duration}")


@dataclass(frozen=True)
class Line:
    id: int
    name: str
    edges: Tuple[Edge, ...] = ()
    color: Optional[str] = None
    # 운행 정보 => 노선도 응답용, 경로 탐색에는 사용하지 않음
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    interval_time: Optional[int] = None
    extra_fare: int = 0  # 노선 추가 요금

    def station_ids(self) -> List[int]:
        """구간 순서대로 정렬된 역 id (구간이 없으면 빈 리스트)"""
        if not self.edges:
            return []
        return [self.edges[0].source_id] + [e.target_id for e in self.edges]

    def contains_station(self, station_id: int) -> bool:
        return station_id in self.station_ids()


class PathMetric(str, Enum):
    DISTANCE = "DISTANCE"
    DURATION = "DURATION"

    def weight_of(self, connection) -> float:
        """탐색 기준에 해당하는 가중치 선택"""
        if self is PathMetric.DURATION:
            return connection.duration
        return connection.distance


@dataclass(frozen=True)
class Path:
    stations: Tuple[Station, ...]
    segment_lines: Tuple[int, ...]  # 구간별 노선 id, len(stations) - 1
    distance: float
    duration: float
    fare: Optional[int] = None  # PathfindingService에서 부여

    @property
    def source(self) -> Station:
        return self.stations[0]

    @property
    def target(self) -> Station:
        return self.stations[-1]

    @property
    def line_ids(self) -> List[int]:
        """지나는 노선 (등장 순서, 중복 제거)"""
        seen = []
        for line_id in self.segment_lines:
            if line_id not in seen:
                seen.append(line_id)
        return seen

    @property
    def transfers(self) -> int:
        return sum(
            1
            for prev, cur in zip(self.segment_lines, self.segment_lines[1:])
            if prev != cur
        )


@dataclass(frozen=True)
class FavoriteStation:
    id: int
    owner: str
    station_id: int


# 경로 자체는 저장하지 않음 => 조회할 때마다 재계산
@dataclass(frozen=True)
class FavoritePath:
    id: int
    owner: str
    source_id: int
    target_id: int


@dataclass(frozen=True)
class LineStationView:
    station: Station
    pre_station_id: Optional[int]
    distance: float  # 이전 역으로부터의 거리, 첫 역은 0
    duration: float


@dataclass(frozen=True)
class LineView:
    line: Line
    stations: Tuple[LineStationView, ...]


@dataclass(frozen=True)
class MapSnapshot:
    lines: Tuple[LineView, ...]
    graph: "object"  # SubwayGraph (순환 import 방지)
    fingerprint: str
    built_at: datetime


@dataclass
class User:
    user_id: str  # 토큰 subject
    scopes: List[str] = field(default_factory=list)


@dataclass
class ResolvedFavoritePath:
    favorite: FavoritePath
    path: Optional[Path] = None
    error: Optional[Dict[str, str]] = None  # {"code", "message"} 경로 재계산 실패 시
