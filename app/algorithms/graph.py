"""
지하철 그래프 자료구조

역 id 기반 인접 리스트로 표현 (Station ↔ Line ↔ Edge 상호 참조 없음)
GraphBuilder만 생성하며 생성 이후에는 변경하지 않는다.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from app.models.domain import Line, Station


@dataclass(frozen=True, slots=True)
class Connection:
    target_id: int
    line_id: int
    distance: float
    duration: float


class SubwayGraph:
    """노선 집합에서 파생된 불변 그래프"""

    def __init__(
        self,
        stations: Dict[int, Station],
        adjacency: Dict[int, Tuple[Connection, ...]],
        lines: Dict[int, Line],
        station_lines: Dict[int, Tuple[int, ...]],
    ):
        # 인접 리스트: {station_id: (Connection, ...)}
        self._stations = stations
        self._adjacency = adjacency
        self._lines = lines
        # 역별 경유 노선: {station_id: (line_id, ...)}
        self._station_lines = station_lines

    def has_station(self, station_id: int) -> bool:
        return station_id in self._stations

    def get_station(self, station_id: int) -> Optional[Station]:
        return self._stations.get(station_id)

    def get_line(self, line_id: int) -> Optional[Line]:
        return self._lines.get(line_id)

    def connections(self, station_id: int) -> Tuple[Connection, ...]:
        return self._adjacency.get(station_id, ())

    def lines_of(self, station_id: int) -> List[Line]:
        return [self._lines[line_id] for line_id in self._station_lines.get(station_id, ())]

    @property
    def stations(self) -> Iterable[Station]:
        return self._stations.values()

    @property
    def station_count(self) -> int:
        return len(self._stations)

    @property
    def connection_count(self) -> int:
        return sum(len(conns) for conns in self._adjacency.values())
