import logging
from collections import defaultdict
from typing import Dict, Iterable, List

from app.algorithms.graph import Connection, SubwayGraph
from app.core.exceptions import MalformedLineError, UnknownStationError
from app.models.domain import Line, Station

logger = logging.getLogger(__name__)


class GraphBuilder:
    """노선 목록 → 단일 가중 그래프 (상태 없음)"""

    def build(self, lines: Iterable[Line], stations: Iterable[Station]) -> SubwayGraph:
        """
        모든 노선의 구간을 하나의 그래프로 병합

        Args:
            lines: 현재 등록된 전체 노선 (순서 무관)
            stations: 역 카탈로그, 구간 양 끝 역 id를 해석하는 데 사용

        Returns:
            SubwayGraph

        Raises:
            MalformedLineError: 구간이 이어지지 않거나 역이 중복된 노선
            UnknownStationError: 카탈로그에 없는 역을 참조하는 구간
        """
        catalog = {station.id: station for station in stations}
        lines = list(lines)

        # 검증 먼저 => 일부만 만들어진 그래프는 절대 반환하지 않음
        for line in lines:
            self._validate_line(line, catalog)

        graph_stations: Dict[int, Station] = {}
        adjacency: Dict[int, List[Connection]] = defaultdict(list)
        station_lines: Dict[int, List[int]] = defaultdict(list)

        for line in lines:
            for edge in line.edges:
                for station_id in (edge.source_id, edge.target_id):
                    if station_id not in graph_stations:
                        graph_stations[station_id] = catalog[station_id]
                    if line.id not in station_lines[station_id]:
                        station_lines[station_id].append(line.id)

                # 양방향, 다른 노선의 평행 구간도 그대로 유지
                adjacency[edge.source_id].append(
                    Connection(edge.target_id, line.id, edge.distance, edge.duration)
                )
                adjacency[edge.target_id].append(
                    Connection(edge.source_id, line.id, edge.distance, edge.duration)
                )

        graph = SubwayGraph(
            stations=graph_stations,
            adjacency={sid: tuple(conns) for sid, conns in adjacency.items()},
            lines={line.id: line for line in lines},
            station_lines={sid: tuple(ids) for sid, ids in station_lines.items()},
        )
        logger.debug(
            f"그래프 빌드 완료: 노선 {len(lines)}개, 역 {graph.station_count}개, "
            f"연결 {graph.connection_count}개"
        )
        return graph

    def _validate_line(self, line: Line, catalog: Dict[int, Station]) -> None:
        for edge in line.edges:
            for station_id in (edge.source_id, edge.target_id):
                if station_id not in catalog:
                    raise UnknownStationError(station_id, line.id)

        for prev, cur in zip(line.edges, line.edges[1:]):
            if prev.target_id != cur.source_id:
                raise MalformedLineError(
                    line.id,
                    f"노선 구간이 연결되어 있지 않습니다: line={line.id}, "
                    f"{prev.source_id}-{prev.target_id} / {cur.source_id}-{cur.target_id}",
                )

        # 분기/순환 없는 단순 경로만 허용
        station_ids = line.station_ids()
        if len(station_ids) != len(set(station_ids)):
            raise MalformedLineError(
                line.id, f"노선에 같은 역이 두 번 등장합니다: line={line.id}"
            )
