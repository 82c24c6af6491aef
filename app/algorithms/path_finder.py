# Dijkstra 기반 최단 경로 탐색
import heapq
import itertools
import logging
from typing import Dict, List, Optional, Tuple

from app.algorithms.graph import Connection, SubwayGraph
from app.core.exceptions import NoPathError, SameStationError, StationNotFoundError
from app.models.domain import Path, PathMetric

logger = logging.getLogger(__name__)

# 탐색 상태 => (역 id, 도착할 때 탄 노선 id)
# 같은 역이라도 어떤 노선으로 도착했는지에 따라 이후 환승 횟수가 달라짐
State = Tuple[int, Optional[int]]


class PathFinder:
    """
    단일 출발지 최단 경로 (가중치 음수 없음)

    비용은 (가중치, 환승 횟수, 이용 노선 수) 사전식 비교
    => 가중치가 정확히 같을 때만 환승이 적은 경로 선택
    환승 횟수도 같으면 서로 다른 노선을 적게 이용하는 경로 (1→2→1 이 3→4→5 보다 우선)
    그래도 같으면 힙 삽입 순서로 결정 (그래프 내용에만 의존, 매 호출 동일)
    """

    def shortest_path(
        self,
        graph: SubwayGraph,
        source_id: int,
        target_id: int,
        metric: PathMetric = PathMetric.DISTANCE,
    ) -> Path:
        """
        Raises:
            StationNotFoundError: 그래프에 없는 출발/도착역
            SameStationError: 출발역 == 도착역
            NoPathError: 도달 불가능 (분리된 그래프)
        """
        for station_id in (source_id, target_id):
            if not graph.has_station(station_id):
                raise StationNotFoundError(station_id)

        if source_id == target_id:
            raise SameStationError(source_id)

        metric = PathMetric(metric)
        sequence = itertools.count()

        start: State = (source_id, None)
        best: Dict[State, Tuple[float, int, int]] = {start: (0, 0, 0)}
        parent: Dict[State, Tuple[State, Connection]] = {}
        settled = set()

        # heap item: (weight, transfers, line_count, seq, station_id, line_id, used_lines)
        # seq가 유일하므로 used_lines까지 비교되지 않음
        heap = [(0, 0, 0, next(sequence), source_id, None, frozenset())]

        while heap:
            weight, transfers, _, _, station_id, line_id, used_lines = heapq.heappop(heap)
            state = (station_id, line_id)
            if state in settled:
                continue
            settled.add(state)

            if station_id == target_id:
                return self._reconstruct(graph, state, parent)

            for conn in graph.connections(station_id):
                next_state = (conn.target_id, conn.line_id)
                if next_state in settled:
                    continue

                # 출발 직후 첫 탑승은 환승 아님
                is_transfer = line_id is not None and conn.line_id != line_id
                next_lines = used_lines | {conn.line_id}
                cost = (
                    weight + metric.weight_of(conn),
                    transfers + (1 if is_transfer else 0),
                    len(next_lines),
                )

                current = best.get(next_state)
                if current is None or cost < current:
                    best[next_state] = cost
                    parent[next_state] = (state, conn)
                    heapq.heappush(
                        heap,
                        (*cost, next(sequence), conn.target_id, conn.line_id, next_lines),
                    )

        logger.debug(f"도달 불가: {source_id} → {target_id}")
        raise NoPathError(source_id, target_id)

    def _reconstruct(
        self,
        graph: SubwayGraph,
        state: State,
        parent: Dict[State, Tuple[State, Connection]],
    ) -> Path:
        """leaf -> root 역추적 후 뒤집기"""
        connections: List[Connection] = []
        station_ids = [state[0]]
        while state in parent:
            prev_state, conn = parent[state]
            connections.append(conn)
            station_ids.append(prev_state[0])
            state = prev_state

        connections.reverse()
        station_ids.reverse()

        # 두 합계 모두 항상 계산 => 시간 기준 탐색이어도 거리 제공
        return Path(
            stations=tuple(graph.get_station(sid) for sid in station_ids),
            segment_lines=tuple(conn.line_id for conn in connections),
            distance=sum(conn.distance for conn in connections),
            duration=sum(conn.duration for conn in connections),
        )
