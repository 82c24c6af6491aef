# 노선/역/구간 관리 서비스
# 모든 변경은 map_cache.writing() 안에서 검증 → 저장 → 캐시 무효화 순서로 처리

import dataclasses
import logging
from datetime import time
from typing import List, Optional

from app.algorithms.graph_builder import GraphBuilder
from app.core.exceptions import (
    InvalidEdgeError,
    LineNotFoundError,
    StationInUseError,
    StationNotFoundError,
)
from app.db.cache import MapCache
from app.db.repository import InMemoryTopologyRepository
from app.models.domain import Edge, Line, Station

logger = logging.getLogger(__name__)

# update_line으로 변경 가능한 속성
UPDATABLE_LINE_FIELDS = (
    "name",
    "color",
    "start_time",
    "end_time",
    "interval_time",
    "extra_fare",
)


class TopologyService:
    def __init__(
        self,
        repository: InMemoryTopologyRepository,
        map_cache: MapCache,
        builder: GraphBuilder = None,
    ):
        self.repository = repository
        self.map_cache = map_cache
        self.builder = builder or GraphBuilder()

    # ========== 역 ==========

    def list_stations(self) -> List[Station]:
        return self.repository.list_stations()

    def get_station(self, station_id: int) -> Station:
        station = self.repository.get_station(station_id)
        if station is None:
            raise StationNotFoundError(station_id)
        return station

    def create_station(self, name: str) -> Station:
        with self.map_cache.writing():
            station = Station(id=self.repository.next_station_id(), name=name.strip())
            self.repository.save_station(station)
            # 노선에 등록되기 전까지 노선도 내용은 그대로지만 일관성을 위해 무효화
            self.map_cache.invalidate()

        logger.info(f"역 생성: {station.name}({station.id})")
        return station

    def delete_station(self, station_id: int) -> None:
        with self.map_cache.writing():
            self.get_station(station_id)

            used_by = [
                line.id
                for line in self.repository.list_lines()
                if line.contains_station(station_id)
            ]
            if used_by:
                raise StationInUseError(station_id, used_by)

            self.repository.delete_station(station_id)
            self.map_cache.invalidate()

        logger.info(f"역 삭제: {station_id}")

    # ========== 노선 ==========

    def list_lines(self) -> List[Line]:
        return self.repository.list_lines()

    def get_line(self, line_id: int) -> Line:
        line = self.repository.get_line(line_id)
        if line is None:
            raise LineNotFoundError(line_id)
        return line

    def create_line(
        self,
        name: str,
        color: Optional[str] = None,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
        interval_time: Optional[int] = None,
        extra_fare: int = 0,
    ) -> Line:
        with self.map_cache.writing():
            line = Line(
                id=self.repository.next_line_id(),
                name=name.strip(),
                color=color,
                start_time=start_time,
                end_time=end_time,
                interval_time=interval_time,
                extra_fare=extra_fare,
            )
            self.repository.save_line(line)
            self.map_cache.invalidate()

        logger.info(f"노선 생성: {line.name}({line.id})")
        return line

    def update_line(self, line_id: int, **changes) -> Line:
        unknown = set(changes) - set(UPDATABLE_LINE_FIELDS)
        if unknown:
            raise ValueError(f"변경할 수 없는 노선 속성: {sorted(unknown)}")

        with self.map_cache.writing():
            line = dataclasses.replace(self.get_line(line_id), **changes)
            self.repository.save_line(line)
            self.map_cache.invalidate()

        logger.info(f"노선 수정: {line.name}({line.id}), 변경={sorted(changes)}")
        return line

    def delete_line(self, line_id: int) -> None:
        with self.map_cache.writing():
            self.get_line(line_id)
            self.repository.delete_line(line_id)
            self.map_cache.invalidate()

        logger.info(f"노선 삭제: {line_id}")

    # ========== 구간 ==========

    def add_line_edge(
        self,
        line_id: int,
        source_id: int,
        target_id: int,
        distance: float,
        duration: float,
    ) -> Line:
        """
        노선 끝(하행 종점 뒤) 또는 앞(상행 종점 앞)에 구간 추가

        Raises:
            LineNotFoundError, StationNotFoundError
            InvalidEdgeError: 같은 역 연결, 0 이하 거리 또는 음수 시간, 노선 양 끝에 붙지 않는 구간
        """
        with self.map_cache.writing():
            line = self.get_line(line_id)
            self.get_station(source_id)
            self.get_station(target_id)

            if source_id == target_id:
                raise InvalidEdgeError(
                    f"같은 역을 잇는 구간은 등록할 수 없습니다: {source_id}", line_id
                )

            try:
                edge = Edge(source_id, target_id, distance, duration)
            except ValueError as e:
                raise InvalidEdgeError(str(e), line_id) from e

            station_ids = line.station_ids()
            if not station_ids:
                edges = (edge,)
            elif source_id == station_ids[-1] and target_id not in station_ids:
                edges = line.edges + (edge,)
            elif target_id == station_ids[0] and source_id not in station_ids:
                edges = (edge,) + line.edges
            else:
                raise InvalidEdgeError(
                    f"노선 종점에 연결되지 않는 구간입니다: line={line_id}, "
                    f"{source_id}-{target_id}",
                    line_id,
                )

            updated = dataclasses.replace(line, edges=edges)
            self._commit_line(updated)

        logger.info(
            f"구간 등록: line={line_id}, {source_id} → {target_id} "
            f"(distance={distance}, duration={duration})"
        )
        return updated

    def remove_line_station(self, line_id: int, station_id: int) -> Line:
        """
        노선에서 역 제외
        종점 => 구간 하나 제거 / 중간역 => 앞뒤 구간을 하나로 병합 (거리, 시간 합산)
        """
        with self.map_cache.writing():
            line = self.get_line(line_id)
            station_ids = line.station_ids()
            if station_id not in station_ids:
                raise StationNotFoundError(
                    station_id, f"노선에 등록되지 않은 역입니다: line={line_id}, station={station_id}"
                )

            index = station_ids.index(station_id)
            if len(line.edges) == 1:
                edges = ()
            elif index == 0:
                edges = line.edges[1:]
            elif index == len(station_ids) - 1:
                edges = line.edges[:-1]
            else:
                before, after = line.edges[index - 1], line.edges[index]
                merged = Edge(
                    before.source_id,
                    after.target_id,
                    before.distance + after.distance,
                    before.duration + after.duration,
                )
                edges = line.edges[: index - 1] + (merged,) + line.edges[index + 1 :]

            updated = dataclasses.replace(line, edges=edges)
            self._commit_line(updated)

        logger.info(f"노선에서 역 제외: line={line_id}, station={station_id}")
        return updated

    def _commit_line(self, updated: Line) -> None:
        """변경된 노선을 포함한 전체 노선으로 그래프 빌드 검증 후 저장"""
        candidate = [
            updated if line.id == updated.id else line
            for line in self.repository.list_lines()
        ]
        # 실패 시 MalformedLineError / UnknownStationError 전파, 저장하지 않음
        self.builder.build(candidate, self.repository.list_stations())

        self.repository.save_line(updated)
        self.map_cache.invalidate()
