# 경로 찾기 서비스

import logging
import time
import dataclasses

from app.algorithms.fare_calculator import FareCalculator, FareSchedule
from app.algorithms.graph import SubwayGraph
from app.algorithms.path_finder import PathFinder
from app.core.exceptions import SubwayMapException
from app.db.cache import MapCache
from app.models.domain import Path, PathMetric

logger = logging.getLogger(__name__)


class PathfindingService:
    def __init__(
        self,
        map_cache: MapCache,
        finder: PathFinder = None,
        fare_calculator: FareCalculator = None,
    ):
        # 그래프는 노선도 스냅샷과 함께 빌드된 것을 재사용
        self.map_cache = map_cache
        self.finder = finder or PathFinder()
        self.fare_calculator = fare_calculator or FareCalculator(
            FareSchedule.from_settings()
        )
        logger.info("PathfindingService 초기화 완료")

    def find_path(
        self,
        source_id: int,
        target_id: int,
        metric: PathMetric = PathMetric.DISTANCE,
        graph: SubwayGraph = None,
    ) -> Path:
        """
        최단 경로 + 요금 계산

        Args:
            source_id: 출발역 id
            target_id: 도착역 id
            metric: DISTANCE(최단 거리) / DURATION(최소 시간)
            graph: 호출자가 이미 읽은 스냅샷 그래프 (없으면 현재 노선도)

        Returns:
            요금이 포함된 Path

        Raises:
            StationNotFoundError: 노선도에 없는 역
            SameStationError: 출발역 == 도착역
            NoPathError: 경로 없음
        """
        start_time = time.time()
        metric = PathMetric(metric)

        try:
            # 스냅샷 참조를 한 번만 읽음 => 탐색 중 노선도가 바뀌어도 일관된 그래프 사용
            if graph is None:
                graph = self.map_cache.get_map().graph

            path = self.finder.shortest_path(graph, source_id, target_id, metric)
            lines = [graph.get_line(line_id) for line_id in path.line_ids]
            fare = self.fare_calculator.fare(path.distance, lines)
            path = dataclasses.replace(path, fare=fare)

            elapsed_time = time.time() - start_time
            logger.info(
                f"경로 계산: {source_id} → {target_id}, type={metric.value}, "
                f"역 {len(path.stations)}개, distance={path.distance}, "
                f"duration={path.duration}, fare={fare}, "
                f"응답시간={elapsed_time*1000:.1f}ms"
            )
            return path

        except SubwayMapException as e:
            logger.info(f"경로 계산 실패: {e.code} {e.message}")
            raise
        except Exception as e:
            logger.error(f"경로 계산 오류: {e}", exc_info=True)
            raise
