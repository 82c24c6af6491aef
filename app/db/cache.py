"""
노선도 스냅샷 캐시

전체 노선도는 자주 읽히고 거의 바뀌지 않음 => 한 번 만든 스냅샷을 재사용
- 읽기: 발행된 스냅샷 참조를 락 없이 반환
- 재빌드: 락 안에서 로컬 값으로 완성한 뒤 참조 한 번 교체 (부분 빌드 노출 X)
- 만료 없음, 폴링 없음 => 노선/역/구간 변경 시 invalidate() 호출로만 갱신
"""

import hashlib
import json
import logging
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from threading import RLock
from typing import Iterable, List, Optional

from app.algorithms.graph_builder import GraphBuilder
from app.core.config import settings
from app.models.domain import Line, LineStationView, LineView, MapSnapshot, Station

logger = logging.getLogger(__name__)


def compute_fingerprint(lines: Iterable[Line], stations: Iterable[Station]) -> str:
    """
    노선/구간/역 내용의 결정적 해시

    노선은 id 순으로 정렬 (저장소 조회 순서와 무관), 구간은 노선 내 순서 유지
    => 구간 순서만 바뀌어도 다른 값
    """
    lines = sorted(lines, key=lambda line: line.id)
    referenced = {sid for line in lines for sid in line.station_ids()}

    hash_input = {
        "lines": [
            {
                "id": line.id,
                "name": line.name,
                "color": line.color,
                "start_time": line.start_time.isoformat() if line.start_time else None,
                "end_time": line.end_time.isoformat() if line.end_time else None,
                "interval_time": line.interval_time,
                "extra_fare": line.extra_fare,
                "edges": [
                    [e.source_id, e.target_id, e.distance, e.duration]
                    for e in line.edges
                ],
            }
            for line in lines
        ],
        "stations": sorted(
            [[s.id, s.name] for s in stations if s.id in referenced],
            key=lambda item: item[0],
        ),
    }

    hash_string = json.dumps(hash_input, sort_keys=True, ensure_ascii=False)
    return hashlib.sha256(hash_string.encode()).hexdigest()


class MapCache:
    def __init__(self, topology, builder: GraphBuilder = None):
        """
        Args:
            topology: list_lines(), list_stations()를 제공하는 노선도 저장소
        """
        self.topology = topology
        self.builder = builder or GraphBuilder()
        # 재빌드와 쓰기(변경 + invalidate)를 직렬화, 쓰기 중 invalidate 재진입 허용
        self._lock = RLock()
        self._snapshot: Optional[MapSnapshot] = None
        self._stale = True

    def get_map(self) -> MapSnapshot:
        """현재 스냅샷 반환, 없거나 무효화된 경우에만 재빌드"""
        snapshot = self._snapshot
        if snapshot is not None and not self._stale:
            logger.debug(f"노선도 캐시 HIT: {snapshot.fingerprint[:12]}")
            return snapshot

        with self._lock:
            # 락 대기 중 다른 스레드가 이미 재빌드했을 수 있음
            if self._snapshot is not None and not self._stale:
                return self._snapshot

            start_time = time.time()
            new_snapshot = self._build_snapshot()
            # 발행 => 참조 교체 한 번
            self._snapshot = new_snapshot
            self._stale = False

            elapsed_ms = (time.time() - start_time) * 1000
            logger.info(
                f"노선도 스냅샷 빌드: 노선 {len(new_snapshot.lines)}개, "
                f"fingerprint={new_snapshot.fingerprint[:12]}, {elapsed_ms:.1f}ms"
            )
            self._log_build_metrics(new_snapshot, elapsed_ms)
            return new_snapshot

    def invalidate(self) -> None:
        """다음 조회 시 재빌드 (기존 스냅샷은 읽는 중인 요청을 위해 유지)"""
        with self._lock:
            self._stale = True
            logger.debug("노선도 캐시 무효화")

    @contextmanager
    def writing(self):
        """노선도 변경 구간 => 재빌드와 상호 배제"""
        with self._lock:
            yield self

    def peek(self) -> Optional[MapSnapshot]:
        """빌드 없이 현재 발행된 스냅샷 (없으면 None)"""
        return self._snapshot

    @property
    def is_stale(self) -> bool:
        return self._stale

    def _build_snapshot(self) -> MapSnapshot:
        lines = self.topology.list_lines()
        stations = self.topology.list_stations()

        # 검증 실패 시 예외 전파 => 기존 스냅샷 유지
        graph = self.builder.build(lines, stations)

        line_views: List[LineView] = []
        for line in sorted(lines, key=lambda l: l.id):
            views = []
            for i, station_id in enumerate(line.station_ids()):
                if i == 0:
                    views.append(
                        LineStationView(graph.get_station(station_id), None, 0, 0)
                    )
                    continue
                edge = line.edges[i - 1]
                views.append(
                    LineStationView(
                        station=graph.get_station(station_id),
                        pre_station_id=edge.source_id,
                        distance=edge.distance,
                        duration=edge.duration,
                    )
                )
            line_views.append(LineView(line=line, stations=tuple(views)))

        return MapSnapshot(
            lines=tuple(line_views),
            graph=graph,
            fingerprint=compute_fingerprint(lines, stations),
            built_at=datetime.now(timezone.utc),
        )

    def _log_build_metrics(self, snapshot: MapSnapshot, elapsed_ms: float) -> None:
        """빌드 메트릭 로깅 => ELK Stack, CloudWatch 등에서 분석하기"""
        if not settings.ENABLE_CACHE_METRICS:
            return

        metrics = {
            "event": "map_snapshot_build",
            "lines": len(snapshot.lines),
            "stations": snapshot.graph.station_count,
            "build_time_ms": round(elapsed_ms, 2),
            "fingerprint": snapshot.fingerprint,
        }
        logger.info(f"METRICS: {json.dumps(metrics, ensure_ascii=False)}")


# ========== singleton ==========
# 모든 서비스가 동일한 캐시 인스턴스 참조

_map_cache: Optional[MapCache] = None
_map_cache_lock = RLock()


def init_map_cache(topology) -> MapCache:
    global _map_cache
    with _map_cache_lock:
        _map_cache = MapCache(topology)
        logger.info("노선도 캐시 초기화")
        return _map_cache


def get_map_cache() -> MapCache:
    if _map_cache is None:
        raise RuntimeError("노선도 캐시가 초기화되지 않았습니다")
    return _map_cache


def reset_map_cache() -> None:
    global _map_cache
    with _map_cache_lock:
        _map_cache = None
