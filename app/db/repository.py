"""
노선/역 저장소 (메모리)

저장 기술 선택은 이 서비스의 관심사가 아님
=> 노선/역 목록을 읽고 쓰는 최소 인터페이스만 제공
"""

import itertools
import logging
from threading import Lock
from typing import Dict, List, Optional

from app.models.domain import Line, Station

logger = logging.getLogger(__name__)


class InMemoryTopologyRepository:
    def __init__(self):
        self._lock = Lock()
        self._stations: Dict[int, Station] = {}
        self._lines: Dict[int, Line] = {}
        self._station_seq = itertools.count(1)
        self._line_seq = itertools.count(1)

    # ========== 조회 ==========

    def list_lines(self) -> List[Line]:
        with self._lock:
            return list(self._lines.values())

    def list_stations(self) -> List[Station]:
        with self._lock:
            return list(self._stations.values())

    def get_line(self, line_id: int) -> Optional[Line]:
        return self._lines.get(line_id)

    def get_station(self, station_id: int) -> Optional[Station]:
        return self._stations.get(station_id)

    # ========== 변경 ==========

    def next_station_id(self) -> int:
        with self._lock:
            return self._next_id(self._station_seq, self._stations)

    def next_line_id(self) -> int:
        with self._lock:
            return self._next_id(self._line_seq, self._lines)

    def save_station(self, station: Station) -> Station:
        with self._lock:
            self._stations[station.id] = station
        return station

    def delete_station(self, station_id: int) -> bool:
        with self._lock:
            return self._stations.pop(station_id, None) is not None

    def save_line(self, line: Line) -> Line:
        with self._lock:
            self._lines[line.id] = line
        return line

    def delete_line(self, line_id: int) -> bool:
        with self._lock:
            return self._lines.pop(line_id, None) is not None

    @staticmethod
    def _next_id(sequence, existing: Dict[int, object]) -> int:
        # 시드 데이터로 들어온 id와 겹치지 않도록 건너뜀
        while True:
            candidate = next(sequence)
            if candidate not in existing:
                return candidate
