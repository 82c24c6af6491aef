"""
JSON 파일에서 노선도 초기 데이터 로드

{
    "stations": [{"id": 1, "name": "강남역"}, ...],
    "lines": [
        {
            "id": 1, "name": "2호선", "color": "GREEN",
            "start_time": "05:30", "end_time": "23:30", "interval_time": 10,
            "extra_fare": 0,
            "edges": [{"source": 1, "target": 2, "distance": 1000, "duration": 2}, ...]
        }
    ]
}
"""

import json
import logging
from datetime import time
from pathlib import Path
from typing import Optional, Union

from app.core.exceptions import InvalidEdgeError
from app.db.repository import InMemoryTopologyRepository
from app.models.domain import Edge, Line, Station

logger = logging.getLogger(__name__)


def _parse_time(value: Optional[str]) -> Optional[time]:
    if not value:
        return None
    return time.fromisoformat(value)


def load_topology(
    data_file: Union[str, Path], repository: InMemoryTopologyRepository = None
) -> InMemoryTopologyRepository:
    """
    Args:
        data_file: stations, lines를 담은 JSON 파일
        repository: 채울 저장소 (없으면 새로 생성)

    Returns:
        데이터가 채워진 저장소

    Raises:
        InvalidEdgeError: 거리가 없거나 0 이하인 구간
    """
    data_path = Path(data_file)
    repository = repository or InMemoryTopologyRepository()

    with open(data_path, encoding="utf-8") as f:
        data = json.load(f)

    for s in data.get("stations", []):
        repository.save_station(Station(id=int(s["id"]), name=s["name"]))

    for raw_line in data.get("lines", []):
        try:
            edges = tuple(
                Edge(
                    source_id=int(e["source"]),
                    target_id=int(e["target"]),
                    distance=e["distance"],
                    duration=e.get("duration", 0),
                )
                for e in raw_line.get("edges", [])
            )
        except (KeyError, ValueError) as e:
            raise InvalidEdgeError(
                f"노선 {raw_line.get('id')} 구간 데이터 오류: {e}", raw_line.get("id")
            ) from e
        repository.save_line(
            Line(
                id=int(raw_line["id"]),
                name=raw_line["name"],
                edges=edges,
                color=raw_line.get("color"),
                start_time=_parse_time(raw_line.get("start_time")),
                end_time=_parse_time(raw_line.get("end_time")),
                interval_time=raw_line.get("interval_time"),
                extra_fare=raw_line.get("extra_fare", 0),
            )
        )

    logger.info(
        f"✓ 노선도 데이터 로드 완료: 역 {len(repository.list_stations())}개, "
        f"노선 {len(repository.list_lines())}개 ({data_path})"
    )
    return repository
