"""
노선도 초기 데이터 로드 테스트
"""

import json
from datetime import time

import pytest

from app.core.exceptions import InvalidEdgeError
from app.db.loader import load_topology
from app.db.repository import InMemoryTopologyRepository


@pytest.fixture
def topology_file(tmp_path):
    data = {
        "stations": [
            {"id": 1, "name": "강남역"},
            {"id": 2, "name": "역삼역"},
            {"id": 3, "name": "선릉역"},
        ],
        "lines": [
            {
                "id": 2,
                "name": "2호선",
                "color": "GREEN",
                "start_time": "05:30",
                "end_time": "23:30",
                "interval_time": 5,
                "edges": [
                    {"source": 1, "target": 2, "distance": 800, "duration": 2},
                    {"source": 2, "target": 3, "distance": 1200, "duration": 2},
                ],
            }
        ],
    }
    path = tmp_path / "topology.json"
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


class TestLoadTopology:
    """JSON => 메모리 저장소"""

    def test_load(self, topology_file):
        repository = load_topology(topology_file)

        assert len(repository.list_stations()) == 3
        line = repository.get_line(2)
        assert line.station_ids() == [1, 2, 3]
        assert line.start_time == time(5, 30)
        assert line.interval_time == 5
        assert line.extra_fare == 0

    def test_load_into_existing_repository(self, topology_file):
        repository = InMemoryTopologyRepository()

        returned = load_topology(str(topology_file), repository)

        assert returned is repository

    def test_next_ids_skip_loaded(self, topology_file):
        """로드된 id와 겹치지 않는 새 id 발급"""
        repository = load_topology(topology_file)

        assert repository.next_station_id() == 4
        assert repository.next_line_id() == 1
        assert repository.next_line_id() == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_topology(tmp_path / "missing.json")

    @pytest.mark.parametrize(
        "edge",
        [
            {"source": 1, "target": 2, "distance": 0, "duration": 2},
            {"source": 1, "target": 2, "duration": 2},
        ],
    )
    def test_edge_without_positive_distance(self, tmp_path, edge):
        """거리가 0이거나 없는 구간 => InvalidEdgeError"""
        data = {
            "stations": [{"id": 1, "name": "강남역"}, {"id": 2, "name": "역삼역"}],
            "lines": [{"id": 2, "name": "2호선", "edges": [edge]}],
        }
        path = tmp_path / "topology.json"
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")

        with pytest.raises(InvalidEdgeError) as exc_info:
            load_topology(path)

        assert exc_info.value.line_id == 2
