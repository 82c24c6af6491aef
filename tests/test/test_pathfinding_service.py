"""
PathfindingService 테스트
"""

import pytest

from app.core.exceptions import NoPathError, SameStationError, StationNotFoundError
from app.models.domain import Edge, Line, PathMetric, Station
from app.services.pathfinding_service import PathfindingService


class TestPathfindingService:
    """경로 + 요금"""

    @pytest.fixture
    def service(self, map_cache):
        return PathfindingService(map_cache)

    def test_find_path_with_fare(self, service):
        path = service.find_path(1, 4, PathMetric.DISTANCE)

        assert [s.id for s in path.stations] == [1, 2, 3, 4]
        assert path.distance == 15
        assert path.fare == 1250

    def test_duration_metric(self, service):
        path = service.find_path(4, 5, "DURATION")

        assert path.duration == 11
        assert path.transfers == 1

    def test_extra_fare_of_traversed_line(self, topology_repository, map_cache):
        """지나는 노선의 추가 요금 반영"""
        topology_repository.save_line(
            Line(id=2, name="신분당선", edges=(Edge(1, 5, 4, 2),), extra_fare=900)
        )
        map_cache.invalidate()

        service = PathfindingService(map_cache)

        assert service.find_path(1, 4).fare == 1250
        assert service.find_path(4, 5).fare == 1250 + 900

    def test_uses_cached_graph(self, service, map_cache, mocker):
        """경로 조회마다 그래프를 다시 만들지 않음"""
        build_spy = mocker.spy(map_cache.builder, "build")

        service.find_path(1, 4)
        service.find_path(4, 1)

        assert build_spy.call_count == 1

    def test_uses_given_snapshot_graph(self, service, topology_repository, map_cache):
        """호출자가 넘긴 스냅샷 그래프로 계산 (이후 노선 변경과 무관)"""
        graph = map_cache.get_map().graph
        topology_repository.delete_line(2)
        map_cache.invalidate()

        path = service.find_path(4, 5, PathMetric.DISTANCE, graph)

        assert [s.id for s in path.stations] == [4, 3, 2, 1, 5]
        with pytest.raises(StationNotFoundError):
            service.find_path(4, 5)

    def test_errors_propagate(self, service):
        with pytest.raises(SameStationError):
            service.find_path(1, 1)
        with pytest.raises(StationNotFoundError):
            service.find_path(1, 404)

    def test_no_path(self, topology_repository, map_cache):
        topology_repository.save_station(Station(6, "섬역"))
        topology_repository.save_station(Station(7, "등대역"))
        topology_repository.save_line(Line(id=3, name="섬 노선", edges=(Edge(6, 7, 3, 2),)))
        map_cache.invalidate()

        with pytest.raises(NoPathError):
            PathfindingService(map_cache).find_path(1, 7)

    def test_fare_from_settings(self, map_cache, mocker):
        """요금 정책은 설정값 사용"""
        mocker.patch("app.algorithms.fare_calculator.settings.FARE_BASE", 1400)

        service = PathfindingService(map_cache)

        assert service.find_path(1, 5).fare == 1400
