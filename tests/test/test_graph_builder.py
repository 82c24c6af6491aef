"""
GraphBuilder 테스트
"""

import pytest

from app.algorithms.graph_builder import GraphBuilder
from app.core.exceptions import MalformedLineError, UnknownStationError
from app.models.domain import Edge, Line, Station


class TestGraphBuilder:
    """노선 → 그래프 병합 테스트"""

    @pytest.fixture
    def builder(self):
        return GraphBuilder()

    def test_build_sample_network(self, builder, sample_lines, sample_stations):
        """모든 노선의 역이 그래프에 포함"""
        graph = builder.build(sample_lines, sample_stations)

        assert graph.station_count == 5
        for station_id in range(1, 6):
            assert graph.has_station(station_id)

    def test_connections_are_bidirectional(self, builder, sample_lines, sample_stations):
        """구간은 양방향 연결"""
        graph = builder.build(sample_lines, sample_stations)

        forward = [c.target_id for c in graph.connections(1)]
        backward = [c.target_id for c in graph.connections(2)]

        assert 2 in forward
        assert 1 in backward
        # 구간 4개 * 양방향
        assert graph.connection_count == 8

    def test_station_without_line_excluded(self, builder, sample_lines, sample_stations):
        """노선에 등록되지 않은 역은 그래프에 없음"""
        stations = sample_stations + [Station(99, "미개통역")]

        graph = builder.build(sample_lines, stations)

        assert not graph.has_station(99)

    def test_transfer_station_lines(self, builder, sample_lines, sample_stations):
        """환승역은 경유 노선이 여러 개"""
        graph = builder.build(sample_lines, sample_stations)

        assert [line.id for line in graph.lines_of(1)] == [1, 2]
        assert [line.id for line in graph.lines_of(3)] == [1]

    def test_parallel_edges_kept(self, builder, sample_stations, line_1):
        """다른 노선이 같은 역 쌍을 연결하면 각각 유지"""
        express = Line(id=3, name="급행", edges=(Edge(1, 2, 4, 2),))

        graph = builder.build([line_1, express], sample_stations)

        to_two = [c for c in graph.connections(1) if c.target_id == 2]
        assert sorted(c.line_id for c in to_two) == [1, 3]

    def test_empty_line_allowed(self, builder, sample_stations, line_1):
        """구간 없는 노선은 그래프에 영향 없음"""
        empty = Line(id=7, name="신규 노선")

        graph = builder.build([line_1, empty], sample_stations)

        assert graph.station_count == 4
        assert graph.get_line(7) is empty

    def test_build_is_deterministic(self, builder, sample_lines, sample_stations):
        """같은 입력 => 같은 연결 순서"""
        first = builder.build(sample_lines, sample_stations)
        second = builder.build(sample_lines, sample_stations)

        for station_id in range(1, 6):
            assert first.connections(station_id) == second.connections(station_id)


class TestGraphBuilderValidation:
    """잘못된 노선 검증 테스트"""

    def test_unknown_station(self, sample_stations):
        """카탈로그에 없는 역 참조"""
        line = Line(id=1, name="1호선", edges=(Edge(1, 42, 5, 3),))

        with pytest.raises(UnknownStationError) as exc_info:
            GraphBuilder().build([line], sample_stations)

        assert exc_info.value.station_id == 42
        assert exc_info.value.line_id == 1
        assert exc_info.value.code == "UNKNOWN_STATION"

    def test_disconnected_edges(self, sample_stations):
        """이어지지 않는 구간"""
        line = Line(id=1, name="1호선", edges=(Edge(1, 2, 5, 3), Edge(3, 4, 5, 3)))

        with pytest.raises(MalformedLineError) as exc_info:
            GraphBuilder().build([line], sample_stations)

        assert exc_info.value.line_id == 1

    def test_repeated_station(self, sample_stations):
        """순환 노선 (같은 역 두 번 등장)"""
        line = Line(
            id=1,
            name="순환",
            edges=(Edge(1, 2, 5, 3), Edge(2, 3, 5, 3), Edge(3, 1, 5, 3)),
        )

        with pytest.raises(MalformedLineError):
            GraphBuilder().build([line], sample_stations)

    def test_negative_edge_rejected(self):
        """음수 거리 구간은 생성 불가"""
        with pytest.raises(ValueError):
            Edge(1, 2, -1, 3)

    def test_zero_distance_edge_rejected(self):
        with pytest.raises(ValueError):
            Edge(1, 2, 0, 3)
