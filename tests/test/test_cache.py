"""
노선도 캐시 (MapCache) 테스트
"""

import threading

import pytest

from app.core.exceptions import MalformedLineError
from app.db import cache as cache_module
from app.db.cache import (
    compute_fingerprint,
    get_map_cache,
    init_map_cache,
    reset_map_cache,
)
from app.models.domain import Edge, Line


class TestMapCache:
    """스냅샷 빌드 / 재사용 / 무효화"""

    def test_build_once_and_invalidate(self, map_cache, topology_repository):
        """변경 없으면 같은 fingerprint, 노선 추가 + 무효화 후 새 fingerprint"""
        first = map_cache.get_map()
        second = map_cache.get_map()

        assert first.fingerprint == second.fingerprint
        assert [view.line.id for view in first.lines] == [1, 2]

        topology_repository.save_line(
            Line(id=3, name="3호선", edges=(Edge(3, 5, 7, 4),))
        )
        map_cache.invalidate()
        third = map_cache.get_map()

        assert third.fingerprint != first.fingerprint
        assert [view.line.id for view in third.lines] == [1, 2, 3]

    def test_same_snapshot_object(self, map_cache):
        """변경 없으면 같은 스냅샷 객체 재사용"""
        assert map_cache.get_map() is map_cache.get_map()

    def test_no_rebuild_without_invalidate(self, map_cache, topology_repository, mocker):
        """무효화 전에는 저장소 변경이 반영되지 않음 (만료/폴링 없음)"""
        build_spy = mocker.spy(map_cache.builder, "build")
        snapshot = map_cache.get_map()

        topology_repository.save_line(Line(id=9, name="9호선", edges=(Edge(2, 5, 3, 2),)))

        assert map_cache.get_map() is snapshot
        assert build_spy.call_count == 1

    def test_line_station_order(self, map_cache):
        """노선별 역은 구간 순서대로, 첫 역은 이전 역 없음"""
        snapshot = map_cache.get_map()
        line_view = snapshot.lines[0]

        assert [s.station.id for s in line_view.stations] == [1, 2, 3, 4]
        assert line_view.stations[0].pre_station_id is None
        assert line_view.stations[0].distance == 0
        assert line_view.stations[2].pre_station_id == 2
        assert line_view.stations[2].distance == 5

    def test_snapshot_contains_graph(self, map_cache):
        """경로 탐색용 그래프도 스냅샷과 함께 빌드"""
        snapshot = map_cache.get_map()

        assert snapshot.graph.station_count == 5
        assert snapshot.built_at is not None

    def test_failed_rebuild_keeps_previous_snapshot(self, map_cache, topology_repository):
        """재빌드 실패 시 예외 전파, 기존 스냅샷 유지"""
        snapshot = map_cache.get_map()

        topology_repository.save_line(
            Line(id=4, name="고장 노선", edges=(Edge(1, 2, 5, 3), Edge(3, 4, 5, 3)))
        )
        map_cache.invalidate()

        with pytest.raises(MalformedLineError):
            map_cache.get_map()

        assert map_cache.peek() is snapshot
        assert map_cache.is_stale

    def test_peek_without_build(self, map_cache):
        assert map_cache.peek() is None
        assert map_cache.is_stale

    def test_concurrent_readers_build_once(self, map_cache, mocker):
        """동시 조회 시 빌드는 한 번, 모두 같은 스냅샷"""
        build_spy = mocker.spy(map_cache.builder, "build")
        barrier = threading.Barrier(8)
        results = []

        def reader():
            barrier.wait()
            results.append(map_cache.get_map())

        threads = [threading.Thread(target=reader) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert build_spy.call_count == 1
        assert all(snapshot is results[0] for snapshot in results)

    def test_build_metrics_logged(self, map_cache, mocker, caplog):
        """METRICS 로그 출력"""
        mocker.patch("app.db.cache.settings.ENABLE_CACHE_METRICS", True)

        with caplog.at_level("INFO", logger="app.db.cache"):
            map_cache.get_map()

        assert any("METRICS:" in record.getMessage() for record in caplog.records)


class TestFingerprint:
    """노선도 해시"""

    def test_independent_of_line_order(self, sample_lines, sample_stations):
        forward = compute_fingerprint(sample_lines, sample_stations)
        backward = compute_fingerprint(list(reversed(sample_lines)), sample_stations)

        assert forward == backward

    def test_edge_change_changes_fingerprint(self, line_1, line_2, sample_stations):
        longer = Line(
            id=2, name="2호선", color="GREEN", edges=(Edge(1, 5, 6, 2),)
        )

        before = compute_fingerprint([line_1, line_2], sample_stations)
        after = compute_fingerprint([line_1, longer], sample_stations)

        assert before != after

    def test_unreferenced_station_ignored(self, sample_lines, sample_stations):
        """노선에 없는 역 추가는 노선도 내용에 영향 없음"""
        from app.models.domain import Station

        before = compute_fingerprint(sample_lines, sample_stations)
        after = compute_fingerprint(sample_lines, sample_stations + [Station(77, "신설역")])

        assert before == after

    def test_station_rename_changes_fingerprint(self, sample_lines, sample_stations):
        from app.models.domain import Station

        renamed = [Station(s.id, "서울역(신)" if s.id == 1 else s.name) for s in sample_stations]

        assert compute_fingerprint(sample_lines, sample_stations) != compute_fingerprint(
            sample_lines, renamed
        )


class TestMapCacheSingleton:
    """모듈 단위 캐시 인스턴스"""

    def test_init_and_get(self, topology_repository):
        created = init_map_cache(topology_repository)
        try:
            assert get_map_cache() is created
        finally:
            reset_map_cache()

    def test_get_before_init(self):
        reset_map_cache()

        with pytest.raises(RuntimeError):
            get_map_cache()

        assert cache_module._map_cache is None

    def test_writing_blocks_rebuild(self, map_cache):
        """쓰기 구간 동안 다른 스레드의 재빌드는 대기"""
        built = threading.Event()

        def reader():
            map_cache.get_map()
            built.set()

        with map_cache.writing():
            worker = threading.Thread(target=reader)
            worker.start()
            assert not built.wait(timeout=0.2)
            map_cache.invalidate()

        worker.join()
        assert built.is_set()
