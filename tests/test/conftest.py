"""
Pytest 설정 및 공통 Fixture
"""

import os
import pytest
import sys
from pathlib import Path
from unittest.mock import MagicMock

# 테스트 모드 환경 변수 설정 (모듈 임포트 전에 설정해야 함)
os.environ['TESTING'] = 'true'
os.environ.setdefault('FAVORITE_STORE', 'memory')
os.environ.setdefault('ENABLE_CACHE_METRICS', 'false')

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from app.algorithms.graph_builder import GraphBuilder
from app.db.cache import MapCache
from app.db.favorite_store import InMemoryFavoriteStore
from app.db.repository import InMemoryTopologyRepository
from app.models.domain import Edge, Line, Station


# ============================================================
# 노선도 Fixtures
# ============================================================
# 1호선: 서울역(1) - 시청(2) - 종각(3) - 종로3가(4), 구간 거리 5 / 시간 3
# 2호선: 서울역(1) - 충정로(5), 거리 4 / 시간 2


@pytest.fixture
def sample_stations():
    """테스트용 샘플 역"""
    return [
        Station(1, "서울역"),
        Station(2, "시청역"),
        Station(3, "종각역"),
        Station(4, "종로3가역"),
        Station(5, "충정로역"),
    ]


@pytest.fixture
def line_1():
    return Line(
        id=1,
        name="1호선",
        color="BLUE",
        edges=(
            Edge(1, 2, 5, 3),
            Edge(2, 3, 5, 3),
            Edge(3, 4, 5, 3),
        ),
    )


@pytest.fixture
def line_2():
    return Line(id=2, name="2호선", color="GREEN", edges=(Edge(1, 5, 4, 2),))


@pytest.fixture
def sample_lines(line_1, line_2):
    return [line_1, line_2]


@pytest.fixture
def sample_graph(sample_lines, sample_stations):
    """샘플 노선으로 빌드한 그래프"""
    return GraphBuilder().build(sample_lines, sample_stations)


@pytest.fixture
def topology_repository(sample_lines, sample_stations):
    """샘플 노선도가 채워진 메모리 저장소"""
    repository = InMemoryTopologyRepository()
    for station in sample_stations:
        repository.save_station(station)
    for line in sample_lines:
        repository.save_line(line)
    return repository


@pytest.fixture
def map_cache(topology_repository):
    return MapCache(topology_repository)


# ============================================================
# 저장소 Fixtures
# ============================================================


@pytest.fixture
def mock_redis_client():
    """Mock Redis 클라이언트"""
    mock = MagicMock()
    mock.incr.return_value = 1
    mock.hset.return_value = 1
    mock.hgetall.return_value = {}
    mock.hdel.return_value = 1
    return mock


@pytest.fixture
def favorite_store():
    return InMemoryFavoriteStore()


# ============================================================
# 서비스 / API Fixtures
# ============================================================


@pytest.fixture
def services(topology_repository, favorite_store):
    """샘플 노선도로 초기화한 서비스 묶음 (테스트 종료 시 해제)"""
    from app.services.registry import init_services, reset_services

    registry = init_services(
        repository=topology_repository, favorite_store=favorite_store
    )
    yield registry
    reset_services()


@pytest.fixture
def client(services):
    """
    TestClient (lifespan 미실행)
    => 서비스는 services fixture가 샘플 노선도로 초기화
    """
    from fastapi.testclient import TestClient
    from app.main import app

    return TestClient(app)


# ============================================================
# 인증 관련 Fixtures
# ============================================================


@pytest.fixture
def sample_user():
    """테스트용 샘플 사용자"""
    from app.models.domain import User

    return User(user_id="user-1234")


@pytest.fixture
def access_token(sample_user):
    from app.auth.security import create_access_token

    return create_access_token(subject=sample_user.user_id)


@pytest.fixture
def auth_headers(access_token):
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def other_auth_headers():
    """다른 사용자 토큰"""
    from app.auth.security import create_access_token

    return {"Authorization": f"Bearer {create_access_token(subject='user-5678')}"}
