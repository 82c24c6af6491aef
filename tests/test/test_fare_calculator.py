"""
FareCalculator 테스트
"""

import pytest

from app.algorithms.fare_calculator import FareCalculator, FareSchedule
from app.core.exceptions import InvalidDistanceError
from app.models.domain import Line


class TestFareCalculator:
    """거리 구간별 요금"""

    @pytest.fixture
    def calculator(self):
        return FareCalculator()

    @pytest.mark.parametrize(
        "distance, expected",
        [
            (1, 1250),
            (10000, 1250),  # 기본 운임 구간 끝
            (10001, 1350),
            (15000, 1350),
            (15001, 1450),
            (50000, 2050),  # 1250 + 8 * 100
            (50001, 2150),
            (58000, 2150),
            (58001, 2250),
        ],
    )
    def test_fare_by_distance(self, calculator, distance, expected):
        assert calculator.fare(distance) == expected

    def test_fare_monotonic(self, calculator):
        """거리가 늘면 요금은 줄지 않음"""
        previous = 0
        for distance in range(500, 80000, 500):
            fare = calculator.fare(distance)
            assert fare >= previous
            previous = fare

    @pytest.mark.parametrize("distance", [0, -1, None])
    def test_invalid_distance(self, calculator, distance):
        with pytest.raises(InvalidDistanceError) as exc_info:
            calculator.fare(distance)

        assert exc_info.value.code == "INVALID_DISTANCE"

    def test_line_extra_fare(self, calculator):
        """지나는 노선 중 가장 비싼 추가 요금만 가산"""
        lines = [
            Line(id=1, name="1호선", extra_fare=0),
            Line(id=2, name="신분당선", extra_fare=900),
            Line(id=3, name="공항철도", extra_fare=500),
        ]

        assert calculator.fare(10000, lines) == 1250 + 900

    def test_custom_schedule(self):
        """요금 정책 변경"""
        calculator = FareCalculator(FareSchedule(base_fare=1400))

        assert calculator.fare(10000) == 1400
        assert calculator.fare(10001) == 1500

    def test_schedule_from_settings(self, mocker):
        """설정값으로 요금 정책 생성"""
        mocker.patch("app.algorithms.fare_calculator.settings.FARE_BASE", 1500)

        schedule = FareSchedule.from_settings()

        assert schedule.base_fare == 1500
        assert schedule.base_distance == 10000
