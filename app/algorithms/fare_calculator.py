import math
from dataclasses import dataclass
from typing import Iterable

from app.core.config import settings
from app.core.exceptions import InvalidDistanceError
from app.models.domain import Line


@dataclass(frozen=True)
class FareSchedule:
    """구간별 요금 정책 (거리: m, 금액: 원)"""

    base_fare: int = 1250
    base_distance: float = 10000  # 기본 운임 구간
    first_step_distance: float = 5000
    first_step_fare: int = 100
    second_threshold: float = 50000  # 이후 구간은 더 긴 단위로 가산
    second_step_distance: float = 8000
    second_step_fare: int = 100

    @classmethod
    def from_settings(cls) -> "FareSchedule":
        return cls(
            base_fare=settings.FARE_BASE,
            base_distance=settings.FARE_BASE_DISTANCE,
            first_step_distance=settings.FARE_FIRST_STEP_DISTANCE,
            first_step_fare=settings.FARE_FIRST_STEP_AMOUNT,
            second_threshold=settings.FARE_SECOND_THRESHOLD,
            second_step_distance=settings.FARE_SECOND_STEP_DISTANCE,
            second_step_fare=settings.FARE_SECOND_STEP_AMOUNT,
        )


class FareCalculator:
    def __init__(self, schedule: FareSchedule = None):
        self.schedule = schedule or FareSchedule()

    def fare(self, total_distance: float, lines: Iterable[Line] = ()) -> int:
        """
        총 거리 기반 요금 + 지나는 노선 중 가장 비싼 추가 요금

        Raises:
            InvalidDistanceError: 거리 <= 0
        """
        if total_distance is None or total_distance <= 0:
            raise InvalidDistanceError(total_distance)

        schedule = self.schedule
        fare = schedule.base_fare

        if total_distance > schedule.base_distance:
            first_zone = (
                min(total_distance, schedule.second_threshold) - schedule.base_distance
            )
            fare += (
                math.ceil(first_zone / schedule.first_step_distance)
                * schedule.first_step_fare
            )

        if total_distance > schedule.second_threshold:
            second_zone = total_distance - schedule.second_threshold
            fare += (
                math.ceil(second_zone / schedule.second_step_distance)
                * schedule.second_step_fare
            )

        return fare + max((line.extra_fare for line in lines), default=0)
