from datetime import time
from typing import Optional
from pydantic import BaseModel, Field

# service별 requests 구조 정의


# 역 생성
class StationCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=50, description="역 이름")


# 노선 생성
class LineCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=50, description="노선 이름")
    color: Optional[str] = Field(default=None, description="노선 색상")
    start_time: Optional[time] = Field(default=None, description="첫차 시각")
    end_time: Optional[time] = Field(default=None, description="막차 시각")
    interval_time: Optional[int] = Field(default=None, ge=1, description="배차 간격 (분)")
    extra_fare: int = Field(default=0, ge=0, description="노선 추가 요금 (원)")


# 노선 수정 => 보낸 필드만 반영
class LineUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    color: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    interval_time: Optional[int] = Field(default=None, ge=1)
    extra_fare: Optional[int] = Field(default=None, ge=0)


# 노선에 구간 등록
class LineEdgeCreateRequest(BaseModel):
    source_station_id: int = Field(..., description="상행 방향 역 id")
    target_station_id: int = Field(..., description="하행 방향 역 id")
    distance: float = Field(..., gt=0, description="구간 거리 (m)")
    duration: float = Field(..., ge=0, description="구간 소요시간 (분)")


# 즐겨찾기 역 등록
class FavoriteStationCreateRequest(BaseModel):
    station_id: int = Field(..., description="역 id")


# 즐겨찾기 경로 등록
class FavoritePathCreateRequest(BaseModel):
    source_station_id: int = Field(..., description="출발역 id")
    target_station_id: int = Field(..., description="도착역 id")
