"""
노선/구간 관리 REST API 엔드포인트
변경 시 노선도 캐시는 TopologyService가 무효화
"""

from fastapi import APIRouter, Depends, Response, status
from typing import List
import logging

from app.api.deps import get_topology_service
from app.models.requests import LineCreateRequest, LineEdgeCreateRequest, LineUpdateRequest
from app.models.responses import LineResponse
from app.services.topology_service import TopologyService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=LineResponse, status_code=status.HTTP_201_CREATED)
def create_line(
    request: LineCreateRequest,
    response: Response,
    service: TopologyService = Depends(get_topology_service),
):
    """
    노선 생성 (구간 없이 생성, 이후 /lines/{id}/edges로 구간 등록)

    Example:
        POST /v1/lines
        {"name": "2호선", "color": "GREEN", "start_time": "05:30", "end_time": "23:30", "interval_time": 10}
    """
    line = service.create_line(**request.model_dump())
    response.headers["Location"] = f"/v1/lines/{line.id}"
    return LineResponse.of(line)


@router.get("", response_model=List[LineResponse])
def list_lines(service: TopologyService = Depends(get_topology_service)):
    return [LineResponse.of(line) for line in service.list_lines()]


@router.get("/{line_id}", response_model=LineResponse)
def get_line(line_id: int, service: TopologyService = Depends(get_topology_service)):
    return LineResponse.of(service.get_line(line_id))


@router.put("/{line_id}", response_model=LineResponse)
def update_line(
    line_id: int,
    request: LineUpdateRequest,
    service: TopologyService = Depends(get_topology_service),
):
    """보낸 필드만 수정"""
    changes = request.model_dump(exclude_unset=True)
    return LineResponse.of(service.update_line(line_id, **changes))


@router.delete("/{line_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_line(line_id: int, service: TopologyService = Depends(get_topology_service)):
    service.delete_line(line_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{line_id}/edges",
    response_model=LineResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_line_edge(
    line_id: int,
    request: LineEdgeCreateRequest,
    service: TopologyService = Depends(get_topology_service),
):
    """
    노선에 구간 등록 (하행 종점 뒤 또는 상행 종점 앞)

    Example:
        POST /v1/lines/1/edges
        {"source_station_id": 1, "target_station_id": 2, "distance": 1000, "duration": 2}
    """
    line = service.add_line_edge(
        line_id,
        request.source_station_id,
        request.target_station_id,
        request.distance,
        request.duration,
    )
    return LineResponse.of(line)


@router.delete(
    "/{line_id}/stations/{station_id}", status_code=status.HTTP_204_NO_CONTENT
)
def remove_line_station(
    line_id: int,
    station_id: int,
    service: TopologyService = Depends(get_topology_service),
):
    """노선에서 역 제외 (중간역이면 앞뒤 구간 병합)"""
    service.remove_line_station(line_id, station_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
