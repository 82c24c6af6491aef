"""
역 관리 REST API 엔드포인트
"""

from fastapi import APIRouter, Depends, Response, status
from typing import List
import logging

from app.api.deps import get_topology_service
from app.models.requests import StationCreateRequest
from app.models.responses import StationResponse
from app.services.topology_service import TopologyService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=StationResponse, status_code=status.HTTP_201_CREATED)
def create_station(
    request: StationCreateRequest,
    response: Response,
    service: TopologyService = Depends(get_topology_service),
):
    """
    역 생성

    Example:
        POST /v1/stations
        {"name": "강남역"}
    """
    station = service.create_station(request.name)
    response.headers["Location"] = f"/v1/stations/{station.id}"
    return StationResponse.of(station)


@router.get("", response_model=List[StationResponse])
def list_stations(service: TopologyService = Depends(get_topology_service)):
    """전체 역 목록"""
    return [StationResponse.of(station) for station in service.list_stations()]


@router.get("/{station_id}", response_model=StationResponse)
def get_station(station_id: int, service: TopologyService = Depends(get_topology_service)):
    return StationResponse.of(service.get_station(station_id))


@router.delete("/{station_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_station(station_id: int, service: TopologyService = Depends(get_topology_service)):
    """역 삭제 (노선에 등록된 역은 삭제 불가)"""
    service.delete_station(station_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
