"""
Geo API 엔드포인트 (TMAP 프록시)
"""
from fastapi import APIRouter, Depends, HTTPException, Query
import logging

from app.core.exceptions import ExternalServiceError, ServiceNotConfiguredError
from app.dependencies import get_geo_service
from app.schemas.geo import TransitRoutesRequest
from app.services.geo_service import GeoService

router = APIRouter(prefix="/geo", tags=["Geo"])
logger = logging.getLogger(__name__)


@router.get("/coordinates")
async def lookup_coordinates(
    address: str = Query(..., min_length=1, description="도로명 또는 지번 주소"),
    service: GeoService = Depends(get_geo_service)
):
    """
    TMAP 도로명/지번 주소 좌표 조회

    Example:
        >>> GET /api/geo/coordinates?address=서울특별시 성동구 동원북로22번길 8
        >>> Response: {"coordinateInfo": {"coordinate": [{"lat": "37.561", "lon": "127.040"}]}}
    """
    try:
        return await service.lookup_address(address)
    except ServiceNotConfiguredError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except ExternalServiceError as e:
        logger.error(f"Coordinate lookup failed: {e.message}")
        raise HTTPException(status_code=500, detail=e.message)


@router.post("/transit/routes")
async def get_transit_routes(
    request: TransitRoutesRequest,
    service: GeoService = Depends(get_geo_service)
):
    """TMAP Transit Routes API 로 출발지-도착지 대중교통 경로 조회"""
    try:
        return await service.get_transit_routes(request)
    except ServiceNotConfiguredError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except ExternalServiceError as e:
        logger.error(f"Transit routes lookup failed: {e.message}")
        raise HTTPException(status_code=500, detail=e.message)
