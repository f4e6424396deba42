"""
AI device endpoints.
"""
from fastapi import APIRouter, Body, HTTPException, Query
from typing import Optional
import logging

from app.schemas.geo import MyBusLocation

router = APIRouter(prefix="/ai", tags=["AI"])
logger = logging.getLogger(__name__)


def _coerce_coordinate(body_value: Optional[float], query_value: Optional[str], name: str) -> float:
    value = body_value
    if value is None and query_value is not None:
        try:
            value = float(query_value)
        except ValueError:
            value = None

    if value is None or value != value:  # NaN
        raise HTTPException(status_code=400, detail=f"{name} is required and must be a number")
    return value


@router.post("/my-bus")
async def log_my_bus_location(
    payload: Optional[MyBusLocation] = Body(None),
    lat: Optional[str] = Query(None),
    lng: Optional[str] = Query(None)
):
    """버스 위치 좌표 수신 (body 또는 query)"""
    lat_value = _coerce_coordinate(payload.lat if payload else None, lat, "lat")
    lng_value = _coerce_coordinate(payload.lng if payload else None, lng, "lng")

    logger.info(f"Received /ai/my-bus coordinates lat={lat_value}, lng={lng_value}")

    return {"status": "received"}
