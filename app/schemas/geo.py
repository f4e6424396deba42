"""
Geo API Pydantic schemas (TMAP geocoding / transit routes).
"""
from pydantic import BaseModel, Field
from typing import Literal, Optional


class TransitRoutesRequest(BaseModel):
    """대중교통 경로 탐색 요청"""
    startX: str = Field(..., min_length=1, description="출발지 경도 (WGS84)", examples=["127.02479803562213"])
    startY: str = Field(..., min_length=1, description="출발지 위도 (WGS84)", examples=["37.504585233865086"])
    endX: str = Field(..., min_length=1, description="도착지 경도 (WGS84)", examples=["127.03747630119366"])
    endY: str = Field(..., min_length=1, description="도착지 위도 (WGS84)", examples=["37.479103923078995"])
    lang: Optional[int] = Field(None, ge=0, le=1, description="언어 (0: 국문, 1: 영문)")
    format: Optional[Literal["json", "xml"]] = Field(None, description="응답 포맷")
    count: Optional[int] = Field(None, ge=1, le=10, description="최대 응답 결과 개수")
    searchDttm: Optional[str] = Field(
        None,
        pattern=r"^\d{12}$",
        description="타임머신 검색 요청 시각 (yyyymmddhhmi)"
    )


class MyBusLocation(BaseModel):
    """AI 위치 로그 payload"""
    lat: Optional[float] = None
    lng: Optional[float] = None
