"""
Geo Service

TMAP (SK open API) 주소 좌표 조회 / 대중교통 경로 탐색 프록시.
"""
import json
import logging
from typing import Any, Dict, Optional

import aiohttp

from app.config import settings
from app.core.exceptions import ExternalServiceError, ServiceNotConfiguredError
from app.schemas.geo import TransitRoutesRequest

logger = logging.getLogger(__name__)

FULL_ADDR_GEO_URL = "https://apis.openapi.sk.com/tmap/geo/fullAddrGeo"
TRANSIT_ROUTES_URL = "https://apis.openapi.sk.com/transit/routes"


def extract_jsonp_payload(payload: str) -> str:
    """
    'result({...});' 형태의 JSONP 응답에서 JSON 본문만 추출합니다.
    JSONP 가 아니면 그대로 반환합니다.
    """
    trimmed = payload.strip()
    if not trimmed.startswith("result("):
        return trimmed

    without_prefix = trimmed[len("result("):]
    if without_prefix.endswith(");"):
        return without_prefix[:-2]
    if without_prefix.endswith(")"):
        return without_prefix[:-1]
    return without_prefix


class GeoService:
    """
    TMAP API 프록시

    Args:
        session: 애플리케이션이 소유한 aiohttp 세션
        app_key: 기본값 settings.TMAP_APP_KEY
    """

    def __init__(self, session: aiohttp.ClientSession, app_key: Optional[str] = None):
        self.session = session
        self.app_key = app_key if app_key is not None else settings.TMAP_APP_KEY

    def _require_app_key(self) -> str:
        app_key = (self.app_key or "").strip()
        if not app_key or app_key in ("undefined", "null"):
            raise ServiceNotConfiguredError("TMAP_APP_KEY 환경변수가 설정되지 않았습니다.")
        return app_key

    async def lookup_address(self, address: str) -> Dict[str, Any]:
        """
        도로명/지번 주소의 좌표 조회 (fullAddrGeo, WGS84GEO)

        Raises:
            ServiceNotConfiguredError: TMAP_APP_KEY 미설정
            ExternalServiceError: 네트워크 오류, 비정상 응답, 파싱 실패
        """
        app_key = self._require_app_key()

        params = {
            "version": "1",
            "format": "json",
            "coordType": "WGS84GEO",
            "fullAddr": address.strip(),
            "callback": "result",
        }

        try:
            async with self.session.get(
                FULL_ADDR_GEO_URL,
                params=params,
                headers={"appKey": app_key}
            ) as response:
                body = await response.text()
                status = response.status
        except aiohttp.ClientError as e:
            logger.error(f"TMAP geocoding request failed: {str(e)}")
            raise ExternalServiceError("TMAP API 요청 중 네트워크 오류가 발생했습니다.")

        if status >= 400:
            raise ExternalServiceError(f"TMAP API 오류 ({status}): {body}", status_code=status)

        try:
            return json.loads(extract_jsonp_payload(body))
        except json.JSONDecodeError:
            raise ExternalServiceError("TMAP API 응답을 파싱할 수 없습니다.")

    async def get_transit_routes(self, request: TransitRoutesRequest) -> Any:
        """
        출발지-도착지 대중교통 경로 탐색

        format=xml 이면 응답 본문 문자열을 그대로 반환합니다.
        """
        app_key = self._require_app_key()
        body = request.model_dump(exclude_none=True)

        try:
            async with self.session.post(
                TRANSIT_ROUTES_URL,
                json=body,
                headers={
                    "appKey": app_key,
                    "accept": "application/json",
                    "content-type": "application/json",
                }
            ) as response:
                text = await response.text()
                status = response.status
        except aiohttp.ClientError as e:
            logger.error(f"TMAP transit request failed: {str(e)}")
            raise ExternalServiceError("TMAP API 요청 중 네트워크 오류가 발생했습니다.")

        if status >= 400:
            raise ExternalServiceError(f"TMAP API 오류 ({status}): {text}", status_code=status)

        if request.format == "xml":
            return text

        try:
            return json.loads(text)
        except json.JSONDecodeError:
            raise ExternalServiceError("TMAP API 응답을 파싱할 수 없습니다.")
