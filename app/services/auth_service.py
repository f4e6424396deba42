"""
Auth Service

Supabase Auth (GoTrue) REST API wrapper for sign-up / sign-in / logout.
"""
import json
import logging
from typing import Any, Dict, Optional

import aiohttp

from app.config import settings
from app.core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class AuthService:
    """
    Supabase Auth 연동 서비스

    Args:
        session: 애플리케이션이 소유한 aiohttp 세션
        supabase_url: 기본값 settings.SUPABASE_URL
        anon_key: 기본값 settings.SUPABASE_ANON_KEY
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        supabase_url: Optional[str] = None,
        anon_key: Optional[str] = None
    ):
        self.session = session
        self.base_url = (supabase_url or settings.SUPABASE_URL).rstrip("/") + "/auth/v1"
        self.anon_key = anon_key or settings.SUPABASE_ANON_KEY

    def _headers(self, access_token: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "apikey": self.anon_key,
            "Content-Type": "application/json",
        }
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        json_body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
        access_token: Optional[str] = None
    ) -> Dict[str, Any]:
        try:
            async with self.session.request(
                method,
                f"{self.base_url}{path}",
                json=json_body,
                params=params,
                headers=self._headers(access_token)
            ) as response:
                status = response.status
                text = await response.text()

        except (aiohttp.ClientError, UnicodeDecodeError) as e:
            logger.error(f"Supabase auth HTTP error: {str(e)}")
            raise ExternalServiceError(f"Supabase auth HTTP error: {str(e)}")

        if status == 204:
            return {}

        # 게이트웨이 HTML 오류 페이지 등 JSON 이 아닌 본문
        try:
            body = json.loads(text) if text.strip() else None
        except ValueError:
            logger.error(f"Supabase auth returned a non-JSON body ({status})")
            raise ExternalServiceError(
                f"Supabase auth request failed ({status})" if status >= 400
                else "Supabase auth response could not be parsed",
                status_code=status
            )

        if status >= 400:
            message = "Supabase auth request failed"
            if isinstance(body, dict):
                message = (
                    body.get("msg")
                    or body.get("error_description")
                    or body.get("message")
                    or message
                )
            raise ExternalServiceError(message, status_code=status)

        return body or {}

    async def sign_up(self, email: str, password: str) -> Dict[str, Any]:
        """
        회원가입 (이메일 인증 후 DEPLOY_HOST 로 리다이렉트)

        Raises:
            ExternalServiceError: Supabase 가 오류를 반환했을 때
        """
        data = await self._request(
            "POST",
            "/signup",
            json_body={"email": email, "password": password},
            params={"redirect_to": settings.DEPLOY_HOST}
        )

        # 이메일 확인이 켜져 있으면 user 만, 아니면 session(+user) 이 반환됨
        if "access_token" in data:
            session = data
            user = data.get("user")
        else:
            session = None
            user = data

        logger.info(f"User signed up: {email}")
        return {
            "user": user,
            "session": session,
            "message": "회원가입이 완료되었습니다."
        }

    async def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        """이메일/비밀번호 로그인"""
        session = await self._request(
            "POST",
            "/token",
            json_body={"email": email, "password": password},
            params={"grant_type": "password"}
        )

        return {
            "user": session.get("user"),
            "session": session,
            "access_token": session.get("access_token"),
            "refresh_token": session.get("refresh_token"),
            "message": "로그인이 완료되었습니다."
        }

    async def sign_out(self, access_token: str) -> None:
        """해당 액세스 토큰의 세션 로그아웃"""
        await self._request("POST", "/logout", access_token=access_token)
