"""
Auth API 엔드포인트

Supabase Auth 회원가입 / 로그인 / 로그아웃 / 현재 사용자 조회.
"""
from fastapi import APIRouter, Depends, HTTPException
import logging

from app.auth import get_current_user
from app.core.exceptions import ExternalServiceError
from app.dependencies import get_auth_service
from app.schemas.auth import (
    MeResponse,
    MessageResponse,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    SignUpResponse,
)
from app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger(__name__)


@router.post("/sign-up", response_model=SignUpResponse)
async def sign_up(request: SignUpRequest, service: AuthService = Depends(get_auth_service)):
    """회원가입"""
    try:
        return await service.sign_up(request.email, request.password)
    except ExternalServiceError as e:
        logger.warning(f"Sign-up failed: {e.message}")
        raise HTTPException(status_code=400, detail=e.message)


@router.post("/sign-in", response_model=SignInResponse)
async def sign_in(request: SignInRequest, service: AuthService = Depends(get_auth_service)):
    """이메일/비밀번호 로그인"""
    try:
        return await service.sign_in(request.email, request.password)
    except ExternalServiceError as e:
        logger.warning(f"Sign-in failed: {e.message}")
        raise HTTPException(status_code=401, detail=e.message)


@router.get("/me", response_model=MeResponse)
async def get_me(user: dict = Depends(get_current_user)):
    """현재 사용자 정보"""
    return {
        "user": {
            "id": str(user["user_id"]),
            "email": user.get("email"),
            "role": user.get("role"),
        },
        "message": "현재 사용자 정보를 조회했습니다."
    }


@router.post("/logout", response_model=MessageResponse)
async def logout(
    user: dict = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service)
):
    """현재 세션 로그아웃"""
    try:
        await service.sign_out(user["access_token"])
    except ExternalServiceError as e:
        logger.error(f"Logout failed for {user['user_id']}: {e.message}")
        raise HTTPException(status_code=400, detail=f"로그아웃 오류: {e.message}")

    return {"message": "로그아웃이 완료되었습니다."}
