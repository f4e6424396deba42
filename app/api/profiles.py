"""
Profiles API 엔드포인트
"""
from fastapi import APIRouter, Depends, HTTPException
import logging

from app.auth import get_current_user
from app.core.exceptions import NotFoundError
from app.dependencies import get_profile_service
from app.schemas.profile import ProfileResponse, UpdateProfileRequest
from app.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["Profiles"])
logger = logging.getLogger(__name__)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    user: dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """내 프로필 조회"""
    try:
        return service.get_profile(user["user_id"])
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    payload: UpdateProfileRequest,
    user: dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """내 프로필 생성/수정"""
    try:
        return service.upsert_profile(user["user_id"], payload)
    except Exception as e:
        logger.error(f"Failed to persist profile: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to persist profile.")
