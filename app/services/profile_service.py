"""
Profile Service

사용자 프로필 조회 / upsert.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.models.profile import Profile
from app.schemas.profile import UpdateProfileRequest

logger = logging.getLogger(__name__)


class ProfileService:

    def __init__(self, db: Session):
        self.db = db

    def get_profile(self, user_id: UUID) -> Dict[str, Any]:
        profile = self.db.get(Profile, user_id)
        if profile is None:
            raise NotFoundError("Profile not found.")
        return self._map_profile(profile)

    def upsert_profile(self, user_id: UUID, payload: UpdateProfileRequest) -> Dict[str, Any]:
        """
        프로필을 생성하거나 갱신합니다.

        지정되지 않은 필드는 null 로 저장됩니다.
        """
        profile = self.db.get(Profile, user_id)
        if profile is None:
            profile = Profile(id=user_id)
            self.db.add(profile)

        profile.username = payload.username
        profile.full_name = payload.full_name
        profile.avatar_url = str(payload.avatar_url) if payload.avatar_url else None
        profile.updated_at = datetime.now(timezone.utc)

        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(profile)

        logger.info(f"Profile upserted: {user_id}")
        return self._map_profile(profile)

    @staticmethod
    def _map_profile(profile: Profile) -> Dict[str, Any]:
        return {
            "id": profile.id,
            "username": profile.username,
            "fullName": profile.full_name,
            "avatarUrl": profile.avatar_url,
            "createdAt": profile.created_at,
            "updatedAt": profile.updated_at,
        }
