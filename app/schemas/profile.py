"""
Profile API Pydantic schemas.
"""
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, HttpUrl
from typing import Optional
from uuid import UUID


class UpdateProfileRequest(BaseModel):
    """프로필 수정 요청 (camelCase)"""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    username: Optional[str] = Field(None, max_length=80)
    full_name: Optional[str] = Field(None, alias="fullName", max_length=120)
    avatar_url: Optional[HttpUrl] = Field(None, alias="avatarUrl")


class ProfileResponse(BaseModel):
    """프로필 응답 (camelCase)"""
    id: UUID
    username: Optional[str] = None
    fullName: Optional[str] = None
    avatarUrl: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
