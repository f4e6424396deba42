"""
Profile 관련 SQLAlchemy ORM 모델

Supabase auth.users 의 id를 그대로 기본 키로 사용합니다.
"""
from sqlalchemy import Column, String, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from app.database import Base


class Profile(Base):
    """
    사용자 프로필 모델

    인증 사용자당 하나의 행을 가집니다.
    """
    __tablename__ = "profiles"

    id = Column(UUID(as_uuid=True), primary_key=True)

    username = Column(String(80), nullable=True)
    full_name = Column(String(120), nullable=True)
    avatar_url = Column(String(500), nullable=True)

    # 타임스탬프
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=True)
