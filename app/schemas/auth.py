"""
Auth API Pydantic schemas.
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional


class SignUpRequest(BaseModel):
    """회원가입 요청"""
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(..., min_length=6, max_length=72)


class SignInRequest(BaseModel):
    """로그인 요청"""
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)


class SignUpResponse(BaseModel):
    user: Optional[Dict[str, Any]] = None
    session: Optional[Dict[str, Any]] = None
    message: str


class SignInResponse(BaseModel):
    user: Optional[Dict[str, Any]] = None
    session: Optional[Dict[str, Any]] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    message: str


class MeResponse(BaseModel):
    user: Dict[str, Any]
    message: str


class MessageResponse(BaseModel):
    message: str
