"""
FastAPI dependencies for process-owned clients and services.

Clients are created in the startup hook (app.main) and stored on app.state.
"""
from typing import Optional

import aiohttp
from fastapi import Depends, Request
from openai import AsyncOpenAI
from sqlalchemy.orm import Session

from app.database import get_db
from app.services.auth_service import AuthService
from app.services.example_sentence_service import ExampleSentenceService
from app.services.geo_service import GeoService
from app.services.jlpt_voca_service import JlptVocaService
from app.services.profile_service import ProfileService


def get_openai(request: Request) -> Optional[AsyncOpenAI]:
    return getattr(request.app.state, "openai_client", None)


def get_http_session(request: Request) -> aiohttp.ClientSession:
    return request.app.state.http_session


def get_jlpt_voca_service(db: Session = Depends(get_db)) -> JlptVocaService:
    return JlptVocaService(db)


def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    return ProfileService(db)


def get_example_sentence_service(
    client: Optional[AsyncOpenAI] = Depends(get_openai)
) -> ExampleSentenceService:
    return ExampleSentenceService.from_client(client)


def get_auth_service(session: aiohttp.ClientSession = Depends(get_http_session)) -> AuthService:
    return AuthService(session)


def get_geo_service(session: aiohttp.ClientSession = Depends(get_http_session)) -> GeoService:
    return GeoService(session)
