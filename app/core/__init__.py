"""
Core utilities for the backend.
Provides client factories for OpenAI / aiohttp and shared exception types.
"""
from .openai_client import create_openai_client
from .http_client import create_http_session, close_http_session

__all__ = [
    "create_openai_client",
    "create_http_session",
    "close_http_session",
]
