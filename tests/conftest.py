"""
Test configuration.

Environment variables must be set before app.config is imported.
"""
import json
import os
import time
import uuid

import pytest
from jose import jwt

os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-supabase-jwt-secret-for-unit-tests")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["OPENAI_API_KEY"] = ""
os.environ["TMAP_APP_KEY"] = ""


TEST_USER_ID = uuid.UUID("2f1b6f0e-4b7a-4c35-9a0a-5d6f1c2e3b4a")


def make_token(sub=str(TEST_USER_ID), audience="authenticated", expires_in=3600, secret=None, **claims):
    payload = {
        "sub": sub,
        "aud": audience,
        "exp": int(time.time()) + expires_in,
        "email": "user@example.com",
        "role": "authenticated",
        **claims,
    }
    return jwt.encode(payload, secret or os.environ["SUPABASE_JWT_SECRET"], algorithm="HS256")


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token()}"}


class FakeResponse:
    """aiohttp 응답 흉내 (async context manager)"""

    def __init__(self, status=200, body=None):
        self.status = status
        self.body = body

    async def text(self):
        return self.body if isinstance(self.body, str) else json.dumps(self.body)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


class FakeSession:
    """aiohttp.ClientSession 의 request/get/post 만 흉내냅니다."""

    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error:
            raise self.error
        return self.response

    def get(self, url, **kwargs):
        return self.request("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self.request("POST", url, **kwargs)
