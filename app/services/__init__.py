"""
Services package for business logic.

Service classes orchestrate agent calls, database access and external APIs,
and implement logic that doesn't belong in API endpoints.
"""
from .jlpt_voca_service import JlptVocaService
from .example_sentence_service import ExampleSentenceService
from .auth_service import AuthService
from .profile_service import ProfileService
from .geo_service import GeoService

__all__ = [
    "JlptVocaService",
    "ExampleSentenceService",
    "AuthService",
    "ProfileService",
    "GeoService",
]
