"""Models package."""
from app.models.jlpt_voca import JlptVoca
from app.models.profile import Profile

__all__ = [
    "JlptVoca",
    "Profile",
]
