"""
SQLAlchemy ORM model for JLPT vocabulary.
"""
from sqlalchemy import Column, Integer, String, Text
from app.database import Base


class JlptVoca(Base):
    """JLPT 단어 모델 (Supabase 테이블 DD_JLPT_VOCA)"""
    __tablename__ = "DD_JLPT_VOCA"

    id = Column(Integer, primary_key=True)
    word = Column(String(100), nullable=False, index=True)
    meaning = Column(Text, nullable=True)
    meaning_ko = Column(Text, nullable=True)
    level = Column(String(10), nullable=False, index=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "word": self.word,
            "meaning": self.meaning,
            "meaning_ko": self.meaning_ko,
            "level": self.level,
        }
