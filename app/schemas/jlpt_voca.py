"""
Pydantic schemas for JLPT vocabulary API requests and responses.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from app.schemas.furigana import FuriganaPosition


class JlptVocaItem(BaseModel):
    """단어 한 건"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    word: str
    meaning: Optional[str] = None
    meaning_ko: Optional[str] = None
    level: str


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int
    totalPages: Optional[int] = None


class JlptVocaPage(BaseModel):
    """검색 결과 + 페이지 메타 정보"""
    items: List[JlptVocaItem]
    meta: PageMeta


class LevelTotal(BaseModel):
    level: str
    total: int


class LevelTotalsResponse(BaseModel):
    """레벨별 단어 수와 전체 합계"""
    total: int
    levels: List[LevelTotal]


class GenerateExampleSentenceRequest(BaseModel):
    """예문 생성 요청"""
    word: str = Field(..., min_length=1, max_length=50, description="예문을 생성할 일본어 단어", examples=["学校"])


class GenerateExampleSentenceResponse(BaseModel):
    """예문 + 후리가나 응답"""
    word: str
    sentence: str
    korean_meaning: str
    original_sentence: Optional[str] = None
    furigana_positions: List[FuriganaPosition]
