"""
JLPT Vocabulary Service

단어 검색, 레벨별 집계, 랜덤 조회 비즈니스 로직.
"""
import logging
import math
import random
from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.models.jlpt_voca import JlptVoca

logger = logging.getLogger(__name__)

DEFAULT_PAGE_LIMIT = 50
MAX_PAGE_LIMIT = 200
MAX_RANDOM_COUNT = 50


class JlptVocaService:
    """
    DD_JLPT_VOCA 테이블 조회 서비스

    Args:
        db: 요청 단위 SQLAlchemy 세션
    """

    def __init__(self, db: Session):
        self.db = db

    def search(
        self,
        level: Optional[str] = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_LIMIT,
        search: Optional[str] = None,
        word: Optional[str] = None,
        meaning: Optional[str] = None,
        meaning_ko: Optional[str] = None,
        only_meta: bool = False
    ) -> Dict[str, Any]:
        """
        레벨 필터 + 검색 조건으로 단어 목록을 페이지 단위로 조회합니다.

        search 가 있으면 word / meaning / meaning_ko 를 OR 로 검색하고 word 순으로 정렬합니다.
        없으면 word, meaning, meaning_ko 중 처음 지정된 하나만 적용합니다.

        Returns:
            {"items": [...], "meta": {"total", "page", "limit", "totalPages"}}
        """
        limit = min(limit, MAX_PAGE_LIMIT)
        offset = (page - 1) * limit

        query = self.db.query(JlptVoca)

        if level:
            query = query.filter(JlptVoca.level == level)

        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                JlptVoca.word.ilike(pattern),
                JlptVoca.meaning.ilike(pattern),
                JlptVoca.meaning_ko.ilike(pattern)
            )).order_by(JlptVoca.word.asc())
        elif word:
            query = query.filter(JlptVoca.word.ilike(f"%{word}%"))
        elif meaning:
            query = query.filter(JlptVoca.meaning.ilike(f"%{meaning}%"))
        elif meaning_ko:
            query = query.filter(JlptVoca.meaning_ko.ilike(f"%{meaning_ko}%"))

        total = query.count()

        items: List[Dict[str, Any]] = []
        if not only_meta:
            if not search:
                query = query.order_by(JlptVoca.id.asc())
            items = [row.to_dict() for row in query.offset(offset).limit(limit).all()]

        logger.info(f"Vocabulary search: total={total}, page={page}, limit={limit}, returned={len(items)}")

        return {
            "items": items,
            "meta": {
                "total": total,
                "page": page,
                "limit": limit,
                "totalPages": math.ceil(total / limit) if total and limit > 0 else None
            }
        }

    def totals_by_level(self) -> Dict[str, Any]:
        """레벨별 단어 수와 전체 합계"""
        rows = (
            self.db.query(JlptVoca.level, func.count(JlptVoca.id))
            .group_by(JlptVoca.level)
            .order_by(JlptVoca.level.asc())
            .all()
        )
        levels = [{"level": level, "total": count} for level, count in rows]

        return {
            "total": sum(item["total"] for item in levels),
            "levels": levels
        }

    def random_by_level(self, level: Optional[str] = None, count: int = 1) -> List[Dict[str, Any]]:
        """
        레벨 별 또는 전체에서 랜덤 단어 조회.

        결과 개수는 min(count, 해당 레벨 단어 수) 이며 중복이 없습니다.
        """
        count = min(count, MAX_RANDOM_COUNT)

        query = self.db.query(JlptVoca)
        if level:
            query = query.filter(JlptVoca.level == level)

        # PostgreSQL random order
        rows = query.order_by(func.random()).limit(count).all()
        return [row.to_dict() for row in rows]

    def random_by_ids(self, ids: List[int]) -> List[Dict[str, Any]]:
        """ID 목록에 해당하는 단어들을 섞어서 반환"""
        rows = self.db.query(JlptVoca).filter(JlptVoca.id.in_(ids)).all()

        items = [row.to_dict() for row in rows]
        random.shuffle(items)
        return items

    def find_by_word_exact(self, search: Optional[str]) -> Dict[str, Any]:
        """
        word 가 정확히 일치하는 단어 조회.

        Raises:
            NotFoundError: search 가 비었거나 일치하는 단어가 없을 때
        """
        if not search:
            raise NotFoundError("Search parameter is required")

        row = self.db.query(JlptVoca).filter(JlptVoca.word == search).first()
        if row is None:
            raise NotFoundError(f"Word '{search}' not found in vocabulary")

        return row.to_dict()
