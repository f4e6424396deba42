"""
API endpoints for JLPT vocabulary.
Handles routing and validation only - business logic is in JlptVocaService / ExampleSentenceService.
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional
import logging

from app.core.exceptions import (
    ContentBlockedError,
    InternalError,
    NotFoundError,
    ServiceNotConfiguredError,
)
from app.dependencies import get_example_sentence_service, get_jlpt_voca_service
from app.schemas.jlpt_voca import (
    GenerateExampleSentenceRequest,
    GenerateExampleSentenceResponse,
    JlptVocaItem,
    JlptVocaPage,
    LevelTotalsResponse,
)
from app.services.example_sentence_service import ExampleSentenceService
from app.services.jlpt_voca_service import JlptVocaService

router = APIRouter(prefix="/jlpt-voca", tags=["JLPT Vocabulary"])
logger = logging.getLogger(__name__)


def _parse_ids(raw_ids: List[str]) -> List[int]:
    """?ids=1&ids=2 와 ?ids=1,2 를 모두 지원. 숫자가 아닌 값은 버립니다."""
    ids: List[int] = []
    for raw in raw_ids:
        for part in raw.split(","):
            part = part.strip()
            if not part:
                continue
            try:
                ids.append(int(part))
            except ValueError:
                continue
    return ids


@router.get("/search", response_model=JlptVocaPage)
async def search_voca(
    level: Optional[str] = Query(None, description="JLPT 레벨"),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    search: Optional[str] = Query(None, description="word, meaning, meaning_ko OR 검색"),
    word: Optional[str] = Query(None),
    meaning: Optional[str] = Query(None),
    meaning_ko: Optional[str] = Query(None),
    onlyMeta: bool = Query(False, description="true 이면 items 없이 meta 만 반환"),
    service: JlptVocaService = Depends(get_jlpt_voca_service)
):
    """
    JLPT 단어 목록 조회

    레벨별 단어 목록 조회 및 검색 (search, word, meaning, meaning_ko)
    """
    return service.search(
        level=level,
        page=page,
        limit=limit,
        search=search,
        word=word,
        meaning=meaning,
        meaning_ko=meaning_ko,
        only_meta=onlyMeta
    )


@router.get("/totals-by-level", response_model=LevelTotalsResponse)
async def totals_by_level(service: JlptVocaService = Depends(get_jlpt_voca_service)):
    """JLPT 레벨별 전체 단어 수와 전체 합계"""
    return service.totals_by_level()


@router.get("/random/level", response_model=List[JlptVocaItem])
async def random_by_level(
    level: Optional[str] = Query(None, description="JLPT 레벨 (미지정 시 전체 레벨에서 조회)"),
    count: int = Query(1, ge=1, le=50, description="조회할 단어 개수 (최대 50)"),
    service: JlptVocaService = Depends(get_jlpt_voca_service)
):
    """레벨 별 또는 전체에서 지정한 개수만큼 랜덤 단어 조회"""
    return service.random_by_level(level=level, count=count)


@router.get("/random/ids", response_model=List[JlptVocaItem])
async def random_by_ids(
    ids: List[str] = Query(..., description="조회할 단어 ID 배열 (반복 또는 콤마 구분)"),
    service: JlptVocaService = Depends(get_jlpt_voca_service)
):
    """쿼리로 전달된 ID 배열에 해당하는 단어들을 랜덤으로 섞어서 반환"""
    parsed_ids = _parse_ids(ids)
    if not parsed_ids:
        raise HTTPException(status_code=422, detail="ids must contain at least one numeric id")

    return service.random_by_ids(parsed_ids)


@router.get("/find", response_model=JlptVocaItem)
async def find_by_word_exact(
    search: Optional[str] = Query(None, description="정확히 일치할 단어"),
    service: JlptVocaService = Depends(get_jlpt_voca_service)
):
    """word 필드가 정확히 일치하는 단어 조회"""
    try:
        return service.find_by_word_exact(search)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/examples", response_model=GenerateExampleSentenceResponse, response_model_exclude_none=True)
async def create_example_sentence(
    request: GenerateExampleSentenceRequest,
    service: ExampleSentenceService = Depends(get_example_sentence_service)
):
    """
    OpenAI 예문 및 후리가나 생성

    일본어 단어를 입력받아 OpenAI 에이전트를 통해 예문과 한자 구간별 후리가나를 생성합니다.

    Example:
        >>> POST /api/jlpt-voca/examples
        >>> {"word": "図書館"}
        >>> Response: {
        >>>   "word": "図書館",
        >>>   "sentence": "私は図書館に行きます。",
        >>>   "korean_meaning": "나는 도서관에 갑니다.",
        >>>   "furigana_positions": [{"start": 0, "end": 0, "text": "わたし"}, ...]
        >>> }
    """
    try:
        return await service.generate_example_sentence(request.word)

    except ServiceNotConfiguredError as e:
        raise HTTPException(status_code=503, detail=str(e))

    except ContentBlockedError as e:
        raise HTTPException(
            status_code=422,
            detail={"message": e.message, "guardrails": e.summary}
        )

    except InternalError as e:
        raise HTTPException(status_code=500, detail=e.message)
