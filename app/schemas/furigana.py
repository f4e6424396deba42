"""
Pydantic schemas for furigana annotation output.

Canonical shape: furigana_positions (list of inclusive ranges).
Legacy shape: furigana_by_index ({"<charIndex>": "<reading>"}).
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator, model_validator


class FuriganaPosition(BaseModel):
    """예문 내 연속 한자 구간 하나와 그 읽기 (start, end 모두 포함)"""
    model_config = ConfigDict(frozen=True)

    start: StrictInt = Field(..., ge=0, description="구간 첫 글자 인덱스 (0부터)")
    end: StrictInt = Field(..., ge=0, description="구간 마지막 글자 인덱스 (포함)")
    text: StrictStr = Field(..., description="구간 전체의 후리가나")

    @field_validator("start", "end", mode="before")
    @classmethod
    def integral_float_to_int(cls, value: Any) -> Any:
        # 모델이 2.0 처럼 쓴 정수는 허용, 1.5 / "2" / true 는 거부
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value

    @model_validator(mode="after")
    def check_range(self) -> "FuriganaPosition":
        if self.end < self.start:
            raise ValueError("furigana_positions entries must have end >= start.")
        return self


class FuriganaSolution(BaseModel):
    """Validated annotation for one generated sentence."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    korean_meaning: StrictStr
    original_sentence: Optional[StrictStr] = None
    furigana_positions: List[FuriganaPosition]


class LegacyFuriganaPayload(BaseModel):
    """Older agent output shape; converted to FuriganaSolution before validation."""
    model_config = ConfigDict(extra="allow")

    furigana_by_index: Dict[str, Any]
