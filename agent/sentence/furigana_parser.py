"""
Furigana output parser.

Turns the raw text of the furigana agent into a validated FuriganaSolution:
1. isolate the JSON object inside surrounding prose
2. detect the payload shape (furigana_positions or legacy furigana_by_index)
3. convert the legacy index map into contiguous ranges
4. validate with pydantic
"""
import json
import logging
import math
import re
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from app.core.exceptions import MalformedOutputError, MissingDataError, SchemaViolationError
from app.schemas.furigana import FuriganaSolution, LegacyFuriganaPayload

logger = logging.getLogger(__name__)

CANONICAL_KEY = "furigana_positions"
LEGACY_KEY = "furigana_by_index"


def extract_json_object(text: str) -> str:
    """
    Return the substring from the first '{' to the last '}' (inclusive).

    Not a parser: braces inside the object are fine, unbalanced braces in the
    surrounding prose are not.

    Raises:
        MalformedOutputError: no '{', no '}', or the last '}' is before the first '{'
    """
    start = text.find("{")
    end = text.rfind("}")

    if start == -1 or end == -1 or end <= start:
        raise MalformedOutputError("no JSON object found")

    return text[start:end + 1]


# JSON object keys are strings; these mirror how a JS Number() call reads them.
_DECIMAL_KEY = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_RADIX_KEY = re.compile(r"0(?:[xX](?P<hex>[0-9a-fA-F]+)|[oO](?P<oct>[0-7]+)|[bB](?P<bin>[01]+))")


def _parse_index(key: Any) -> Optional[Union[int, float]]:
    """
    문자열 키를 숫자로 변환. 유한한 숫자가 아니면 None.

    빈 문자열은 0, 0x/0o/0b 접두사는 진법 표기로 읽습니다.
    "1_0", "inf", "nan" 은 숫자가 아닙니다.
    소수 키(1.5)는 float 로 남겨 스키마 검증에서 거부되게 합니다.
    """
    text = str(key).strip()
    if not text:
        return 0

    radix = _RADIX_KEY.fullmatch(text)
    if radix:
        if radix.group("hex"):
            return int(radix.group("hex"), 16)
        if radix.group("oct"):
            return int(radix.group("oct"), 8)
        return int(radix.group("bin"), 2)

    if not _DECIMAL_KEY.fullmatch(text):
        return None

    value = float(text)
    if not math.isfinite(value):
        return None
    return int(value) if value.is_integer() else value


def convert_legacy_map(mapping: Mapping[Any, Any]) -> List[Dict[str, Any]]:
    """
    Convert {"<charIndex>": "<reading>"} into ordered contiguous ranges.

    Consecutive indices (difference exactly 1) collapse into one range whose
    text is the concatenation of the readings in index order.

    Example:
        >>> convert_legacy_map({"0": "わたし", "2": "と", "3": "しょ", "4": "かん", "6": "い"})
        [{'start': 0, 'end': 0, 'text': 'わたし'},
         {'start': 2, 'end': 4, 'text': 'としょかん'},
         {'start': 6, 'end': 6, 'text': 'い'}]
    """
    entries: List[Tuple[Union[int, float], str]] = []
    for key, value in mapping.items():
        index = _parse_index(key)
        if index is None or not isinstance(value, str):
            continue
        entries.append((index, value))

    entries.sort(key=lambda entry: entry[0])

    positions: List[Dict[str, Any]] = []
    run_start: Optional[Union[int, float]] = None
    run_end: Optional[Union[int, float]] = None
    run_text: List[str] = []

    for index, reading in entries:
        if run_start is not None and index == run_end + 1:
            run_end = index
            run_text.append(reading)
            continue

        if run_start is not None:
            positions.append({"start": run_start, "end": run_end, "text": "".join(run_text)})

        run_start = index
        run_end = index
        run_text = [reading]

    if run_start is not None:
        positions.append({"start": run_start, "end": run_end, "text": "".join(run_text)})

    return positions


def _format_violations(error: ValidationError) -> List[str]:
    return [
        f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
        for err in error.errors()
    ]


def _decode_legacy(payload: Dict[str, Any]) -> Dict[str, Any]:
    try:
        legacy = LegacyFuriganaPayload.model_validate(payload)
    except ValidationError as e:
        violations = _format_violations(e)
        raise SchemaViolationError(
            f"Invalid {LEGACY_KEY} payload: {'; '.join(violations)}",
            violations=violations,
            cause=e
        ) from e

    normalized = dict(payload)
    normalized[CANONICAL_KEY] = convert_legacy_map(legacy.furigana_by_index)
    return normalized


def normalize_payload(payload: Any) -> FuriganaSolution:
    """
    Decode a parsed JSON object in either shape into a FuriganaSolution.

    furigana_positions wins when both keys are present; the legacy key is then ignored.

    Raises:
        MissingDataError: neither shape is present
        SchemaViolationError: the detected shape fails validation
    """
    if not isinstance(payload, dict):
        raise SchemaViolationError(
            "Agent output JSON must be an object",
            violations=[f"<root>: expected object, got {type(payload).__name__}"]
        )

    if CANONICAL_KEY in payload:
        candidate = payload
    elif LEGACY_KEY in payload:
        logger.debug("Agent output uses legacy furigana_by_index shape")
        candidate = _decode_legacy(payload)
    else:
        raise MissingDataError("Agent output missing furigana_positions data.")

    try:
        return FuriganaSolution.model_validate(candidate)
    except ValidationError as e:
        violations = _format_violations(e)
        raise SchemaViolationError(
            f"Invalid furigana solution: {'; '.join(violations)}",
            violations=violations,
            cause=e
        ) from e


def dump_solution(solution: FuriganaSolution) -> str:
    """Compact JSON of a validated solution (non-ASCII kept as-is)."""
    return json.dumps(
        solution.model_dump(exclude_none=True),
        ensure_ascii=False,
        separators=(",", ":")
    )


def parse_solution_output(output: str) -> Tuple[FuriganaSolution, str]:
    """
    Parse raw furigana agent output.

    Args:
        output: Agent text, possibly with reasoning or code fences around the JSON

    Returns:
        (validated solution, compact JSON string of that solution)

    Raises:
        MalformedOutputError, MissingDataError, SchemaViolationError
    """
    segment = extract_json_object(output.strip())

    try:
        payload = json.loads(segment)
    except json.JSONDecodeError as e:
        raise MalformedOutputError(f"Agent output JSON could not be parsed: {e.msg}", cause=e) from e

    solution = normalize_payload(payload)
    return solution, dump_solution(solution)
