"""
furigana_parser 테스트

JSON 추출, legacy 인덱스 맵 변환, 스키마 검증
"""
import json

import pytest

from agent.sentence.furigana_parser import (
    convert_legacy_map,
    extract_json_object,
    normalize_payload,
    parse_solution_output,
)
from app.core.exceptions import MalformedOutputError, MissingDataError, SchemaViolationError
from app.schemas.furigana import FuriganaPosition


LEGACY_MAP = {"0": "わたし", "2": "と", "3": "しょ", "4": "かん", "6": "い"}
EXPECTED_RANGES = [
    {"start": 0, "end": 0, "text": "わたし"},
    {"start": 2, "end": 4, "text": "としょかん"},
    {"start": 6, "end": 6, "text": "い"},
]


class TestExtractJsonObject:

    @pytest.mark.parametrize("prefix, suffix", [
        ("", ""),
        ("Here is the result:\n", "\nDone."),
        ("```json\n", "\n```"),
        ("분석 결과입니다. ", " 이상입니다."),
    ])
    def test_returns_object_between_prose(self, prefix, suffix):
        obj = json.dumps({"korean_meaning": "x", "furigana_positions": [{"start": 0, "end": 1, "text": "a"}]})
        assert extract_json_object(prefix + obj + suffix) == obj

    def test_nested_braces_use_outermost(self):
        text = 'note {"a": {"b": {"c": 1}}} end'
        assert extract_json_object(text) == '{"a": {"b": {"c": 1}}}'

    @pytest.mark.parametrize("text", [
        "no json here",
        "only opening {",
        "only closing }",
        "} reversed {",
        "",
    ])
    def test_missing_object_raises(self, text):
        with pytest.raises(MalformedOutputError):
            extract_json_object(text)


class TestConvertLegacyMap:

    def test_groups_contiguous_indices(self):
        assert convert_legacy_map(LEGACY_MAP) == EXPECTED_RANGES

    def test_order_of_keys_does_not_matter(self):
        shuffled = {"4": "かん", "0": "わたし", "6": "い", "3": "しょ", "2": "と"}
        assert convert_legacy_map(shuffled) == EXPECTED_RANGES

    def test_empty_map(self):
        assert convert_legacy_map({}) == []

    def test_single_index(self):
        assert convert_legacy_map({"3": "き"}) == [{"start": 3, "end": 3, "text": "き"}]

    def test_gaps_are_never_merged(self):
        result = convert_legacy_map({"0": "あ", "5": "い"})
        assert result == [
            {"start": 0, "end": 0, "text": "あ"},
            {"start": 5, "end": 5, "text": "い"},
        ]

    def test_numeric_order_not_lexical(self):
        result = convert_legacy_map({"10": "じゅう", "9": "きゅう", "2": "に"})
        assert result == [
            {"start": 2, "end": 2, "text": "に"},
            {"start": 9, "end": 10, "text": "きゅうじゅう"},
        ]

    def test_invalid_entries_are_dropped(self):
        mapping = {
            "0": "わたし",
            "abc": "x",
            "1": 5,
            "2": None,
            "nan": "y",
            "inf": "z",
            "1_0": "v",
            "3": "と",
        }
        assert convert_legacy_map(mapping) == [
            {"start": 0, "end": 0, "text": "わたし"},
            {"start": 3, "end": 3, "text": "と"},
        ]

    @pytest.mark.parametrize("key, index", [
        ("", 0),
        ("  7 ", 7),
        ("+3", 3),
        ("-0", 0),
        ("1e1", 10),
        ("4.", 4),
        ("0x1f", 31),
        ("0o17", 15),
        ("0b101", 5),
    ])
    def test_numeric_key_forms(self, key, index):
        assert convert_legacy_map({key: "あ"}) == [{"start": index, "end": index, "text": "あ"}]

    @pytest.mark.parametrize("key", ["1_0", "inf", "nan", "Infinity", "1e400", "１", "0x", "--1"])
    def test_non_numeric_key_forms(self, key):
        assert convert_legacy_map({key: "あ"}) == []

    def test_fractional_key_is_kept(self):
        assert convert_legacy_map({"0": "a", "1.5": "b"}) == [
            {"start": 0, "end": 0, "text": "a"},
            {"start": 1.5, "end": 1.5, "text": "b"},
        ]


class TestNormalizePayload:

    def test_canonical_shape_passes_through(self):
        payload = {
            "korean_meaning": "나는 도서관에 갑니다.",
            "original_sentence": "私は図書館に行きます。",
            "furigana_positions": EXPECTED_RANGES,
        }
        solution = normalize_payload(payload)

        assert solution.korean_meaning == "나는 도서관에 갑니다."
        assert solution.original_sentence == "私は図書館に行きます。"
        assert solution.furigana_positions == [FuriganaPosition(**r) for r in EXPECTED_RANGES]

    def test_legacy_shape_is_converted(self):
        payload = {"korean_meaning": "나는 도서관에 갑니다.", "furigana_by_index": LEGACY_MAP}
        solution = normalize_payload(payload)

        assert [p.model_dump() for p in solution.furigana_positions] == EXPECTED_RANGES
        assert solution.original_sentence is None

    def test_canonical_shape_wins_over_legacy(self):
        payload = {
            "korean_meaning": "뜻",
            "furigana_positions": [{"start": 1, "end": 1, "text": "き"}],
            "furigana_by_index": LEGACY_MAP,
        }
        solution = normalize_payload(payload)

        assert [p.model_dump() for p in solution.furigana_positions] == [{"start": 1, "end": 1, "text": "き"}]

    def test_empty_positions_are_valid(self):
        solution = normalize_payload({"korean_meaning": "안녕하세요", "furigana_positions": []})
        assert solution.furigana_positions == []

    def test_empty_legacy_map_yields_empty_positions(self):
        solution = normalize_payload({"korean_meaning": "안녕하세요", "furigana_by_index": {}})
        assert solution.furigana_positions == []

    def test_missing_both_shapes(self):
        with pytest.raises(MissingDataError):
            normalize_payload({"korean_meaning": "뜻"})

    @pytest.mark.parametrize("positions", [
        [{"start": 4, "end": 2, "text": "か"}],
        [{"start": 0, "end": 0, "text": 1}],
        [{"start": -1, "end": 0, "text": "か"}],
        [{"start": "0", "end": 1, "text": "か"}],
        [{"start": 0, "text": "か"}],
        [{"start": 0, "end": 0, "text": "わ"}, {"start": 3, "end": 1, "text": "か"}],
    ])
    def test_schema_rejection_is_all_or_nothing(self, positions):
        with pytest.raises(SchemaViolationError) as exc_info:
            normalize_payload({"korean_meaning": "뜻", "furigana_positions": positions})

        assert exc_info.value.violations
        assert exc_info.value.cause is not None

    def test_korean_meaning_must_be_string(self):
        with pytest.raises(SchemaViolationError) as exc_info:
            normalize_payload({"korean_meaning": 3, "furigana_positions": []})

        assert any(v.startswith("korean_meaning") for v in exc_info.value.violations)

    def test_legacy_map_must_be_object(self):
        with pytest.raises(SchemaViolationError):
            normalize_payload({"korean_meaning": "뜻", "furigana_by_index": ["わたし"]})

    def test_non_object_payload(self):
        with pytest.raises(SchemaViolationError):
            normalize_payload([1, 2, 3])

    def test_fractional_legacy_key_rejects_whole_payload(self):
        with pytest.raises(SchemaViolationError) as exc_info:
            normalize_payload({"korean_meaning": "뜻", "furigana_by_index": {"0": "a", "1.5": "b"}})

        assert any(v.startswith("furigana_positions.1.start") for v in exc_info.value.violations)

    def test_integral_floats_are_integers(self):
        solution = normalize_payload({
            "korean_meaning": "뜻",
            "furigana_positions": [{"start": 2.0, "end": 4.0, "text": "としょかん"}],
        })

        position = solution.furigana_positions[0]
        assert (position.start, position.end) == (2, 4)
        assert isinstance(position.start, int)

    @pytest.mark.parametrize("start", [1.5, True, float("nan")])
    def test_non_integer_start_is_rejected(self, start):
        with pytest.raises(SchemaViolationError):
            normalize_payload({
                "korean_meaning": "뜻",
                "furigana_positions": [{"start": start, "end": 2, "text": "か"}],
            })


class TestParseSolutionOutput:

    def test_parses_legacy_output_in_prose(self):
        body = {
            "korean_meaning": "나는 도서관에 갑니다.",
            "original_sentence": "私は図書館に行きます。",
            "furigana_by_index": LEGACY_MAP,
        }
        output = "  검토를 마쳤습니다.\n" + json.dumps(body, ensure_ascii=False) + "\n끝  "

        solution, raw_json = parse_solution_output(output)

        assert [p.model_dump() for p in solution.furigana_positions] == EXPECTED_RANGES
        assert json.loads(raw_json) == {
            "korean_meaning": "나는 도서관에 갑니다.",
            "original_sentence": "私は図書館に行きます。",
            "furigana_positions": EXPECTED_RANGES,
        }
        assert "わたし" in raw_json

    def test_raw_json_omits_absent_original_sentence_and_extra_keys(self):
        output = '{"korean_meaning": "뜻", "furigana_positions": [], "notes": "extra"}'
        _, raw_json = parse_solution_output(output)

        assert raw_json == '{"korean_meaning":"뜻","furigana_positions":[]}'

    def test_integral_float_bounds_are_dumped_as_integers(self):
        output = '{"korean_meaning": "뜻", "furigana_positions": [{"start": 2.0, "end": 4.0, "text": "と"}]}'
        _, raw_json = parse_solution_output(output)

        assert raw_json == '{"korean_meaning":"뜻","furigana_positions":[{"start":2,"end":4,"text":"と"}]}'

    def test_invalid_json_inside_braces(self):
        with pytest.raises(MalformedOutputError) as exc_info:
            parse_solution_output("{korean_meaning: 뜻}")

        assert isinstance(exc_info.value.cause, json.JSONDecodeError)
