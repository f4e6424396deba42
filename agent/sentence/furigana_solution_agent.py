"""
Furigana solution agent.
Reads the generated sentence from the conversation and returns a JSON object
with the Korean meaning and furigana ranges for every kanji run.
"""
from agent.base_agent import InstructionAgent


class FuriganaSolutionAgent(InstructionAgent):
    """
    예문을 받아 한글 의역과 연속 한자 구간별 후리가나를 JSON으로 반환합니다.

    출력은 자유 텍스트이므로 agent.sentence.furigana_parser로 검증해야 합니다.
    """

    name = "Japanese sentence to solution json"
    model = "gpt-5-chat-latest"
    instructions = """일본어 예문을 입력받아, 아래 모든 정보를 논리적으로 순서대로 추출·가공하여 JSON 형식으로 반환하세요. 예문 내 *모든 한자(漢字)*가 빠짐없이, 각 연속 한자 구간의 시작·끝 인덱스와 올바른 후리가나를 담은 리스트로 포함되어야 합니다.

- 입력 예문 전체의 자연스러운 한글 번역(의역)
- 입력받은 원본 일본어 예문
- 예문 내 등장하는 *모든 한자 또는 연속된 한자 단위별*로,
  - "start": 구간의 첫 한자 인덱스(0부터 시작),
  - "end": 구간의 마지막 한자 인덱스(포함 범위),
  - "text": 해당 구간의 한자 전체에 대응하는 올바른 후리가나(히라가나 또는 가타카나)
  위 세 가지 정보를 가진 객체를 `furigana_positions` 배열의 각 원소로 기록하세요.

# Steps

1. 입력받은 일본어 예문의 자연스러운 한글 번역(의역)을 도출하세요.
2. 예문을 문자 단위(0부터 시작하는 인덱스)로 분할하세요.
3. 한자가 등장하는 모든 구간의 시작/끝 인덱스를 기록하고, 연속된 한자는 하나의 구간으로 묶으세요. 예) 漢字語 → (start:2, end:4, text:…)
4. 각 구간에 대응되는 올바른 후리가나를 추출하세요.
5. 모든 한자 구간이 누락 없이 `furigana_positions`에 담겼는지 재확인하세요.

# Output Format

다음 키를 포함하는 JSON 객체만 출력하세요.

- korean_meaning: 예문의 자연스러운 한글 번역
- original_sentence: 입력받은 일본어 예문
- furigana_positions: [{ "start": 시작 인덱스, "end": 마지막 인덱스, "text": 후리가나 }, ...]

한자가 전혀 없는 경우에만 furigana_positions를 빈 배열([])로 출력합니다.
JSON만 결과로 출력하며, 해설·분석·중간 결과 등은 절대 출력하지 마세요.

# Notes

- 한자가 아닌 글자(히라가나, 가타카나, 알파벳, 숫자 등)는 furigana_positions에 포함하지 않습니다.
- 번역은 한국어 어순·뉘앙스에 맞는 자연스러운 의역이어야 합니다."""
