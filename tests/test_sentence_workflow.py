"""
JapaneseSentenceWorkflow 테스트

Agent / guardrail 은 가짜 구현으로 대체합니다.
"""
import json
from types import SimpleNamespace
from typing import List, Optional

import pytest

from agent.base_agent import AgentRunResult
from agent.guardrails.guardrail_agent import CONTAINS_PII, MODERATION, GuardrailResult
from agent.sentence.sentence_creator_agent import SentenceCreatorAgent
from agent.sentence.workflow import JapaneseSentenceWorkflow
from app.core.exceptions import (
    ContentBlockedError,
    GenerationFailedError,
    MalformedOutputError,
    MissingDataError,
)


SENTENCE = "私は図書館に行きます。"
SOLUTION_TEXT = (
    "각 한자 구간을 확인했습니다.\n"
    '{"korean_meaning":"나는 도서관에 갑니다.","original_sentence":"私は図書館に行きます。",'
    '"furigana_by_index":{"0":"わたし","2":"と","3":"しょ","4":"かん","6":"い"}}\n'
    "이상입니다."
)


class FakeStageAgent:
    """정해진 출력을 돌려주고 받은 히스토리를 기록하는 agent"""

    def __init__(self, name: str, output: Optional[str]):
        self.name = name
        self.output = output
        self.seen_history: List[dict] = []

    async def process(self, history):
        self.seen_history = list(history)
        if self.output is None:
            return AgentRunResult(final_output=None)
        return AgentRunResult(
            final_output=self.output,
            new_items=[{"role": "assistant", "content": self.output}]
        )


class FakeGuardrailAgent:

    def __init__(self, results: List[GuardrailResult]):
        self.results = results
        self.checked: List[str] = []

    async def process(self, text):
        self.checked.append(text)
        return self.results


def _workflow(sentence=SENTENCE, solution=SOLUTION_TEXT, guardrail=None):
    return JapaneseSentenceWorkflow(
        FakeStageAgent("sentence", sentence),
        FakeStageAgent("solution", solution),
        guardrail
    )


@pytest.mark.asyncio
async def test_end_to_end_legacy_output():
    workflow = _workflow()

    result = await workflow.run("図書館")

    assert result.sentence == SENTENCE
    assert [p.model_dump() for p in result.solution.furigana_positions] == [
        {"start": 0, "end": 0, "text": "わたし"},
        {"start": 2, "end": 4, "text": "としょかん"},
        {"start": 6, "end": 6, "text": "い"},
    ]
    assert json.loads(result.raw_solution_json)["original_sentence"] == SENTENCE


@pytest.mark.asyncio
async def test_second_stage_sees_first_stage_output():
    workflow = _workflow()

    await workflow.run("図書館")

    assert workflow.sentence_agent.seen_history == [{"role": "user", "content": "図書館"}]
    assert workflow.solution_agent.seen_history == [
        {"role": "user", "content": "図書館"},
        {"role": "assistant", "content": SENTENCE},
    ]


@pytest.mark.asyncio
async def test_missing_sentence_fails_before_second_stage():
    workflow = _workflow(sentence=None)

    with pytest.raises(GenerationFailedError):
        await workflow.run("図書館")

    assert workflow.solution_agent.seen_history == []


@pytest.mark.asyncio
async def test_missing_solution_output():
    with pytest.raises(GenerationFailedError):
        await _workflow(solution="").run("図書館")


@pytest.mark.asyncio
async def test_solution_without_json():
    with pytest.raises(MalformedOutputError):
        await _workflow(solution="죄송합니다. 생성할 수 없습니다.").run("図書館")


@pytest.mark.asyncio
async def test_solution_without_annotation_shape():
    with pytest.raises(MissingDataError):
        await _workflow(solution='{"korean_meaning": "뜻"}').run("図書館")


@pytest.mark.asyncio
async def test_guardrail_tripwire_blocks_with_summary():
    guardrail = FakeGuardrailAgent([
        GuardrailResult(name=MODERATION, tripwire_triggered=False, info={"flagged_categories": []}),
        GuardrailResult(
            name=CONTAINS_PII,
            tripwire_triggered=True,
            info={"detected_entities": {"US_SSN": ["123-45-6789"]}}
        ),
    ])

    with pytest.raises(ContentBlockedError) as exc_info:
        await _workflow(guardrail=guardrail).run("図書館")

    summary = exc_info.value.summary
    assert summary["pii"] == {"failed": True, "detected_counts": ["US_SSN:1"]}
    assert summary["moderation"] == {"failed": False}
    assert "123-45-6789" not in json.dumps(summary)


@pytest.mark.asyncio
async def test_guardrail_checked_text_is_parsed():
    checked = '{"korean_meaning": "검사됨", "furigana_positions": []}'
    guardrail = FakeGuardrailAgent([
        GuardrailResult(name=MODERATION, tripwire_triggered=False, info={"checked_text": checked}),
    ])

    result = await _workflow(guardrail=guardrail).run("図書館")

    assert guardrail.checked == [SOLUTION_TEXT]
    assert result.solution.korean_meaning == "검사됨"


class FakeCompletions:

    def __init__(self, content):
        self.content = content
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))])


@pytest.mark.asyncio
async def test_instruction_agent_prepends_instructions():
    completions = FakeCompletions(f"  {SENTENCE}\n")
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    agent = SentenceCreatorAgent(client)

    result = await agent.process([{"role": "user", "content": "図書館"}])

    assert result.final_output == SENTENCE
    assert result.new_items == [{"role": "assistant", "content": SENTENCE}]
    messages = completions.calls[0]["messages"]
    assert messages[0]["role"] == "system"
    assert messages[1] == {"role": "user", "content": "図書館"}
    assert completions.calls[0]["model"] == "gpt-4.1-nano"


@pytest.mark.asyncio
async def test_instruction_agent_empty_output():
    client = SimpleNamespace(chat=SimpleNamespace(completions=FakeCompletions(None)))

    result = await SentenceCreatorAgent(client).process([{"role": "user", "content": "図書館"}])

    assert result.final_output is None
    assert result.new_items == []
