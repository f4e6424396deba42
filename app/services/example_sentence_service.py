"""
Example Sentence Service

OpenAI 에이전트 워크플로우로 단어 예문과 후리가나를 생성합니다.
워크플로우 실패는 InternalError 하나로 묶고, guardrail 차단만 그대로 전달합니다.
"""
import logging
from typing import Any, Dict, Optional

from openai import AsyncOpenAI

from agent.guardrails.guardrail_agent import GuardrailAgent
from agent.sentence import FuriganaSolutionAgent, JapaneseSentenceWorkflow, SentenceCreatorAgent
from app.config import settings
from app.core.exceptions import ContentBlockedError, InternalError, ServiceNotConfiguredError

logger = logging.getLogger(__name__)

GENERATION_FAILED_MESSAGE = "Failed to generate example sentence. Please try again later."


def build_sentence_workflow(client: AsyncOpenAI, with_guardrails: bool = True) -> JapaneseSentenceWorkflow:
    """Wire the sentence workflow with agents sharing one OpenAI client."""
    return JapaneseSentenceWorkflow(
        sentence_agent=SentenceCreatorAgent(client),
        solution_agent=FuriganaSolutionAgent(client),
        guardrail_agent=GuardrailAgent(client) if with_guardrails else None
    )


class ExampleSentenceService:
    """
    예문 생성 비즈니스 로직

    Args:
        workflow: 실행할 워크플로우. OpenAI 가 설정되지 않았으면 None
    """

    def __init__(self, workflow: Optional[JapaneseSentenceWorkflow]):
        self.workflow = workflow

    @classmethod
    def from_client(cls, client: Optional[AsyncOpenAI]) -> "ExampleSentenceService":
        if client is None:
            return cls(None)
        return cls(build_sentence_workflow(client, settings.SENTENCE_GUARDRAILS_ENABLED))

    async def generate_example_sentence(self, word: str) -> Dict[str, Any]:
        """
        단어 예문 + 후리가나 생성

        Returns:
            {"word", "sentence", "korean_meaning", "original_sentence", "furigana_positions"}

        Raises:
            ServiceNotConfiguredError: OPENAI_API_KEY 미설정
            ContentBlockedError: guardrail 차단 (요약 포함)
            InternalError: 그 외 모든 생성 실패 (원인은 로그에만 남김)
        """
        if self.workflow is None:
            raise ServiceNotConfiguredError("OpenAI integration is not configured. Set OPENAI_API_KEY.")

        try:
            result = await self.workflow.run(word)
        except ContentBlockedError as e:
            logger.warning(f"Example sentence for '{word}' blocked by guardrails: {e.summary}")
            raise
        except Exception as e:
            logger.exception(f"Failed to generate example sentence via OpenAI agents: {str(e)}")
            raise InternalError(GENERATION_FAILED_MESSAGE, cause=e) from e

        solution = result.solution
        return {
            "word": word,
            "sentence": result.sentence,
            "korean_meaning": solution.korean_meaning,
            "original_sentence": solution.original_sentence,
            "furigana_positions": [position.model_dump() for position in solution.furigana_positions],
        }
