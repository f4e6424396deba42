"""
Japanese example sentence workflow.

Stage 1: SentenceCreatorAgent writes a sentence for the word.
Stage 2: FuriganaSolutionAgent annotates it (reads stage 1 from the history).
Then optional guardrails, then furigana_parser validation.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from agent.base_agent import AgentRunResult, InstructionAgent
from agent.guardrails.guardrail_agent import (
    GuardrailAgent,
    build_guardrail_fail_output,
    get_guardrail_safe_text,
    guardrails_has_tripwire,
)
from agent.sentence.furigana_parser import parse_solution_output
from app.core.exceptions import ContentBlockedError, GenerationFailedError
from app.schemas.furigana import FuriganaSolution

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SentenceWorkflowResult:
    sentence: str
    solution: FuriganaSolution
    raw_solution_json: str


class JapaneseSentenceWorkflow:
    """
    Two-stage sentence + furigana generation.

    Every collaborator is injected; the workflow keeps no state between runs.

    Example:
        >>> workflow = JapaneseSentenceWorkflow(
        ...     SentenceCreatorAgent(client),
        ...     FuriganaSolutionAgent(client),
        ...     GuardrailAgent(client)
        ... )
        >>> result = await workflow.run("図書館")
        >>> result.solution.furigana_positions[0]
        FuriganaPosition(start=0, end=0, text='わたし')
    """

    def __init__(
        self,
        sentence_agent: InstructionAgent,
        solution_agent: InstructionAgent,
        guardrail_agent: Optional[GuardrailAgent] = None
    ):
        self.sentence_agent = sentence_agent
        self.solution_agent = solution_agent
        self.guardrail_agent = guardrail_agent

    async def run(self, word: str) -> SentenceWorkflowResult:
        """
        Generate and annotate one example sentence.

        Raises:
            GenerationFailedError: a stage returned no output
            ContentBlockedError: guardrails tripped on the annotation output
            MalformedOutputError, MissingDataError, SchemaViolationError: bad annotation JSON
        """
        history: List[Dict[str, Any]] = [{"role": "user", "content": word}]

        sentence_result = await self._run_stage(self.sentence_agent, history)
        sentence = sentence_result.final_output
        logger.info(f"📝 Sentence generated for '{word}': {sentence}")

        solution_result = await self._run_stage(self.solution_agent, history)
        raw_output = solution_result.final_output

        checked_output = raw_output
        if self.guardrail_agent is not None:
            guardrail_results = await self.guardrail_agent.process(raw_output)
            if guardrails_has_tripwire(guardrail_results):
                summary = build_guardrail_fail_output(guardrail_results)
                raise ContentBlockedError("Guardrails blocked the agent output", summary)
            checked_output = get_guardrail_safe_text(guardrail_results, raw_output)

        solution, raw_json = parse_solution_output(checked_output)
        logger.info(f"✅ Furigana solution parsed ({len(solution.furigana_positions)} ranges)")

        return SentenceWorkflowResult(
            sentence=sentence,
            solution=solution,
            raw_solution_json=raw_json
        )

    async def _run_stage(self, agent: InstructionAgent, history: List[Dict[str, Any]]) -> AgentRunResult:
        result = await agent.process(list(history))
        history.extend(result.new_items)

        if not result.final_output:
            raise GenerationFailedError(f"Agent '{agent.name}' returned no output")

        return result
