"""
모든 AI Agent의 베이스 클래스.
주입된 OpenAI 클라이언트를 보관하고 process() 인터페이스를 정의합니다.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI


@dataclass
class AgentRunResult:
    """
    Agent 한 단계 실행 결과.

    final_output: 모델이 생성한 최종 텍스트 (없으면 None)
    new_items: 대화 히스토리에 이어 붙일 메시지 목록
    """
    final_output: Optional[str]
    new_items: List[Dict[str, Any]] = field(default_factory=list)


class BaseAgent(ABC):
    """
    모든 AI Agent의 추상 베이스 클래스.

    모든 AI Agent는 다음을 준수해야 합니다:
    1. BaseAgent를 상속받을 것
    2. process() 메서드를 구현할 것
    3. OpenAI API 호출 시 self.client를 사용할 것

    클라이언트는 애플리케이션 시작 시 한 번 생성되어 생성자로 주입됩니다.

    사용 예시:
        >>> class MyAgent(BaseAgent):
        ...     async def process(self, text: str) -> str:
        ...         response = await self.client.chat.completions.create(
        ...             model="gpt-4.1-nano",
        ...             messages=[{"role": "user", "content": text}]
        ...         )
        ...         return response.choices[0].message.content
        ...
        >>> agent = MyAgent(client)
        >>> result = await agent.process("学校")
    """

    def __init__(self, client: AsyncOpenAI):
        self.client: AsyncOpenAI = client

    @abstractmethod
    async def process(self, *args, **kwargs):
        """
        각 Agent가 반드시 구현해야 하는 핵심 처리 메서드.

        각 Agent는 자신만의 입력/출력 시그니처를 정의합니다.

        Raises:
            Exception: AI 처리 실패 시
        """
        pass


class InstructionAgent(BaseAgent):
    """
    고정된 instructions(system prompt)와 모델 설정으로 대화 히스토리를 이어받아 실행하는 Agent.

    서브클래스는 name, model, instructions 및 샘플링 설정만 정의합니다.
    """

    name: str = "agent"
    model: str = "gpt-4.1-nano"
    instructions: str = ""
    temperature: float = 1.0
    top_p: float = 1.0
    max_tokens: int = 2048

    async def process(self, history: List[Dict[str, Any]]) -> AgentRunResult:
        """
        Run one completion over the conversation history.

        Args:
            history: Chat messages so far ({"role": ..., "content": ...})

        Returns:
            AgentRunResult with the assistant text and the message to append
        """
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "system", "content": self.instructions}, *history],
            temperature=self.temperature,
            top_p=self.top_p,
            max_tokens=self.max_tokens
        )

        content = response.choices[0].message.content if response.choices else None
        content = content.strip() if content else None

        if not content:
            return AgentRunResult(final_output=None)

        return AgentRunResult(
            final_output=content,
            new_items=[{"role": "assistant", "content": content}]
        )
