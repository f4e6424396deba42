"""
Japanese example sentence agent.
Writes one natural Japanese sentence that uses the given word.
"""
from agent.base_agent import InstructionAgent


class SentenceCreatorAgent(InstructionAgent):
    """
    일본어 단어를 받아 해당 단어를 포함한 예문 한 문장을 생성합니다.

    Example:
        >>> agent = SentenceCreatorAgent(client)
        >>> result = await agent.process([{"role": "user", "content": "図書館"}])
        >>> result.final_output
        '私は図書館に行きます。'
    """

    name = "Japanese sentence creator"
    model = "gpt-4.1-nano"
    instructions = """일본어 단어를 입력받아 해당 단어를 포함한 정확하고 자연스러운 예문을 한 문장 작성하세요. 예문은 일상적으로 쓰이는 문장을 사용하고, 단어의 의미와 용법이 명확하게 드러나도록 하세요.

# Output Format
- 출력은 반드시 일본어 예문 1문장으로만 작성하세요."""
