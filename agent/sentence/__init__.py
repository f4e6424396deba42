"""
Japanese example sentence generation with furigana annotation.
"""
from .sentence_creator_agent import SentenceCreatorAgent
from .furigana_solution_agent import FuriganaSolutionAgent
from .workflow import JapaneseSentenceWorkflow, SentenceWorkflowResult

__all__ = [
    "SentenceCreatorAgent",
    "FuriganaSolutionAgent",
    "JapaneseSentenceWorkflow",
    "SentenceWorkflowResult",
]
