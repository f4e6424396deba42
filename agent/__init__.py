"""
AI Agent package for the JLPT vocabulary backend.
All AI agents inherit from BaseAgent and implement the process() method.
"""
from .base_agent import BaseAgent, InstructionAgent, AgentRunResult

__all__ = ["BaseAgent", "InstructionAgent", "AgentRunResult"]
