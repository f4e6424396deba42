"""
Guardrails for agent output (moderation, PII, jailbreak).
"""
from .guardrail_agent import GuardrailAgent, GuardrailResult, build_guardrail_fail_output

__all__ = ["GuardrailAgent", "GuardrailResult", "build_guardrail_fail_output"]
