"""
Exception types shared by services and agents.

Services raise these; API routers translate them into HTTPException.
`cause` keeps the underlying error for logging only and is never sent to clients.
"""
from typing import Any, Dict, List, Optional


class SentenceGenerationError(Exception):
    """Base error for the example-sentence pipeline."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class MalformedOutputError(SentenceGenerationError):
    """Generator text contains no extractable JSON object."""


class MissingDataError(SentenceGenerationError):
    """JSON object has neither furigana_positions nor furigana_by_index."""


class SchemaViolationError(SentenceGenerationError):
    """JSON object is in a known shape but fails field-level validation."""

    def __init__(
        self,
        message: str,
        violations: Optional[List[str]] = None,
        cause: Optional[BaseException] = None
    ):
        super().__init__(message, cause)
        self.violations = violations or []


class GenerationFailedError(SentenceGenerationError):
    """An agent stage returned no output."""


class ContentBlockedError(SentenceGenerationError):
    """Guardrails tripped on agent output. `summary` lists which checks failed."""

    def __init__(self, message: str, summary: Dict[str, Any]):
        super().__init__(message)
        self.summary = summary


class ServiceNotConfiguredError(Exception):
    """A required external integration has no credentials configured."""


class ExternalServiceError(Exception):
    """An external API call failed or returned an unusable response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class InternalError(Exception):
    """Request-boundary failure; `cause` is logged, the message is safe for clients."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class NotFoundError(Exception):
    """Requested record does not exist."""
