"""Infrastructure interface exports."""

from debate_adjudication.infrastructure.interfaces.llm_service import LLMService

__all__ = [
    "LLMService",
]
