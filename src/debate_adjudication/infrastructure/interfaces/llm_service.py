"""Abstract interface for generative model operations."""

from abc import ABC, abstractmethod


class LLMService(ABC):
    """Abstract base class for generative model backends."""

    @abstractmethod
    async def generate(self, prompt: str, transcript: str) -> str:
        """
        Sends an instruction followed by a transcript in a fresh conversation.

        Args:
            prompt: The stage instruction, sent as the first turn.
            transcript: The debate transcript, sent as the second turn.

        Returns:
            The model's reply to the transcript turn.

        Raises:
            LLMAuthenticationError: If the credentials are rejected.
            LLMRateLimitError: If the quota or rate limit is exhausted.
            LLMTimeoutError: If the transport times out.
            LLMUnavailableError: If the service cannot be reached.
            LLMServiceError: For any other failure.
        """
        pass
