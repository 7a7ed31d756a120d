"""Gemini LLM service implementation."""

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from debate_adjudication.exceptions import (
    LLMAuthenticationError,
    LLMRateLimitError,
    LLMServiceError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from debate_adjudication.infrastructure.interfaces import LLMService
from debate_adjudication.logging import setup_logging

logger = setup_logging()

_AUTH_CODES = {401, 403}
_UNAVAILABLE_CODES = {502, 503}
_AUTH_MARKERS = ("api key", "api_key_invalid", "permission_denied", "unauthenticated")
_QUOTA_MARKERS = ("quota", "rate limit", "resource_exhausted")


class GeminiLLMService(LLMService):
    """LLM service implementation using Google Gemini chat sessions."""

    def __init__(
        self,
        client: genai.Client,
        model_name: str,
        temperature: float,
        max_output_tokens: int,
    ):
        self._client = client
        self._model_name = model_name
        self._generation_config = genai_types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )

    async def generate(self, prompt: str, transcript: str) -> str:
        """
        Runs a two-turn exchange in a new chat with no prior history.

        Args:
            prompt: The stage instruction.
            transcript: The debate transcript.

        Returns:
            The trimmed reply text to the transcript turn.

        Raises:
            LLMServiceError: Or one of its subclasses, see classify_error.
        """
        try:
            chat = self._client.aio.chats.create(
                model=self._model_name,
                config=self._generation_config,
                history=[],
            )
            await chat.send_message(prompt)
            response = await chat.send_message(transcript)
        except Exception as e:
            logger.exception("Gemini API call failed", extra={"model": self._model_name})
            raise classify_error(e) from e

        text = (response.text or "").strip()
        logger.info(
            "Gemini reply received",
            extra={"model": self._model_name, "chars": len(text)},
        )
        return text


def classify_error(error: Exception) -> LLMServiceError:
    """Maps an SDK or transport failure onto the service error taxonomy."""
    if isinstance(error, LLMServiceError):
        return error

    message = str(error)
    lowered = message.lower()

    if isinstance(error, genai_errors.APIError):
        status = (error.status or "").lower()
        if error.code in _AUTH_CODES or any(m in lowered for m in _AUTH_MARKERS):
            return LLMAuthenticationError(
                "Invalid or missing API key. Please check your GEMINI_API_KEY configuration.",
                cause=error,
            )
        if error.code == 429 or any(m in lowered or m in status for m in _QUOTA_MARKERS):
            return LLMRateLimitError(
                "API rate limit exceeded. Please try again later.", cause=error
            )
        if error.code == 504:
            return LLMTimeoutError(f"Gemini request timed out: {message}", cause=error)
        if error.code in _UNAVAILABLE_CODES:
            return LLMUnavailableError(f"Gemini service unavailable: {message}", cause=error)
        return LLMServiceError(f"AI service error: {message}", cause=error)

    if isinstance(error, (httpx.TimeoutException, TimeoutError)):
        return LLMTimeoutError(f"Gemini request timed out: {message}", cause=error)
    if isinstance(error, (httpx.TransportError, ConnectionError, OSError)):
        return LLMUnavailableError(
            f"Unable to connect to AI service: {message}", cause=error
        )
    return LLMServiceError(f"AI service error: {message}", cause=error)
