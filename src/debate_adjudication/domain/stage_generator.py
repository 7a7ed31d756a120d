"""Runs one adjudication stage against the generative model with retries."""

import asyncio
import json
import re
from collections.abc import Awaitable, Callable

from pydantic import BaseModel, ValidationError

from debate_adjudication.domain.normalizer import normalize
from debate_adjudication.domain.prompts import PromptSpec
from debate_adjudication.exceptions import (
    LLMAuthenticationError,
    LLMRateLimitError,
    LLMServiceError,
    LLMTimeoutError,
    LLMUnavailableError,
    MalformedLLMOutputError,
)
from debate_adjudication.infrastructure.interfaces import LLMService
from debate_adjudication.logging import setup_logging

logger = setup_logging()

_LEADING_FENCE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```$")


def strip_code_fences(text: str) -> str:
    """Removes a leading ```json / ``` fence and a trailing ``` fence."""
    text = text.strip()
    text = _LEADING_FENCE.sub("", text)
    text = _TRAILING_FENCE.sub("", text)
    return text.strip()


class StageGenerator:
    """Turns a prompt and transcript into a validated stage result."""

    def __init__(
        self,
        llm_service: LLMService,
        max_attempts: int = 3,
        timeout_seconds: float = 60.0,
        timeout_backoff_seconds: float = 2.0,
        network_backoff_seconds: float = 3.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._llm = llm_service
        self._max_attempts = max_attempts
        self._timeout_seconds = timeout_seconds
        self._timeout_backoff_seconds = timeout_backoff_seconds
        self._network_backoff_seconds = network_backoff_seconds
        self._sleep = sleep

    async def run(self, spec: PromptSpec, transcript: str) -> BaseModel:
        """
        Generates, parses, normalizes and validates one stage.

        Credential and quota errors fail at once. Timeouts and connectivity
        errors are retried with a linear backoff; unparseable replies and
        other errors are retried immediately.

        Args:
            spec: The stage prompt and its expected result model.
            transcript: The debate transcript.

        Returns:
            An instance of spec.result_model.

        Raises:
            LLMAuthenticationError: If the credentials are rejected.
            LLMRateLimitError: If the quota is exhausted.
            LLMTimeoutError: If every attempt timed out.
            LLMUnavailableError: If the service stayed unreachable.
            MalformedLLMOutputError: If no attempt produced valid JSON.
            LLMServiceError: If the final attempt failed for another reason.
        """
        stage = spec.stage.value

        for attempt in range(1, self._max_attempts + 1):
            is_last = attempt == self._max_attempts
            log_extra = {"stage": stage, "attempt": attempt}

            try:
                raw_text = await asyncio.wait_for(
                    self._llm.generate(spec.prompt, transcript),
                    timeout=self._timeout_seconds,
                )
            except (LLMAuthenticationError, LLMRateLimitError):
                logger.error("Model request rejected", extra=log_extra)
                raise
            except (asyncio.TimeoutError, LLMTimeoutError) as e:
                logger.warning("Model request timed out", extra=log_extra)
                if is_last:
                    raise LLMTimeoutError(
                        "AI service is taking too long to respond. Please try again later.",
                        cause=e,
                    ) from e
                await self._sleep(self._timeout_backoff_seconds * attempt)
                continue
            except LLMUnavailableError:
                logger.warning("Model service unreachable", extra=log_extra)
                if is_last:
                    raise
                await self._sleep(self._network_backoff_seconds * attempt)
                continue
            except Exception as e:
                logger.warning(
                    "Model request failed", extra={**log_extra, "error": str(e)}
                )
                if is_last:
                    raise LLMServiceError(f"AI service error: {e}", cause=e) from e
                continue

            try:
                result = self._parse(spec, raw_text)
            except MalformedLLMOutputError as e:
                logger.warning(
                    "Model returned invalid JSON",
                    extra={**log_extra, "sample": e.sample},
                )
                if is_last:
                    raise
                continue

            logger.info("Stage completed", extra=log_extra)
            return result

        raise LLMServiceError(f"Stage '{stage}' made no attempts")

    def _parse(self, spec: PromptSpec, raw_text: str) -> BaseModel:
        """Parses a raw reply into the stage model, normalizing numbers first."""
        try:
            document = json.loads(strip_code_fences(raw_text))
        except json.JSONDecodeError as e:
            raise MalformedLLMOutputError(spec.stage.value, raw_text, cause=e) from e

        document = normalize(document, spec.stage)

        try:
            return spec.result_model.model_validate(document)
        except ValidationError as e:
            raise MalformedLLMOutputError(
                spec.stage.value,
                raw_text,
                cause=e,
                reason="did not match the expected structure",
            ) from e
