"""Gemini API client for workout suggestions.

Sends one prompt to the generateContent endpoint and returns the raw text of
the first candidate, or a typed failure. Nothing raised by the network layer
escapes this module: bad statuses, empty candidate lists, transport errors,
the 30 second deadline and the caller's cancellation signal all come back as
GeminiFailure values.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError

from gymapi.config.settings import GeminiConfig
from gymapi.workout_suggestions.errors import NO_RESPONSE_MESSAGE, SuggestionFailureReason
from gymapi.workout_suggestions.gemini_models import GeminiRequest, GeminiResponse, GeminiUsageMetadata

# Backoff between retries: 0.5s, 1s, 2s
RETRY_BASE_DELAY_SECONDS = 0.5

_ERROR_BODY_LOG_LIMIT = 500


@dataclass(frozen=True)
class GeminiSuccess:
    text: str
    usage: GeminiUsageMetadata | None = None


@dataclass(frozen=True)
class GeminiFailure:
    reason: SuggestionFailureReason
    message: str
    status_code: int | None = None


GeminiResult = GeminiSuccess | GeminiFailure


def _is_retryable(result: GeminiResult) -> bool:
    if not isinstance(result, GeminiFailure):
        return False
    if result.reason in {SuggestionFailureReason.TRANSPORT, SuggestionFailureReason.TIMEOUT}:
        return True
    return result.reason == SuggestionFailureReason.HTTP_STATUS and (
        result.status_code == httpx.codes.TOO_MANY_REQUESTS or (result.status_code or 0) >= 500
    )


class GeminiClient:
    """Client for the Gemini generative-text API.

    Each call opens its own httpx.AsyncClient, so concurrent callers share no
    state and every connection is released when the call returns.
    """

    def __init__(
        self,
        config: GeminiConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Gemini client.

        Args:
            config: API URL, key, model, timeout and retry settings
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.config = config
        self._transport = transport

    async def generate(self, prompt: str, cancel_event: asyncio.Event | None = None) -> GeminiResult:
        """Send a prompt and return the first candidate's text.

        The request races the configured deadline and the optional
        cancellation event; whichever finishes first wins and the others are
        cancelled and awaited before returning.

        Args:
            prompt: Instruction text for the model
            cancel_event: Set by the caller to abandon the request

        Returns:
            GeminiSuccess with raw text, or GeminiFailure with a reason
        """
        if not self.config.api_key:
            logger.error("Gemini API key is not configured; skipping request")
            return GeminiFailure(SuggestionFailureReason.CONFIGURATION, "Gemini API key is not configured")

        request_task = asyncio.create_task(self._send_with_retries(prompt))
        waiters: set[asyncio.Task[Any]] = {request_task}
        cancel_task: asyncio.Task[Any] | None = None
        if cancel_event is not None:
            cancel_task = asyncio.create_task(cancel_event.wait())
            waiters.add(cancel_task)

        try:
            done, _ = await asyncio.wait(
                waiters,
                timeout=self.config.timeout_seconds,
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            for task in waiters:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*waiters, return_exceptions=True)

        if request_task in done:
            return request_task.result()

        if cancel_task is not None and cancel_task in done:
            logger.warning("Gemini API request cancelled by caller", model=self.config.model)
            return GeminiFailure(SuggestionFailureReason.CANCELLED, "The request was cancelled")

        logger.error(
            f"Gemini API request timed out after {self.config.timeout_seconds:.0f}s",
            model=self.config.model,
        )
        return GeminiFailure(
            SuggestionFailureReason.TIMEOUT,
            f"Gemini API request timed out after {self.config.timeout_seconds:.0f} seconds",
        )

    async def _send_with_retries(self, prompt: str) -> GeminiResult:
        payload = GeminiRequest.from_prompt(prompt).model_dump()
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.timeout_seconds),
            headers={"User-Agent": self.config.user_agent},
            transport=self._transport,
        ) as client:
            attempt = 0
            while True:
                result = await self._send_once(client, payload)
                if attempt >= self.config.max_retries or not _is_retryable(result):
                    return result
                delay = RETRY_BASE_DELAY_SECONDS * 2**attempt
                attempt += 1
                logger.warning(
                    f"Retrying Gemini API request in {delay:.1f}s",
                    attempt=attempt,
                    max_retries=self.config.max_retries,
                )
                await asyncio.sleep(delay)

    async def _send_once(self, client: httpx.AsyncClient, payload: dict[str, Any]) -> GeminiResult:
        logger.debug("Sending Gemini API request", model=self.config.model)
        try:
            response = await client.post(
                self.config.endpoint,
                params={"key": self.config.api_key},
                json=payload,
            )
        except httpx.TimeoutException as e:
            logger.error("Gemini API request timed out", model=self.config.model, error=str(e))
            return GeminiFailure(SuggestionFailureReason.TIMEOUT, "Gemini API request timed out")
        except httpx.RequestError as e:
            logger.error("Gemini API transport error", model=self.config.model, error=str(e))
            return GeminiFailure(SuggestionFailureReason.TRANSPORT, f"Could not reach Gemini API: {type(e).__name__}")

        if not response.is_success:
            logger.error(
                f"Gemini API request failed: {response.status_code}",
                model=self.config.model,
                body=response.text[:_ERROR_BODY_LOG_LIMIT],
            )
            return GeminiFailure(
                SuggestionFailureReason.HTTP_STATUS,
                f"API request failed: {response.status_code} {response.reason_phrase}".strip(),
                status_code=response.status_code,
            )

        try:
            body = GeminiResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error("Gemini API returned an unreadable body", model=self.config.model, error=str(e))
            return GeminiFailure(SuggestionFailureReason.MALFORMED_RESPONSE, "Gemini API returned an invalid response")

        if not body.candidates:
            logger.warning("Gemini API returned no candidates", model=self.config.model)
            return GeminiFailure(SuggestionFailureReason.EMPTY_RESPONSE, NO_RESPONSE_MESSAGE)

        text = body.first_text()
        if text is None:
            logger.warning("Gemini API candidate has no content parts", model=self.config.model)
            return GeminiFailure(SuggestionFailureReason.MALFORMED_RESPONSE, "Gemini API returned an invalid response")

        if body.usage_metadata is not None:
            logger.debug(
                "Gemini API usage",
                prompt_tokens=body.usage_metadata.prompt_token_count,
                candidate_tokens=body.usage_metadata.candidates_token_count,
                total_tokens=body.usage_metadata.total_token_count,
            )
        return GeminiSuccess(text=text, usage=body.usage_metadata)
