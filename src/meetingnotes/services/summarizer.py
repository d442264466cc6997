"""Meeting transcript summarization over an OpenAI-compatible chat API."""

import logging

import openai
from openai import AsyncOpenAI

from meetingnotes.config import get_settings
from meetingnotes.errors import (
    QuotaExceededError,
    RateLimitError,
    UpstreamAuthError,
    UpstreamError,
)

logger = logging.getLogger(__name__)
settings = get_settings()

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again in a moment."
QUOTA_MESSAGE = "API quota exceeded. Please try again later."
AUTH_MESSAGE = "Invalid Groq API key. Please check your configuration."


def classify_generation_error(exc: Exception) -> UpstreamError:
    """Map a generation service failure onto the upstream error taxonomy.

    SDK error types and codes are checked first; matching on the message text
    only covers errors that arrive without a structured type.
    """
    message = str(exc)

    if isinstance(exc, openai.RateLimitError):
        if exc.code == "insufficient_quota" or "quota" in message:
            return QuotaExceededError(QUOTA_MESSAGE, exc)
        return RateLimitError(RATE_LIMIT_MESSAGE, exc)
    if isinstance(exc, openai.AuthenticationError):
        return UpstreamAuthError(AUTH_MESSAGE, exc)

    if "rate_limit" in message:
        return RateLimitError(RATE_LIMIT_MESSAGE, exc)
    if "quota" in message:
        return QuotaExceededError(QUOTA_MESSAGE, exc)
    if "Invalid API Key" in message:
        return UpstreamAuthError(AUTH_MESSAGE, exc)

    return UpstreamError(f"Failed to generate summary: {message}", exc)


class SummarizerService:
    """Client for the external text-generation service."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        """Initialize the summarizer."""
        self.api_key = api_key if api_key is not None else settings.groq_api_key
        self.model = model or settings.generation_model
        # The SDK refuses to build a client without credentials
        self.client: AsyncOpenAI | None = None
        if self.api_key:
            self.client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=base_url or settings.generation_base_url,
                timeout=timeout_seconds or settings.generation_timeout_seconds,
                max_retries=0,
            )

    async def close(self) -> None:
        """Close the underlying HTTP client, if one was created."""
        if self.client is not None:
            await self.client.close()

    def build_messages(self, text: str, prompt: str) -> list[dict[str, str]]:
        """Build the system and user messages for one summarization call."""
        return [
            {"role": "system", "content": settings.system_prompt},
            {"role": "user", "content": f"{prompt}\n\n{text}"},
        ]

    async def summarize(self, text: str, prompt: str) -> str:
        """Generate a summary of the transcript following the given prompt.

        Raises:
            UpstreamError: the call failed or returned no text. Rate limit,
                quota and credential failures use the matching subclass.
        """
        if self.client is None:
            logger.warning("Generation service API key not configured")
            raise UpstreamAuthError(AUTH_MESSAGE)

        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=self.build_messages(text, prompt),
            )
        except Exception as e:
            logger.error(f"Summarization failed: {e}")
            raise classify_generation_error(e) from e

        content = completion.choices[0].message.content if completion.choices else None
        summary = (content or "").strip()
        if not summary:
            raise UpstreamError("Failed to generate summary: empty completion")

        logger.info(f"Generated summary ({len(summary)} chars) with {self.model}")
        return summary
