"""Edge case tests for SummarizerService: upstream failures, malformed responses."""

import logging
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from meetingnotes.errors import (
    QuotaExceededError,
    RateLimitError,
    UpstreamAuthError,
    UpstreamError,
)
from meetingnotes.services.summarizer import SummarizerService, classify_generation_error

API_URL = "https://api.groq.com/openai/v1/chat/completions"


def _status_error(cls, status: int, message: str, body: dict | None = None):
    response = httpx.Response(status, request=httpx.Request("POST", API_URL))
    return cls(message, response=response, body=body)


def _completion(content: str | None) -> MagicMock:
    completion = MagicMock()
    completion.choices = [MagicMock()]
    completion.choices[0].message.content = content
    return completion


def _make_service(create: AsyncMock) -> SummarizerService:
    service = SummarizerService(api_key="test-key", model="llama-3.1-8b-instant")
    service.client = MagicMock()
    service.client.chat.completions.create = create
    return service


class TestSummarize:
    """Tests for the happy path and request shape."""

    @pytest.mark.asyncio
    async def test_returns_stripped_completion(self):
        service = _make_service(AsyncMock(return_value=_completion("  - Budget approved\n")))

        result = await service.summarize("Alice and Bob discussed the budget.", "Summarize:")

        assert result == "- Budget approved"

    @pytest.mark.asyncio
    async def test_sends_system_instruction_and_joined_user_message(self):
        create = AsyncMock(return_value=_completion("ok"))
        service = _make_service(create)

        await service.summarize("transcript body", "Bullet points please:")

        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "llama-3.1-8b-instant"
        assert kwargs["messages"] == [
            {"role": "system", "content": "You are a meeting summarizer"},
            {"role": "user", "content": "Bullet points please:\n\ntranscript body"},
        ]

    @pytest.mark.asyncio
    async def test_empty_completion_raises(self):
        service = _make_service(AsyncMock(return_value=_completion("   ")))

        with pytest.raises(UpstreamError, match="empty completion"):
            await service.summarize("text", "prompt")

    @pytest.mark.asyncio
    async def test_none_content_raises(self):
        service = _make_service(AsyncMock(return_value=_completion(None)))

        with pytest.raises(UpstreamError):
            await service.summarize("text", "prompt")


class TestSummarizeFailures:
    """Tests for summarize error handling."""

    @pytest.mark.asyncio
    async def test_no_api_key_raises_auth_error(self, caplog):
        service = SummarizerService(api_key="", model="llama-3.1-8b-instant")

        with caplog.at_level(logging.WARNING):
            with pytest.raises(UpstreamAuthError):
                await service.summarize("text", "prompt")

        assert "API key not configured" in caplog.text

    @pytest.mark.asyncio
    async def test_no_api_key_builds_no_client(self):
        service = SummarizerService(api_key="", model="llama-3.1-8b-instant")

        assert service.client is None
        await service.close()

    @pytest.mark.asyncio
    async def test_rate_limit_error_is_classified(self, caplog):
        error = _status_error(openai.RateLimitError, 429, "Rate limit reached")
        service = _make_service(AsyncMock(side_effect=error))

        with caplog.at_level(logging.ERROR):
            with pytest.raises(RateLimitError) as exc_info:
                await service.summarize("text", "prompt")

        assert exc_info.value.status_code == 429
        assert exc_info.value.original_error is error
        assert "Summarization failed" in caplog.text

    @pytest.mark.asyncio
    async def test_generic_exception_keeps_message(self):
        service = _make_service(AsyncMock(side_effect=Exception("connection reset")))

        with pytest.raises(UpstreamError) as exc_info:
            await service.summarize("text", "prompt")

        assert type(exc_info.value) is UpstreamError
        assert exc_info.value.message == "Failed to generate summary: connection reset"
        assert exc_info.value.status_code == 500


class TestClassifyGenerationError:
    """Tests for mapping upstream failures onto the error taxonomy."""

    def test_insufficient_quota_code(self):
        error = _status_error(
            openai.RateLimitError, 429, "You exceeded your plan",
            body={"code": "insufficient_quota", "message": "You exceeded your plan"},
        )
        assert isinstance(classify_generation_error(error), QuotaExceededError)

    def test_rate_limit_without_quota_code(self):
        error = _status_error(
            openai.RateLimitError, 429, "Too many requests",
            body={"code": "rate_limit_exceeded"},
        )
        assert isinstance(classify_generation_error(error), RateLimitError)

    def test_authentication_error(self):
        error = _status_error(openai.AuthenticationError, 401, "Invalid API Key")
        result = classify_generation_error(error)
        assert isinstance(result, UpstreamAuthError)
        assert result.status_code == 401

    def test_substring_rate_limit(self):
        result = classify_generation_error(Exception("error code: rate_limit_exceeded"))
        assert isinstance(result, RateLimitError)

    def test_substring_quota(self):
        result = classify_generation_error(Exception("monthly quota reached"))
        assert isinstance(result, QuotaExceededError)
        assert result.message == "API quota exceeded. Please try again later."

    def test_substring_invalid_api_key(self):
        result = classify_generation_error(Exception("401: Invalid API Key"))
        assert isinstance(result, UpstreamAuthError)

    def test_unclassified_error(self):
        result = classify_generation_error(TimeoutError("request timed out"))
        assert type(result) is UpstreamError
        assert "request timed out" in result.message
