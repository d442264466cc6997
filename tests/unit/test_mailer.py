"""Tests for the SMTP mailer."""

from unittest.mock import AsyncMock, patch

import aiosmtplib
import pytest

from meetingnotes.errors import DeliveryError
from meetingnotes.infrastructure.mailer import Mailer


def _make_mailer() -> Mailer:
    return Mailer(
        hostname="smtp.example.com",
        port=465,
        username="notes@example.com",
        password="secret",
        use_tls=True,
        timeout_seconds=5,
    )


class TestBuildMessage:
    """Tests for message composition."""

    def test_headers_and_body(self):
        message = _make_mailer().build_message("bob@example.com", "Meeting Summary", "Hello")

        assert message["From"] == "notes@example.com"
        assert message["To"] == "bob@example.com"
        assert message["Subject"] == "Meeting Summary"
        assert message.get_content_type() == "text/plain"
        assert message.get_content().strip() == "Hello"

    def test_explicit_sender(self):
        mailer = Mailer(hostname="smtp.example.com", username="relay", sender="team@example.com")
        message = mailer.build_message("bob@example.com", "s", "b")
        assert message["From"] == "team@example.com"


class TestSend:
    """Tests for Mailer.send."""

    @pytest.mark.asyncio
    async def test_sends_through_relay(self):
        with patch("meetingnotes.infrastructure.mailer.aiosmtplib.send", new=AsyncMock()) as send:
            await _make_mailer().send("bob@example.com", "Meeting Summary", "Hello")

        send.assert_awaited_once()
        message = send.call_args.args[0]
        kwargs = send.call_args.kwargs
        assert message["To"] == "bob@example.com"
        assert kwargs["hostname"] == "smtp.example.com"
        assert kwargs["port"] == 465
        assert kwargs["username"] == "notes@example.com"
        assert kwargs["use_tls"] is True
        assert kwargs["timeout"] == 5

    @pytest.mark.asyncio
    async def test_smtp_failure_raises_delivery_error(self):
        failure = aiosmtplib.SMTPException("relay refused")
        with patch(
            "meetingnotes.infrastructure.mailer.aiosmtplib.send",
            new=AsyncMock(side_effect=failure),
        ):
            with pytest.raises(DeliveryError) as exc_info:
                await _make_mailer().send("bob@example.com", "s", "b")

        assert exc_info.value.failed_recipient == "bob@example.com"
        assert exc_info.value.original_error is failure

    @pytest.mark.asyncio
    async def test_connection_failure_raises_delivery_error(self):
        with patch(
            "meetingnotes.infrastructure.mailer.aiosmtplib.send",
            new=AsyncMock(side_effect=ConnectionRefusedError("no relay")),
        ):
            with pytest.raises(DeliveryError):
                await _make_mailer().send("bob@example.com", "s", "b")
