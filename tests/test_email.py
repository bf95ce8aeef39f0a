"""이메일 구성/발송 서비스 테스트.

Tests for MIME composition and the email service implementations.
"""

import logging

import pytest

from bookstore.config import settings
from bookstore.services import email_service as email_module
from bookstore.services.email_service import (
    MockEmailService,
    SmtpEmailService,
    get_email_service,
    welcome,
)
from bookstore.utils.email import compose_message


class _Member:
    name = "Lee Jiwon"
    email = "jiwon@example.com"


class TestComposeMessage:
    def test_multipart_with_text_and_html(self):
        """텍스트 + HTML 두 파트."""
        msg = compose_message("reader@example.com", "Hello", "<b>hi</b>", "hi")
        assert msg["To"] == "reader@example.com"
        assert msg["Subject"] == "Hello"
        parts = msg.get_payload()
        assert [p.get_content_type() for p in parts] == ["text/plain", "text/html"]

    def test_html_only(self):
        msg = compose_message("reader@example.com", "Hello", "<b>hi</b>")
        assert [p.get_content_type() for p in msg.get_payload()] == ["text/html"]


class TestEmailServices:
    async def test_mock_records_welcome(self):
        service = MockEmailService()
        await service.send_welcome(_Member())
        assert service.sent[0].to == "jiwon@example.com"
        assert service.sent[0].subject == welcome(_Member())[0]

    async def test_smtp_sends_welcome(self, monkeypatch):
        """SMTP 구현 — send_email 호출 인자 확인."""
        calls = []

        async def fake_send(to, subject, html, text=None):
            calls.append((to, subject, html, text))

        monkeypatch.setattr(email_module, "send_email", fake_send)
        await SmtpEmailService().send_welcome(_Member())
        assert calls[0][0] == "jiwon@example.com"
        assert calls[0][3].startswith("Hello Lee Jiwon")

    async def test_smtp_skips_without_recipient(self, monkeypatch, caplog):
        async def fake_send(*args, **kwargs):
            pytest.fail("send_email must not be called")

        monkeypatch.setattr(email_module, "send_email", fake_send)
        with caplog.at_level(logging.WARNING, logger="bookstore.services.email_service"):
            await SmtpEmailService()._deliver("", "Order shipped", "body")
        assert "no recipient" in caplog.text

    def test_factory_follows_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "EMAIL_SMTP_ENABLED", True)
        assert isinstance(get_email_service(), SmtpEmailService)
        monkeypatch.setattr(settings, "EMAIL_SMTP_ENABLED", False)
        assert isinstance(get_email_service(), MockEmailService)
