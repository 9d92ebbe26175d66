"""
Unit tests for outbound email senders
"""
import json
import logging
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi import BackgroundTasks

from config import ApplicationConfig
from src.adapter.services.email_sender import (
    BackgroundEmailSender,
    HttpEmailSender,
    LoggingEmailSender,
    build_email_sender,
)


@pytest.mark.asyncio
async def test_http_sender_posts_reset_email():
    captured = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"succeeded": 1})

    sender = HttpEmailSender(
        api_url="https://mail.example.com/",
        api_key="key-123",
        sender="noreply@example.com",
        transport=httpx.MockTransport(handler),
    )

    await sender.send_password_reset(
        "alice@example.com", "http://localhost:3000/reset-password?token=abc"
    )

    assert len(captured) == 1
    request = captured[0]
    assert str(request.url) == "https://mail.example.com/email/send"
    payload = json.loads(request.content)
    assert payload["to"] == ["alice@example.com"]
    assert payload["sender"] == "noreply@example.com"
    assert "reset-password?token=abc" in payload["text_body"]


@pytest.mark.asyncio
async def test_http_sender_raises_on_rejection():
    sender = HttpEmailSender(
        api_url="https://mail.example.com",
        api_key="key-123",
        sender="noreply@example.com",
        transport=httpx.MockTransport(lambda request: httpx.Response(500)),
    )

    with pytest.raises(httpx.HTTPStatusError):
        await sender.send_account_deleted("alice@example.com")


@pytest.mark.asyncio
async def test_logging_sender_logs_message(caplog):
    sender = LoggingEmailSender()

    with caplog.at_level(logging.INFO, logger="src.adapter.services.email_sender"):
        await sender.send_password_reset("alice@example.com", "http://link")

    assert any(record.to == "alice@example.com" for record in caplog.records)


def test_build_email_sender_selects_backend(monkeypatch):
    monkeypatch.setattr(ApplicationConfig, "EMAIL_BACKEND", "log")
    assert isinstance(build_email_sender(), LoggingEmailSender)

    monkeypatch.setattr(ApplicationConfig, "EMAIL_BACKEND", "http")
    monkeypatch.setattr(ApplicationConfig, "EMAIL_API_URL", "https://mail.example.com")
    assert isinstance(build_email_sender(), HttpEmailSender)


@pytest.mark.asyncio
async def test_background_sender_defers_delivery():
    inner = MagicMock()
    inner.send_password_reset = AsyncMock()
    tasks = BackgroundTasks()
    sender = BackgroundEmailSender(inner, tasks)

    await sender.send_password_reset("alice@example.com", "http://link")

    inner.send_password_reset.assert_not_called()

    await tasks()

    inner.send_password_reset.assert_called_once_with("alice@example.com", "http://link")


@pytest.mark.asyncio
async def test_background_sender_logs_delivery_failure(caplog):
    inner = MagicMock()
    inner.send_account_deleted = AsyncMock(side_effect=httpx.ConnectError("down"))
    tasks = BackgroundTasks()
    sender = BackgroundEmailSender(inner, tasks)

    await sender.send_account_deleted("alice@example.com")
    with caplog.at_level(logging.ERROR, logger="src.adapter.services.email_sender"):
        await tasks()

    assert "Background email delivery failed" in caplog.text
