"""
Tests for outbound email and the notification queue
"""

import json

import httpx
import pytest

from visitswap.services import notifications
from visitswap.services.mailer import MailerService
from visitswap.services.notifications import QueuedNotifier
from visitswap.workers.config import parse_redis_url
from visitswap.workers.tasks import send_email


class FakePool:
    def __init__(self):
        self.jobs = []
        self.closed = False

    async def enqueue_job(self, name, *args):
        self.jobs.append((name, args))

    async def aclose(self):
        self.closed = True


def mailer_with(handler):
    return MailerService(
        api_url="https://mail.test/emails",
        api_key="key-123",
        sender="VisitSwap <no-reply@visitswap.test>",
        transport=httpx.MockTransport(handler),
    )


class TestMailer:

    @pytest.mark.asyncio
    async def test_posts_message(self):
        captured = {}

        def handler(request):
            captured["auth"] = request.headers["Authorization"]
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json={"id": "msg_1"})

        result = await mailer_with(handler).send("ana@example.com", "Hello", "<p>hi</p>")

        assert result.success
        assert result.message_id == "msg_1"
        assert captured["auth"] == "Bearer key-123"
        assert captured["body"]["to"] == ["ana@example.com"]
        assert captured["body"]["subject"] == "Hello"

    @pytest.mark.asyncio
    async def test_rejected_message_is_reported(self):
        result = await mailer_with(lambda request: httpx.Response(422, text="bad sender")).send(
            "ana@example.com", "Hello", "<p>hi</p>"
        )

        assert not result.success
        assert result.error == "HTTP 422"

    @pytest.mark.asyncio
    async def test_unconfigured_mailer_drops_email(self):
        mailer = MailerService()
        mailer.api_url = None

        result = await mailer.send("ana@example.com", "Hello", "<p>hi</p>")

        assert not result.success

    @pytest.mark.asyncio
    async def test_worker_task_uses_context_mailer(self):
        ctx = {"mailer": mailer_with(lambda request: httpx.Response(202, json={"id": "msg_2"}))}

        assert await send_email(ctx, "ana@example.com", "Hello", "<p>hi</p>") == {
            "success": True,
            "message_id": "msg_2",
        }


class TestQueuedNotifier:

    @pytest.mark.asyncio
    async def test_enqueues_verification_link(self, monkeypatch):
        pool = FakePool()

        async def fake_create_pool(settings):
            return pool

        monkeypatch.setattr(notifications, "create_pool", fake_create_pool)

        sent = await QueuedNotifier(parse_redis_url("redis://localhost:6379/0")).send_verification(
            "ana@example.com", "tok123"
        )

        assert sent is True
        assert pool.closed
        name, (to, subject, html) = pool.jobs[0]
        assert name == "send_email"
        assert to == "ana@example.com"
        assert "http://frontend.test/verify/tok123" in html

    @pytest.mark.asyncio
    async def test_queue_failure_is_not_raised(self, monkeypatch):
        async def broken_create_pool(settings):
            raise ConnectionError("redis down")

        monkeypatch.setattr(notifications, "create_pool", broken_create_pool)

        sent = await QueuedNotifier(parse_redis_url("redis://localhost:6379")).send_password_reset(
            "ana@example.com", "tok456"
        )

        assert sent is False


def test_parse_redis_url():
    parsed = parse_redis_url("redis://:pw@cache.internal:6380/2")

    assert (parsed.host, parsed.port, parsed.password, parsed.database) == ("cache.internal", 6380, "pw", 2)
