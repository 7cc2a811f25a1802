"""Tests for alert notifiers."""

import json
import logging

import httpx
import pytest
from conftest import WEBHOOK_URL
from tenacity import wait_none

from herdfeed.core import notify
from herdfeed.core.errors import NotificationError, RetryableError
from herdfeed.core.notify import LogNotifier, WebhookNotifier, dispatch_alert, format_alert, get_notifier


@pytest.fixture
def no_retry_wait(monkeypatch):
    """Skip the backoff sleeps between webhook retries."""
    monkeypatch.setattr(WebhookNotifier.notify.retry, "wait", wait_none())


class TestFormatAlert:
    def test_plural(self):
        assert format_alert(2, "Grower") == "2 issues detected in Grower group."

    def test_singular(self):
        assert format_alert(1, "Piglet") == "1 issue detected in Piglet group."


class TestLogNotifier:
    """Tests for the log-only notifier."""

    async def test_logs_alert(self, caplog):
        with caplog.at_level(logging.WARNING, logger="herdfeed"):
            await LogNotifier(recipient="vet@farm.test").notify(3, "Grower")

        assert "vet@farm.test" in caplog.text
        assert "3 issues detected in Grower group." in caplog.text

    def test_defaults_to_admin_email(self):
        assert LogNotifier().recipient == notify.settings.admin_email


class TestWebhookNotifier:
    """Tests for the HTTP webhook notifier."""

    async def test_posts_json_payload(self, mock_webhook):
        route = mock_webhook.post("/hooks/herd").mock(return_value=httpx.Response(204))

        await WebhookNotifier(WEBHOOK_URL, recipient="vet@farm.test").notify(2, "Grower")

        assert route.call_count == 1
        body = json.loads(route.calls[0].request.content)
        assert body == {
            "count": 2,
            "group": "Grower",
            "recipient": "vet@farm.test",
            "message": "2 issues detected in Grower group.",
        }

    async def test_retries_server_errors(self, mock_webhook, no_retry_wait):
        route = mock_webhook.post("/hooks/herd").mock(
            side_effect=[httpx.Response(503), httpx.Response(502), httpx.Response(200)]
        )

        await WebhookNotifier(WEBHOOK_URL).notify(1, "Piglet")

        assert route.call_count == 3

    async def test_gives_up_after_max_retries(self, mock_webhook, no_retry_wait):
        route = mock_webhook.post("/hooks/herd").mock(return_value=httpx.Response(500, text="boom"))

        with pytest.raises(RetryableError, match="HTTP 500"):
            await WebhookNotifier(WEBHOOK_URL).notify(1, "Piglet")

        assert route.call_count == notify.MAX_RETRIES

    async def test_retries_connection_errors(self, mock_webhook, no_retry_wait):
        route = mock_webhook.post("/hooks/herd").mock(
            side_effect=[httpx.ConnectError("refused"), httpx.Response(200)]
        )

        await WebhookNotifier(WEBHOOK_URL).notify(1, "Adult")

        assert route.call_count == 2

    async def test_client_error_not_retried(self, mock_webhook):
        route = mock_webhook.post("/hooks/herd").mock(return_value=httpx.Response(401, text="bad token"))

        with pytest.raises(NotificationError, match="bad token"):
            await WebhookNotifier(WEBHOOK_URL).notify(1, "Adult")

        assert route.call_count == 1


class TestGetNotifier:
    """Tests for notifier selection from settings."""

    def test_log_by_default(self, monkeypatch):
        monkeypatch.setattr(notify.settings, "alert_webhook_url", None)
        assert isinstance(get_notifier(), LogNotifier)

    def test_webhook_when_configured(self, monkeypatch):
        monkeypatch.setattr(notify.settings, "alert_webhook_url", WEBHOOK_URL)
        notifier = get_notifier()
        assert isinstance(notifier, WebhookNotifier)
        assert notifier.url == WEBHOOK_URL


class TestDispatchAlert:
    """Tests for fire-and-forget dispatch."""

    async def test_success(self, notifier):
        assert await dispatch_alert(notifier, 2, "Grower") is True
        assert notifier.calls == [(2, "Grower")]

    async def test_failure_is_logged_not_raised(self, failing_notifier, caplog):
        with caplog.at_level(logging.ERROR, logger="herdfeed"):
            assert await dispatch_alert(failing_notifier, 2, "Grower") is False

        assert "mail server down" in caplog.text
