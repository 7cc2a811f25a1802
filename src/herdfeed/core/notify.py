"""Alert notification sinks for underfed and missed animals."""

import logging
from typing import Protocol

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from herdfeed.core.config import settings
from herdfeed.core.errors import NotificationError, RetryableError

logger = logging.getLogger(__name__)

# =============================================================================
# Retry Configuration
# =============================================================================

MAX_RETRIES = 3
MIN_WAIT_SECONDS = 1
MAX_WAIT_SECONDS = 10
REQUEST_TIMEOUT_SECONDS = 15


def format_alert(count: int, group: str) -> str:
    """Human-readable alert text for an event with feeding issues."""
    noun = "issue" if count == 1 else "issues"
    return f"{count} {noun} detected in {group} group."


# =============================================================================
# Notifiers
# =============================================================================


class AlertNotifier(Protocol):
    """Anything that can be told how many animals in a group need attention."""

    async def notify(self, count: int, group: str) -> None: ...


class LogNotifier:
    """Writes the alert to the log instead of sending it anywhere."""

    def __init__(self, recipient: str | None = None):
        self.recipient = recipient or settings.admin_email

    async def notify(self, count: int, group: str) -> None:
        logger.warning("[SYSTEM ALERT] Alert for %s: %s", self.recipient, format_alert(count, group))


class WebhookNotifier:
    """POSTs alerts as JSON to an HTTP endpoint."""

    def __init__(self, url: str, recipient: str | None = None, timeout: float = REQUEST_TIMEOUT_SECONDS):
        self.url = url
        self.recipient = recipient or settings.admin_email
        self.timeout = timeout

    def build_payload(self, count: int, group: str) -> dict:
        return {
            "count": count,
            "group": group,
            "recipient": self.recipient,
            "message": format_alert(count, group),
        }

    async def send(self, payload: dict) -> httpx.Response:
        """Send a single request without retry.

        Raises:
            httpx.HTTPStatusError: If the endpoint answers with an error status
        """
        async with httpx.AsyncClient() as client:
            response = await client.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            return response

    @retry(
        retry=retry_if_exception_type(RetryableError),
        stop=stop_after_attempt(MAX_RETRIES),
        wait=wait_exponential_jitter(initial=MIN_WAIT_SECONDS, max=MAX_WAIT_SECONDS, jitter=2),
        reraise=True,
    )
    async def notify(self, count: int, group: str) -> None:
        """Deliver the alert, retrying on transient errors.

        Retries on:
        - Timeouts
        - Connection errors
        - HTTP 5xx errors

        Raises:
            RetryableError: If every attempt failed transiently
            NotificationError: If the endpoint rejected the alert (4xx)
        """
        try:
            await self.send(self.build_payload(count, group))
        except httpx.TimeoutException as e:
            raise RetryableError(f"Alert webhook timed out: {e}") from e
        except httpx.ConnectError as e:
            raise RetryableError(f"Alert webhook unreachable: {e}") from e
        except httpx.HTTPStatusError as e:
            body = e.response.text
            if e.response.status_code >= 500:
                raise RetryableError(f"HTTP {e.response.status_code}: {body}") from e
            raise NotificationError(f"HTTP {e.response.status_code}: {body}") from e

        logger.info("Alert delivered to %s (%d in %s)", self.url, count, group)


def get_notifier() -> AlertNotifier:
    """Build the notifier selected by settings."""
    if settings.alert_webhook_url:
        return WebhookNotifier(settings.alert_webhook_url)
    return LogNotifier()


async def dispatch_alert(notifier: AlertNotifier, count: int, group: str) -> bool:
    """Send an alert without letting a delivery failure escape.

    Returns:
        True if the notifier accepted the alert, False if it failed
    """
    try:
        await notifier.notify(count, group)
    except Exception as e:
        logger.error("Alert dispatch failed for %s group: %s", group, e)
        return False
    return True
