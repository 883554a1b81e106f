"""
Fire-and-forget webhook delivery.

Deliveries run as detached asyncio tasks on the current event loop. The
request that triggers one never awaits it, and whatever happens to the
outbound call (timeout, connection error, non-2xx) is logged and dropped:
no retries, no propagation.

Usage::

    from services.webhooks import build_view_event, webhook_dispatcher

    webhook_dispatcher.dispatch(url, build_view_event(article.id, article.title, article.view_count))
"""

import asyncio
import logging
from datetime import UTC, datetime
from typing import Any

import httpx

from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)

NEWS_VIEWED_EVENT = "news.viewed"


def build_view_event(
    article_id: str,
    title: str,
    view_count: int,
    timestamp: datetime | None = None,
) -> dict[str, Any]:
    """Payload sent to a publisher when one of its articles is read."""
    timestamp = timestamp or datetime.now(UTC)
    return {
        "event": NEWS_VIEWED_EVENT,
        "timestamp": timestamp.isoformat(),
        "data": {
            "newsId": article_id,
            "newsTitle": title,
            "viewCount": view_count,
        },
    }


class WebhookDispatcher:
    """Launches and tracks best-effort webhook deliveries."""

    def __init__(
        self,
        timeout: float = 5.0,
        user_agent: str = "NewsAPI-Webhook/1.0",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._user_agent = user_agent
        self._transport = transport
        # Strong references so in-flight tasks are not garbage-collected
        self._in_flight: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of deliveries still running."""
        return len(self._in_flight)

    async def deliver(self, url: str, payload: dict[str, Any]) -> bool:
        """
        POST ``payload`` to ``url`` once.

        Returns:
            True if the endpoint answered 2xx, False on any failure
        """
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    url,
                    json=payload,
                    headers={
                        "Content-Type": "application/json",
                        "User-Agent": self._user_agent,
                    },
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Webhook delivery to %s rejected with HTTP %s",
                url,
                e.response.status_code,
            )
            return False
        except httpx.HTTPError as e:
            logger.warning("Webhook delivery to %s failed: %s: %s", url, type(e).__name__, e)
            return False
        except Exception as e:
            logger.error("Unexpected webhook delivery error for %s: %s", url, e, exc_info=True)
            return False

        logger.debug("Webhook delivered to %s (event=%s)", url, payload.get("event"))
        return True

    def dispatch(self, url: str | None, payload: dict[str, Any]) -> asyncio.Task | None:
        """
        Start a delivery in the background and return immediately.

        Does nothing when ``url`` is empty. The returned task is only for
        observation (tests, shutdown); callers must not await it on the
        request path.
        """
        if not url:
            return None

        task = asyncio.create_task(self.deliver(url, payload), name=f"webhook-{payload.get('event')}")
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    async def shutdown(self, grace_period: float = 5.0) -> int:
        """
        Wait up to ``grace_period`` seconds for in-flight deliveries, then
        cancel whatever is left.

        Returns:
            Number of deliveries cancelled
        """
        if not self._in_flight:
            return 0

        tasks = list(self._in_flight)
        _, still_running = await asyncio.wait(tasks, timeout=grace_period)
        for task in still_running:
            task.cancel()
        if still_running:
            await asyncio.gather(*still_running, return_exceptions=True)
            logger.warning("Cancelled %d webhook deliveries at shutdown", len(still_running))
        return len(still_running)


# Singleton instance
webhook_dispatcher = WebhookDispatcher(
    timeout=settings.webhook_timeout_seconds,
    user_agent=settings.webhook_user_agent,
)


def get_webhook_dispatcher() -> WebhookDispatcher:
    """Dependency returning the process-wide dispatcher."""
    return webhook_dispatcher
