"""
Service layer for business logic.
"""

from services.webhooks import WebhookDispatcher, get_webhook_dispatcher, webhook_dispatcher

__all__ = [
    "WebhookDispatcher",
    "get_webhook_dispatcher",
    "webhook_dispatcher",
]
