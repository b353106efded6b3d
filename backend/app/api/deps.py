from functools import lru_cache

from app.services.checkout_service import CheckoutService
from app.services.webhook_service import WebhookService


@lru_cache
def get_checkout_service() -> CheckoutService:
    """Dependency to get the checkout service."""
    return CheckoutService()


@lru_cache
def get_webhook_service() -> WebhookService:
    """Dependency to get the webhook service."""
    return WebhookService()
