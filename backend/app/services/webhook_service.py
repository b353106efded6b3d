"""
Webhook service - receives payment notifications from Stripe.

The signature is checked over the raw body before anything is parsed. Handling
is stateless, so retried or out-of-order deliveries are harmless.
"""

import json
import logging
from typing import Any, Dict, Optional

from app.models.payment import CustomerDetails, WebhookResult
from app.services.payment_providers.stripe_service import StripeService

logger = logging.getLogger(__name__)

CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"


def extract_customer_details(session: Dict[str, Any]) -> CustomerDetails:
    """Pull email, name and shipping details out of a checkout session object."""
    customer = session.get("customer_details") or {}
    shipping = session.get("shipping_details")
    if shipping is None:
        # Newer API versions nest shipping under collected_information
        shipping = (session.get("collected_information") or {}).get("shipping_details")

    return CustomerDetails(
        email=customer.get("email"),
        name=customer.get("name"),
        shipping=shipping
    )


class WebhookService:
    """Verifies and dispatches Stripe webhook events."""

    def __init__(self, stripe_service: Optional[StripeService] = None):
        self.stripe_service = stripe_service or StripeService()

    async def process_webhook(self, payload: bytes, signature: Optional[str]) -> WebhookResult:
        """
        Process a webhook delivery.

        Args:
            payload: Raw request body
            signature: `stripe-signature` header value

        Returns:
            WebhookResult; success is False only when the delivery is rejected
        """
        is_valid, reason = self.stripe_service.verify_webhook_signature(signature, payload)
        if not is_valid:
            logger.warning(f"Webhook Error: {reason}")
            return WebhookResult(success=False, message=reason or "Invalid signature")

        try:
            event = json.loads(payload)
        except ValueError:
            logger.warning("Webhook Error: verified payload is not valid JSON")
            return WebhookResult(success=False, message="Invalid payload")

        if not isinstance(event, dict):
            return WebhookResult(success=False, message="Invalid payload")

        event_id = event.get("id")
        event_type = event.get("type")
        logger.info(f"Received webhook event {event_id} ({event_type})")

        if event_type != CHECKOUT_SESSION_COMPLETED:
            logger.info(f"Ignoring unhandled event type {event_type}")
            return WebhookResult(
                success=True,
                message="Event ignored",
                event_id=event_id,
                event_type=event_type
            )

        data = event.get("data")
        session = data.get("object") if isinstance(data, dict) else None
        if not isinstance(session, dict):
            logger.warning(f"Webhook Error: event {event_id} has no checkout session object")
            return WebhookResult(
                success=False,
                message="Invalid payload",
                event_id=event_id,
                event_type=event_type
            )

        session_id = session.get("id")
        customer = extract_customer_details(session)
        logger.info(f"Payment successful for session: {session_id}")

        try:
            await self.fulfill_order(session_id, customer)
        except Exception:
            # Accepted events are acknowledged whatever fulfillment does
            logger.exception(f"Fulfillment failed for session {session_id}")

        return WebhookResult(
            success=True,
            message="Event processed",
            event_id=event_id,
            event_type=event_type,
            session_id=session_id,
            customer=customer
        )

    async def fulfill_order(self, session_id: Optional[str], customer: CustomerDetails) -> None:
        """
        Fulfillment hook for completed payments.

        Order fulfillment, confirmation emails and inventory are not handled
        here; the customer details are only logged.
        """
        logger.info(f"Customer details for session {session_id}: {customer.model_dump()}")
