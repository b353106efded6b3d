"""
Stripe API service.

Documentation: https://docs.stripe.com/api/checkout/sessions/create
"""

import asyncio
import functools
import logging
import traceback
from typing import Dict, Any, Optional, Tuple

import stripe

from app.config.checkout_config import CHECKOUT_CONFIG
from app.core.config import settings
from app.models.payment import PaymentSession, SessionResult

logger = logging.getLogger(__name__)


class StripeService:
    """Stripe Checkout service."""

    def __init__(
        self,
        secret_key: Optional[str] = None,
        webhook_secret: Optional[str] = None,
        timeout_seconds: Optional[float] = None
    ):
        self.secret_key = secret_key if secret_key is not None else settings.STRIPE_SECRET_KEY
        self.webhook_secret = webhook_secret if webhook_secret is not None else settings.STRIPE_WEBHOOK_SECRET
        self.timeout_seconds = timeout_seconds or CHECKOUT_CONFIG["provider_timeout_seconds"]

    async def create_checkout_session(self, params: Dict[str, Any]) -> SessionResult:
        """
        Create a hosted Stripe Checkout session.

        The SDK call is blocking; it runs in the default executor under a timeout.

        Args:
            params: Checkout session parameters in Stripe's request format

        Returns:
            SessionResult with the redirect URL, or the failure reason
        """
        try:
            loop = asyncio.get_running_loop()
            create = functools.partial(
                stripe.checkout.Session.create,
                api_key=self.secret_key or None,
                **params
            )
            session = await asyncio.wait_for(
                loop.run_in_executor(None, create),
                timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.error(f"Stripe session creation timed out after {self.timeout_seconds}s")
            return SessionResult.failed(
                f"Payment provider did not respond within {self.timeout_seconds:g} seconds",
                traceback.format_exc()
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe session creation failed: {str(e)}")
            return SessionResult.failed(e.user_message or str(e), traceback.format_exc())

        logger.info(f"Stripe session created: {session.id}")
        return SessionResult.ok(PaymentSession(session_id=session.id, url=session.url))

    def verify_webhook_signature(
        self,
        signature: Optional[str],
        payload: bytes
    ) -> Tuple[bool, Optional[str]]:
        """
        Verify a Stripe webhook signature over the exact raw request body.

        Args:
            signature: Value of the `stripe-signature` header
            payload: Raw request body, not yet parsed

        Returns:
            Tuple of (is_valid, failure_reason)
        """
        if not self.webhook_secret:
            logger.error("STRIPE_WEBHOOK_SECRET is not configured, rejecting webhook")
            return False, "Webhook secret is not configured"

        if not signature:
            return False, "Missing stripe-signature header"

        try:
            body = payload.decode("utf-8")
        except UnicodeDecodeError:
            return False, "Payload is not valid UTF-8"

        try:
            stripe.WebhookSignature.verify_header(
                body, signature, self.webhook_secret, tolerance=stripe.Webhook.DEFAULT_TOLERANCE
            )
        except stripe.SignatureVerificationError as e:
            return False, str(e.user_message or e)
        except (ValueError, IndexError):
            return False, "Malformed stripe-signature header"

        return True, None
