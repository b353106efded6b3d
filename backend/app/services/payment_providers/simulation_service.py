"""
Simulation service for checkout without real Stripe API calls.

This service is used in SIMULATION mode for local development and testing.
Sessions are created locally and redirect straight to the success page.
"""

import secrets
import logging
from typing import Dict, Any

from app.models.payment import PaymentSession, SessionResult
from app.utils.helpers import format_price

logger = logging.getLogger(__name__)


class SimulationService:
    """Checkout session simulation service."""

    @staticmethod
    async def create_checkout_session(params: Dict[str, Any]) -> SessionResult:
        """
        Simulate checkout session creation.

        Args:
            params: Checkout session parameters in Stripe's request format

        Returns:
            SessionResult pointing at the success page with a fake session id
        """
        session_id = f"cs_sim_{secrets.token_hex(12)}"

        total_cents = sum(
            line["price_data"]["unit_amount"] * line["quantity"]
            for line in params.get("line_items", [])
        )
        logger.info(
            f"[SIMULATION] Created session {session_id} for "
            f"{len(params.get('line_items', []))} line items, total {format_price(total_cents / 100, '')}"
        )

        url = f"{params['success_url']}?session_id={session_id}"
        return SessionResult.ok(PaymentSession(session_id=session_id, url=url))
