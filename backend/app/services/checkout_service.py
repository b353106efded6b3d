"""
Checkout service - turns a cart snapshot into a hosted payment session.

Pricing, fraud checks and payment capture are left to the payment provider;
this service only builds the session request and picks the provider.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from app.config.checkout_config import (
    CHECKOUT_CONFIG,
    build_redirect_urls,
    get_allowed_countries,
    get_shipping_options
)
from app.core.config import settings
from app.models.payment import SessionResult
from app.schemas.checkout import CheckoutItem, CheckoutRequest
from app.services.payment_providers.simulation_service import SimulationService
from app.services.payment_providers.stripe_service import StripeService
from app.utils.helpers import to_minor_units

logger = logging.getLogger(__name__)


class CheckoutService:
    """Builds checkout session requests and delegates them to the provider."""

    def __init__(
        self,
        stripe_service: Optional[StripeService] = None,
        payment_mode: Optional[str] = None
    ):
        self.stripe_service = stripe_service or StripeService()
        self.simulation_service = SimulationService()
        self.payment_mode = (payment_mode or settings.PAYMENT_MODE).upper()

    @staticmethod
    def build_line_items(items: List[CheckoutItem]) -> List[Dict[str, Any]]:
        """Convert checkout items to Stripe line items (amounts in cents)."""
        currency = CHECKOUT_CONFIG["currency"]
        return [
            {
                "price_data": {
                    "currency": currency,
                    "product_data": {
                        "name": item.name,
                        "images": [item.image]
                    },
                    "unit_amount": to_minor_units(item.unit_price)
                },
                "quantity": item.quantity or 1
            }
            for item in items
        ]

    @staticmethod
    def build_session_params(items: List[CheckoutItem], base_url: str) -> Dict[str, Any]:
        """
        Build the full checkout session request.

        Args:
            items: Validated checkout items
            base_url: Scheme and host of the incoming request

        Returns:
            Checkout session parameters in Stripe's request format
        """
        return {
            "payment_method_types": list(CHECKOUT_CONFIG["payment_method_types"]),
            "line_items": CheckoutService.build_line_items(items),
            "mode": CHECKOUT_CONFIG["mode"],
            **build_redirect_urls(base_url),
            "shipping_address_collection": {
                "allowed_countries": get_allowed_countries()
            },
            "shipping_options": get_shipping_options()
        }

    @staticmethod
    def parse_request(payload: Any) -> CheckoutRequest:
        """
        Validate the raw request body.

        Raises:
            ValueError: If items are missing, not a list, empty or malformed
        """
        items = payload.get("items") if isinstance(payload, dict) else None
        if not items or not isinstance(items, list):
            raise ValueError("No items provided")

        try:
            return CheckoutRequest.model_validate({"items": items})
        except ValidationError as e:
            raise ValueError(f"Invalid items: {e.error_count()} validation errors") from e

    async def create_session(self, payload: Any, base_url: str) -> SessionResult:
        """
        Create a checkout session for a cart snapshot.

        Args:
            payload: Decoded request body, expected to be {"items": [...]}
            base_url: Scheme and host of the incoming request

        Returns:
            SessionResult with the redirect URL or the failure reason
        """
        try:
            request = self.parse_request(payload)
        except ValueError as e:
            cause = e.__cause__
            logger.warning(f"Rejected checkout request: {str(e)}")
            return SessionResult.failed(str(e), str(cause) if cause else None)

        params = self.build_session_params(request.items, base_url)
        logger.info(f"Creating checkout session with {len(params['line_items'])} line items")

        if self.payment_mode == "SIMULATION":
            return await self.simulation_service.create_checkout_session(params)

        return await self.stripe_service.create_checkout_session(params)
