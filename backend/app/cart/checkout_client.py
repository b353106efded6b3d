"""
Checkout client.

Sends a snapshot of the cart to the checkout service and returns the redirect
URL of the hosted payment page.
"""

import logging
from typing import Any, Dict, List, Optional, Union

import requests

from app.cart.store import CartStore
from app.models.cart import LineItem
from app.models.payment import SessionResult

logger = logging.getLogger(__name__)


class CheckoutClient:
    """HTTP client for `POST /create-checkout-session`."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 30
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    @staticmethod
    def _payload(cart: Union[CartStore, List[LineItem], List[Dict[str, Any]]]) -> Dict[str, Any]:
        if isinstance(cart, CartStore):
            return cart.snapshot()
        return {
            "items": [
                item.model_dump(by_alias=True) if isinstance(item, LineItem) else dict(item)
                for item in cart
            ]
        }

    def create_checkout_session(
        self,
        cart: Union[CartStore, List[LineItem], List[Dict[str, Any]]]
    ) -> SessionResult:
        """
        Request a hosted checkout session for the cart.

        Args:
            cart: Cart store or list of line items, copied at call time

        Returns:
            SessionResult with `url` on success, `error` otherwise
        """
        payload = self._payload(cart)
        url = f"{self.base_url}/create-checkout-session"

        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Checkout request failed: {str(e)}")
            return SessionResult.failed(f"Checkout request failed: {str(e)}")

        try:
            data = response.json()
        except ValueError:
            logger.error(f"Checkout service returned a non-JSON response ({response.status_code})")
            return SessionResult.failed(f"Unexpected response from checkout service ({response.status_code})")

        if isinstance(data, dict) and data.get("url"):
            return SessionResult(success=True, url=data["url"])

        error = data.get("error") if isinstance(data, dict) else None
        details = data.get("details") if isinstance(data, dict) else None
        logger.warning(f"Checkout session was not created: {error}")
        return SessionResult.failed(error or f"Checkout failed ({response.status_code})", details)
