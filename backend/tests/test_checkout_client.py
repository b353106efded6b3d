"""
Tests for the checkout client.
"""

import requests
from unittest.mock import MagicMock

from app.cart.checkout_client import CheckoutClient
from app.cart.storage import MemoryStorage
from app.cart.store import CartStore
from app.models.cart import LineItem


def make_session(status_code=200, json_data=None, json_error=None):
    response = MagicMock()
    response.status_code = status_code
    if json_error:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    session = MagicMock()
    session.post.return_value = response
    return session


def make_store():
    store = CartStore(MemoryStorage())
    store.add_item({"id": "p1", "name": "Widget", "price": 9.99, "image": "x.png"})
    store.update_quantity("p1", 2)
    return store


class TestCheckoutClient:
    """Test posting carts to the checkout service."""

    def test_posts_cart_snapshot(self):
        """Test the cart items are posted to /create-checkout-session."""
        session = make_session(json_data={"url": "https://checkout.stripe.com/c/pay/cs_test_1"})
        client = CheckoutClient("http://localhost:3000/", session=session, timeout=5)

        client.create_checkout_session(make_store())

        session.post.assert_called_once_with(
            "http://localhost:3000/create-checkout-session",
            json={"items": [{"id": "p1", "name": "Widget", "price": 9.99, "image": "x.png", "quantity": 2}]},
            timeout=5
        )

    def test_success_response(self):
        """Test a response with url is a success."""
        session = make_session(json_data={"url": "https://checkout.stripe.com/c/pay/cs_test_1"})
        result = CheckoutClient("http://shop", session=session).create_checkout_session(make_store())

        assert result.success is True
        assert result.url == "https://checkout.stripe.com/c/pay/cs_test_1"
        assert result.error is None

    def test_error_response(self):
        """Test a response with error is a failure carrying the message."""
        session = make_session(500, {"error": "No items provided", "details": "trace"})
        result = CheckoutClient("http://shop", session=session).create_checkout_session([])

        assert result.success is False
        assert result.url is None
        assert result.error == "No items provided"
        assert result.details == "trace"

    def test_accepts_line_items(self):
        """Test a list of line items can be posted directly."""
        session = make_session(json_data={"url": "https://pay"})
        items = [LineItem(id="p1", name="Widget", unit_price=1.0, image="x.png", quantity=3)]

        CheckoutClient("http://shop", session=session).create_checkout_session(items)

        posted = session.post.call_args[1]["json"]
        assert posted["items"][0]["price"] == 1.0
        assert posted["items"][0]["quantity"] == 3

    def test_network_error(self):
        """Test network failures become a failed result instead of raising."""
        session = MagicMock()
        session.post.side_effect = requests.exceptions.ConnectionError("refused")

        result = CheckoutClient("http://shop", session=session).create_checkout_session(make_store())

        assert result.success is False
        assert "refused" in result.error

    def test_non_json_response(self):
        """Test non-JSON responses become a failed result."""
        session = make_session(502, json_error=ValueError("not json"))

        result = CheckoutClient("http://shop", session=session).create_checkout_session(make_store())

        assert result.success is False
        assert "502" in result.error
