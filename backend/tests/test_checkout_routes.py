"""
Tests for the HTTP surface: health, checkout session and error handling.
"""

import pytest
import stripe
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from app.api.deps import get_checkout_service
from app.core.config import settings
from app.main import app
from app.services.checkout_service import CheckoutService
from app.services.payment_providers.stripe_service import StripeService


WIDGET = {"id": "p1", "name": "Widget", "price": 9.99, "image": "x.png", "quantity": 2}


def fake_session():
    session = MagicMock()
    session.id = "cs_test_123"
    session.url = "https://checkout.stripe.com/c/pay/cs_test_123"
    return session


@pytest.fixture
def client():
    app.dependency_overrides[get_checkout_service] = lambda: CheckoutService(
        StripeService(secret_key="sk_test_x"),
        payment_mode="STRIPE"
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:
    """Test service endpoints."""

    def test_health(self, client):
        """Test the health check."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_root(self, client):
        """Test the root endpoint describes the service."""
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["health"] == "/health"

    def test_config_exposes_publishable_key_only(self, client):
        """Test the browser config carries the publishable key and nothing secret."""
        with patch.object(settings, "STRIPE_PUBLISHABLE_KEY", "pk_test_abc"):
            response = client.get("/config")

        assert response.json() == {"publishableKey": "pk_test_abc"}


class TestCreateCheckoutSession:
    """Test POST /create-checkout-session."""

    def test_success(self, client):
        """Test a valid cart returns the redirect URL."""
        with patch("stripe.checkout.Session.create", return_value=fake_session()) as mock_create:
            response = client.post("/create-checkout-session", json={"items": [WIDGET]})

        assert response.status_code == 200
        assert response.json() == {"url": "https://checkout.stripe.com/c/pay/cs_test_123"}

        kwargs = mock_create.call_args[1]
        assert kwargs["line_items"][0]["price_data"]["unit_amount"] == 999
        assert kwargs["line_items"][0]["quantity"] == 2
        assert kwargs["success_url"] == "http://testserver/success.html"
        assert kwargs["cancel_url"] == "http://testserver/shop.html"

    def test_redirects_follow_request_host(self, client):
        """Test redirect URLs are built from the Host header."""
        with patch("stripe.checkout.Session.create", return_value=fake_session()) as mock_create:
            client.post(
                "/create-checkout-session",
                json={"items": [WIDGET]},
                headers={"host": "shop.example:8080"}
            )

        assert mock_create.call_args[1]["success_url"] == "http://shop.example:8080/success.html"

    @pytest.mark.parametrize("body", [{"items": []}, {}, {"items": "nope"}])
    def test_empty_or_missing_items(self, client, body):
        """Test empty or missing items return a 500 error response."""
        with patch("stripe.checkout.Session.create") as mock_create:
            response = client.post("/create-checkout-session", json=body)

        assert response.status_code == 500
        assert response.json()["error"] == "No items provided"
        assert "url" not in response.json()
        mock_create.assert_not_called()

    def test_invalid_json_body(self, client):
        """Test a body that is not JSON is treated as missing items."""
        response = client.post(
            "/create-checkout-session",
            content=b"items=1",
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 500
        assert response.json()["error"] == "No items provided"

    def test_provider_error_includes_details_in_development(self, client):
        """Test provider failures carry diagnostics outside production."""
        error = stripe.AuthenticationError("Invalid API Key provided")

        with patch.object(settings, "ENVIRONMENT", "development"), \
                patch("stripe.checkout.Session.create", side_effect=error):
            response = client.post("/create-checkout-session", json={"items": [WIDGET]})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Invalid API Key provided"
        assert "AuthenticationError" in body["details"]

    def test_provider_error_hides_details_in_production(self, client):
        """Test diagnostics are suppressed in production."""
        error = stripe.AuthenticationError("Invalid API Key provided")

        with patch.object(settings, "ENVIRONMENT", "production"), \
                patch("stripe.checkout.Session.create", side_effect=error):
            response = client.post("/create-checkout-session", json={"items": [WIDGET]})

        assert response.status_code == 500
        assert response.json() == {"error": "Invalid API Key provided"}


class TestUnhandledErrors:
    """Test the catch-all error handler."""

    def test_unexpected_failure_returns_generic_error(self):
        """Test unexpected exceptions become a generic 500 response."""
        broken = MagicMock()
        broken.create_session.side_effect = RuntimeError("unexpected")
        app.dependency_overrides[get_checkout_service] = lambda: broken

        try:
            with patch.object(settings, "ENVIRONMENT", "development"):
                response = TestClient(app, raise_server_exceptions=False).post(
                    "/create-checkout-session",
                    json={"items": [WIDGET]}
                )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Something went wrong!"
        assert "RuntimeError: unexpected" in body["details"]

    def test_unexpected_failure_hides_details_in_production(self):
        """Test the generic error omits diagnostics in production."""
        broken = MagicMock()
        broken.create_session.side_effect = RuntimeError("unexpected")
        app.dependency_overrides[get_checkout_service] = lambda: broken

        try:
            with patch.object(settings, "ENVIRONMENT", "production"):
                response = TestClient(app, raise_server_exceptions=False).post(
                    "/create-checkout-session",
                    json={"items": [WIDGET]}
                )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"error": "Something went wrong!"}
