"""
Checkout configuration for hosted Stripe Checkout sessions.

Business policy (currency, shipping countries, shipping tiers, redirect pages)
lives here as constants that can be overridden through the environment.
"""

import os
from typing import Dict, Any, List


def _split_countries(raw: str) -> List[str]:
    return [code.strip().upper() for code in raw.split(",") if code.strip()]


# Checkout configuration
CHECKOUT_CONFIG: Dict[str, Any] = {
    "currency": os.getenv("CHECKOUT_CURRENCY", "eur"),
    "currency_symbol": os.getenv("CHECKOUT_CURRENCY_SYMBOL", "€"),
    "payment_method_types": ["card"],
    "mode": "payment",  # one-time payment, not a subscription

    # Shipping address collection (Spain and Germany)
    "allowed_countries": _split_countries(os.getenv("CHECKOUT_ALLOWED_COUNTRIES", "ES,DE")),

    # Shipping tiers (amounts in cents)
    "shipping_rates": [
        {
            "display_name": "Standard Shipping",
            "amount": int(os.getenv("CHECKOUT_STANDARD_SHIPPING_AMOUNT", "500")),
            "min_business_days": 5,
            "max_business_days": 7
        },
        {
            "display_name": "Express Shipping",
            "amount": int(os.getenv("CHECKOUT_EXPRESS_SHIPPING_AMOUNT", "1000")),
            "min_business_days": 1,
            "max_business_days": 2
        }
    ],

    # Redirect pages, resolved against the requesting host
    "success_path": "/success.html",
    "cancel_path": "/shop.html",

    # Outbound provider call
    "provider_timeout_seconds": float(os.getenv("CHECKOUT_PROVIDER_TIMEOUT_SECONDS", "30"))
}


def get_allowed_countries() -> List[str]:
    """Countries accepted by shipping address collection."""
    return list(CHECKOUT_CONFIG["allowed_countries"])


def get_shipping_options() -> List[Dict[str, Any]]:
    """
    Build Stripe `shipping_options` from the configured shipping tiers.

    Returns:
        List of shipping option dictionaries in Stripe's request format
    """
    currency = CHECKOUT_CONFIG["currency"]
    options = []

    for rate in CHECKOUT_CONFIG["shipping_rates"]:
        options.append({
            "shipping_rate_data": {
                "type": "fixed_amount",
                "fixed_amount": {
                    "amount": rate["amount"],
                    "currency": currency
                },
                "display_name": rate["display_name"],
                "delivery_estimate": {
                    "minimum": {"unit": "business_day", "value": rate["min_business_days"]},
                    "maximum": {"unit": "business_day", "value": rate["max_business_days"]}
                }
            }
        })

    return options


def build_redirect_urls(base_url: str) -> Dict[str, str]:
    """
    Resolve success and cancel pages against the requesting host.

    Args:
        base_url: Scheme and host of the incoming request (e.g. "https://shop.example")

    Returns:
        Dictionary with success_url and cancel_url
    """
    base = base_url.rstrip("/")
    return {
        "success_url": f"{base}{CHECKOUT_CONFIG['success_path']}",
        "cancel_url": f"{base}{CHECKOUT_CONFIG['cancel_path']}"
    }
