"""
Checkout API routes.

Creates hosted Stripe Checkout sessions from a cart snapshot and exposes the
publishable key to the browser.
"""

import logging
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.api.deps import get_checkout_service
from app.core.config import settings
from app.schemas.checkout import CheckoutErrorResponse, CheckoutSessionResponse
from app.services.checkout_service import CheckoutService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/create-checkout-session",
    response_model=CheckoutSessionResponse,
    responses={500: {"model": CheckoutErrorResponse}}
)
async def create_checkout_session(
    request: Request,
    checkout_service: CheckoutService = Depends(get_checkout_service)
):
    """
    Create a checkout session for the posted cart.

    **Body:** `{"items": [{id, name, price, image, quantity}, ...]}`

    **Returns:**
    - `{"url": ...}` redirect URL of the hosted payment page
    - `{"error": ..., "details": ...}` with status 500 on any failure;
      `details` is omitted in production
    """
    try:
        payload = await request.json()
    except ValueError:
        payload = None

    logger.info(f"Received checkout request: {payload}")

    result = await checkout_service.create_session(payload, str(request.base_url))

    if not result.success:
        logger.error(f"Error creating checkout session: {result.error}")
        body = {"error": result.error}
        if not settings.is_production and result.details:
            body["details"] = result.details
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)

    return CheckoutSessionResponse(url=result.url)


@router.get("/config")
async def get_checkout_config():
    """Publishable key used by Stripe.js in the browser."""
    return {"publishableKey": settings.STRIPE_PUBLISHABLE_KEY}
