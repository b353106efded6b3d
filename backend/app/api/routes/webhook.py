from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse

from app.api.deps import get_webhook_service
from app.schemas.checkout import WebhookResponse
from app.services.webhook_service import WebhookService

router = APIRouter()


@router.post("/webhook", response_model=WebhookResponse)
async def stripe_webhook(
    request: Request,
    webhook_service: WebhookService = Depends(get_webhook_service)
):
    """
    Webhook endpoint for Stripe payment notifications.

    **Security:**
    - The `stripe-signature` header is verified over the raw body before parsing

    **Returns:**
    - `{"received": true}` once the event is accepted
    - 400 with `Webhook Error: <reason>` when verification fails
    """
    payload = await request.body()
    signature = request.headers.get("stripe-signature")

    result = await webhook_service.process_webhook(payload, signature)

    if not result.success:
        return PlainTextResponse(
            f"Webhook Error: {result.message}",
            status_code=status.HTTP_400_BAD_REQUEST
        )

    return WebhookResponse(received=True)
