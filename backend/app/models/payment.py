"""Payment session and webhook result models."""

from typing import Optional, Dict, Any
from pydantic import BaseModel


class PaymentSession(BaseModel):
    """Hosted checkout session as seen by this system: an id and a redirect URL."""
    session_id: str
    url: str


class SessionResult(BaseModel):
    """Outcome of a checkout session creation attempt."""
    success: bool
    url: Optional[str] = None
    session_id: Optional[str] = None
    error: Optional[str] = None
    details: Optional[str] = None

    @classmethod
    def ok(cls, session: PaymentSession) -> "SessionResult":
        return cls(success=True, url=session.url, session_id=session.session_id)

    @classmethod
    def failed(cls, error: str, details: Optional[str] = None) -> "SessionResult":
        return cls(success=False, error=error, details=details)


class CustomerDetails(BaseModel):
    """Customer information extracted from a completed checkout session."""
    email: Optional[str] = None
    name: Optional[str] = None
    shipping: Optional[Dict[str, Any]] = None


class WebhookResult(BaseModel):
    """Outcome of receiving a webhook delivery."""
    success: bool
    message: str
    event_id: Optional[str] = None
    event_type: Optional[str] = None
    session_id: Optional[str] = None
    customer: Optional[CustomerDetails] = None
