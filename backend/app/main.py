from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import traceback

from app.core.config import settings
from app.api.routes import checkout, webhook

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Storefront backend - hosted Stripe Checkout sessions and payment webhooks",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every incoming request."""
    logger.info(f"{request.method} {request.url.path}")
    return await call_next(request)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Turn unexpected failures into a generic 500 response."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    body = {"error": "Something went wrong!"}
    if not settings.is_production:
        body["details"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)


def log_environment_check() -> None:
    """Report which settings are present without logging their values."""
    logger.info("Environment Check:")
    for key in ("STRIPE_SECRET_KEY", "STRIPE_PUBLISHABLE_KEY", "STRIPE_WEBHOOK_SECRET"):
        logger.info(f"- {key}: {'Present' if getattr(settings, key) else 'Missing'}")
    logger.info(f"- PORT: {settings.PORT}")
    logger.info(f"- ENVIRONMENT: {settings.ENVIRONMENT}")
    logger.info(f"- PAYMENT_MODE: {settings.PAYMENT_MODE}")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Log configuration status on startup."""
    logger.info("Starting up storefront backend...")
    log_environment_check()
    logger.info(f"Stripe configuration status: {'OK' if settings.STRIPE_SECRET_KEY else 'Missing'}")


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.PROJECT_NAME,
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }


# Include routers
app.include_router(checkout.router, tags=["Checkout"])
app.include_router(webhook.router, tags=["Webhook"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
