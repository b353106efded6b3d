from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Stripe Configuration
    STRIPE_SECRET_KEY: str = ""
    STRIPE_PUBLISHABLE_KEY: str = ""
    STRIPE_WEBHOOK_SECRET: str = ""

    # Payment mode: STRIPE (real API) | SIMULATION (local fake sessions)
    PAYMENT_MODE: str = "STRIPE"

    # Application Settings
    PORT: int = 3000
    ENVIRONMENT: str = "development"  # development | production
    BACKEND_CORS_ORIGINS: List[str] = ["*"]
    PROJECT_NAME: str = "Storefront"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    @property
    def is_production(self) -> bool:
        """Diagnostic details are only exposed outside production."""
        return self.ENVIRONMENT.lower() == "production"


# Global settings instance
settings = Settings()
