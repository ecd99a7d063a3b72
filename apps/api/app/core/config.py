from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    APP_NAME: str = "webhook-gateway-api"
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 9000
    ALLOWED_ORIGIN: str = "http://localhost:3000"

    # upstream webhooks, one per forwarding route
    N8N_WEBHOOK_URL: Optional[str] = None
    N8N_NOTES_WEBHOOK_URL: Optional[str] = None

    UPSTREAM_TIMEOUT_SECONDS: float = 240.0
    KEEP_ALIVE_TIMEOUT_SECONDS: int = 245  # must outlive the upstream timeout

    MAX_BODY_BYTES: int = 2 * 1024 * 1024

    RATE_LIMIT_WINDOW_SECONDS: float = 60.0
    ASK_RATE_LIMIT: int = 30
    NOTES_RATE_LIMIT: int = 20

settings = Settings()
