from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Card Collection API"

    host: str = "0.0.0.0"
    port: int = 3000

    # Single allowed origin; "*" allows any
    cors_origin: str = "*"

    # debug, info, warning, error or none
    log_level: str = "info"

    # "production" hides internal error detail from clients
    environment: str = "development"

    max_body_bytes: int = 10 * 1024

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


settings = Settings()


# =============================================================================
# PAGINATION LIMITS
# =============================================================================

DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 10

# Largest page size a client may request
MAX_PAGE_LIMIT = 100
