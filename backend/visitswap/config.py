"""Application configuration using Pydantic settings."""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str
    auto_create_tables: bool = False

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    environment: str = "development"

    # Security
    secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 7

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:3001"
    frontend_url: str = "http://localhost:3000"

    # Redis (for ARQ worker)
    redis_url: str = "redis://127.0.0.1:6379"

    # Outbound email (HTTP email API)
    email_api_url: Optional[str] = None
    email_api_key: Optional[str] = None
    email_from: str = "VisitSwap <no-reply@visitswap.local>"

    # Credit rules
    visit_reward_credits: int = 1
    visit_duration_seconds: int = 40

    # Account tokens
    verification_token_ttl_hours: int = 48
    reset_token_ttl_minutes: int = 60

    # Ledger history paging
    history_default_limit: int = 50
    history_max_limit: int = 100

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
