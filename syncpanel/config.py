"""Application configuration."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from environment variables."""

    app_name: str = "Syncpanel Admin API"
    debug: bool = False
    api_v1_prefix: str = "/api/v1"
    cors_origins: str = "http://localhost:5173,http://127.0.0.1:5173"
    database_url: str = "sqlite:///./syncpanel.db"  # Use DATABASE_URL env for PostgreSQL
    # Admin API the panel talks to (settings document)
    settings_api_url: str = "http://localhost:8000/api/v1"
    settings_api_timeout: float = 15.0
    # Mailchimp
    mailchimp_api_path: str = "/3.0"
    mailchimp_timeout: float = 15.0
    mailchimp_list_count: int = 100
    # Subscriber sync display
    sync_poll_interval: float = 5.0  # seconds between schedule refreshes after a save
    last_sync_emphasis_minutes: int = 5
    subscribers_enabled: bool = True  # feature flag, panel warns when off

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
