"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Document extraction (Gemini generateContent)
    gemini_api_key: str = ""
    gemini_api_base: str = "https://generativelanguage.googleapis.com"
    gemini_model: str = "gemini-3-flash-preview"

    # Service
    service_name: str = "consigpro-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 120.0  # Multi-page PDFs take a while to analyse

    # Uploads / session state
    max_upload_mb: int = 20
    session_ttl_minutes: int = 60


settings = Settings()
