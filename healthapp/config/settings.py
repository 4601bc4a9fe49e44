"""
Configuration Settings.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # App info
    app_name: str = "HealthApp"
    app_version: str = "1.0.0"
    debug: bool = True

    # Storage
    storage_type: str = "local"  # local, memory
    local_storage_path: str = "./data"
    export_path: str = "./exports"

    # Notifications
    notifications_enabled: bool = True

    # LLM Provider settings
    llm_provider: str = "auto"  # "auto", "openai" or "groq"
    llm_api_key: Optional[str] = None
    llm_model: Optional[str] = None  # uses provider default if not set
    llm_base_url: Optional[str] = None  # uses provider default if not set
    llm_timeout: float = 30.0
    llm_temperature: float = 0.7
    llm_max_tokens: int = 1000

    # Legacy key name used by the mobile build (still accepted)
    openai_api_key: Optional[str] = None

    # CORS
    cors_origins: list[str] = [
        "http://localhost:8081",
        "http://localhost:19006",
        "http://127.0.0.1:8081",
    ]

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file_path: str = "./logs/healthapp.log"
    log_storage_level: str = "INFO"  # level for healthapp.storage (write-behind and file store)
    log_file_enabled: bool = True
    log_console_enabled: bool = True
    log_json_format: bool = True  # JSON format for files, human-readable for console
    log_api_requests: bool = True  # Log all API requests/responses
    log_llm_calls: bool = True  # Log all LLM calls with token usage

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def resolved_llm_api_key(self) -> Optional[str]:
        """API key for the chat model, preferring LLM_API_KEY over the legacy name."""
        return self.llm_api_key or self.openai_api_key


settings = Settings()
