"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Application
    app_name: str = "todo-relay"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    # Comma-separated origins, or "*" to allow any origin
    cors_allowed_origins: str = "*"

    # LLM Configuration
    llm_provider: str = "gemini"  # Options: "gemini", "openai"

    # Gemini Configuration
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"

    # OpenAI Configuration
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    # Slack Configuration
    slack_webhook_url: str = ""
    slack_message_format: str = "blocks"  # Options: "blocks", "text"

    # Firebase Configuration
    firebase_service_account_key: str = ""  # base64-encoded service account JSON
    firebase_use_application_default: bool = True
    firebase_credentials_path: str = "serviceAccountKey.json"

    @property
    def allow_any_origin(self) -> bool:
        """True when the origin policy is permissive."""
        return self.cors_allowed_origins.strip() == "*"

    @property
    def allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into list."""
        if self.allow_any_origin or not self.cors_allowed_origins:
            return []
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
