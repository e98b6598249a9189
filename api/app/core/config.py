"""
Configuration module using Pydantic Settings.

Loads the retrieval backend address, the instruction preamble and the
gateway options from environment variables. Supports .env files for
local development.
"""

from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.services.prompt import SYSTEM_PROMPT


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # AutoRAG backend
    cloudflare_account_id: str = ""
    cloudflare_api_token: str = ""
    autorag_name: str = "shipment-tracking-proxy"
    autorag_base_url: str = "https://api.cloudflare.com/client/v4"
    autorag_timeout_seconds: float = 60.0

    # Conversation
    system_prompt: str = SYSTEM_PROMPT
    system_prompt_path: str = ""
    require_user_message: bool = True

    # Frontend
    static_dir: str = "public"

    # Tracing
    otel_exporter_otlp_endpoint: str = ""

    # App
    log_level: str = "INFO"
    allowed_origins: str = "http://localhost:3000"

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @model_validator(mode="after")
    def load_system_prompt_file(self) -> "Settings":
        """Replace system_prompt with the contents of system_prompt_path, once."""
        if self.system_prompt_path:
            try:
                self.system_prompt = Path(self.system_prompt_path).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise ValueError(
                    f"Cannot read system_prompt_path {self.system_prompt_path!r}: {e}"
                ) from e
        return self


def get_settings() -> Settings:
    """Factory for settings instance."""
    return Settings()
