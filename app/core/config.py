"""Configuration management for WiseBot Relay."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # In sandboxed environments, .env might not be accessible
    # Environment variables should be set directly
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # OpenAI configuration (required)
    OPENAI_API_KEY: str = Field(..., description="OpenAI API key")
    OPENAI_BASE_URL: str = Field(
        default="https://api.openai.com/v1", description="OpenAI API base URL"
    )
    OPENAI_TIMEOUT_SECONDS: float = Field(
        default=60.0, description="Timeout for a single upstream request"
    )

    # Environment
    RELAY_ENV: str = Field(default="dev", description="Environment: dev, staging, prod")
    PORT: int = Field(default=5050, description="HTTP listening port")
    CORS_ALLOW_ORIGINS: list[str] = Field(
        default=["*"], description="Origins allowed by the CORS middleware"
    )

    # Knowledge-base document
    KB_PDF_PATH: str | None = Field(
        default=None, description="PDF preloaded into the document cache at startup"
    )
    KB_MAX_CHARS: int = Field(
        default=50_000, description="Max document chars injected into a chat prompt"
    )
    KB_PREVIEW_CHARS: int = Field(default=200, description="Preview length returned on upload")
    KB_CONTACT_HINT: str = Field(
        default="the museum staff",
        description="Who the assistant refers users to when the document has no answer",
    )

    # Upload limits
    MAX_KB_UPLOAD_BYTES: int = Field(
        default=40 * 1024 * 1024, description="Max knowledge-base PDF upload size in bytes"
    )
    MAX_AUDIO_UPLOAD_BYTES: int = Field(
        default=25 * 1024 * 1024, description="Max audio upload size in bytes"
    )

    # Upstream models
    CHAT_MODEL: str = Field(default="gpt-4o-mini", description="Model for chat completions")
    TRANSCRIBE_MODEL: str = Field(
        default="gpt-4o-mini-transcribe", description="Model for speech-to-text"
    )
    TTS_MODEL: str = Field(default="gpt-4o-mini-tts", description="Model for text-to-speech")
    TTS_DEFAULT_VOICE: str = Field(
        default="alloy", description="Voice used when the caller does not pick one"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If required environment variables are missing
    """
    return Settings()
