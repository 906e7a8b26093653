"""
Configuration settings for Subject Mailer.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development. GROQ_API_KEY has no default: a missing
key fails at startup, not at the first request.
"""

from pathlib import Path

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # === Application ===
    APP_NAME: str = "Subject Mailer"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"
    
    # === Groq Configuration ===
    GROQ_API_KEY: SecretStr
    GROQ_BASE_URL: str = "https://api.groq.com/openai/v1"
    GROQ_MODEL: str = "openai/gpt-oss-120b"
    GROQ_TIMEOUT: float = 30.0  # seconds
    LLM_MAX_RETRIES: int = 1  # 1 = single attempt, no connection-level retry
    
    # === LLM Generation Parameters ===
    CLASSIFY_TEMPERATURE: float = 0.1  # Near-deterministic classification
    DRAFT_TEMPERATURE: float = 0.1
    DRAFT_STREAM_TEMPERATURE: float = 0.1
    DRAFT_MAX_TOKENS: int = 1024
    
    # === Input Processing ===
    SUBJECT_MAX_LENGTH: int = 200  # chars, raw (untrimmed)
    
    # === Templates ===
    PROMPT_TEMPLATES_DIR: str = str(PACKAGE_DIR / "prompts")
    WEB_TEMPLATES_DIR: str = str(PACKAGE_DIR / "templates")
    
    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True
    
    @field_validator("GROQ_API_KEY")
    @classmethod
    def _api_key_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("GROQ_API_KEY must not be empty")
        return value


# Global settings instance
settings = Settings()
