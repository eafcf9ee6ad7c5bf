from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
from dotenv import load_dotenv
from functools import lru_cache

# Load environment variables
load_dotenv()

ENCRYPTION_KEY_BYTES = 32


class LogSettings(BaseSettings):
    """Logging configuration, readable before the full settings are valid."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore", frozen=True)

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE: Optional[str] = None


class Settings(LogSettings):
    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    ALLOWED_ORIGINS: str = "*"
    WORKERS: int = 1

    # GitHub OAuth
    GITHUB_CLIENT_ID: str
    GITHUB_CLIENT_SECRET: str
    GITHUB_REDIRECT_URI: str
    GITHUB_OAUTH_URL: str = "https://github.com"
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_SCOPES: str = "read:user user:email"

    # Supabase
    SUPABASE_URL: str
    SUPABASE_SERVICE_KEY: str
    TOKEN_TABLE: str = "user_tokens"

    # Security
    ENCRYPTION_KEY: str

    @field_validator("ENCRYPTION_KEY")
    @classmethod
    def check_encryption_key(cls, value: str) -> str:
        if len(value.encode("utf-8")) != ENCRYPTION_KEY_BYTES:
            raise ValueError(f"ENCRYPTION_KEY must be a {ENCRYPTION_KEY_BYTES}-byte string")
        return value

    @field_validator("GITHUB_CLIENT_ID", "GITHUB_CLIENT_SECRET", "GITHUB_REDIRECT_URI",
                     "SUPABASE_URL", "SUPABASE_SERVICE_KEY")
    @classmethod
    def check_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @property
    def cors_origins(self) -> List[str]:
        """Get CORS origins as list."""
        if self.ENVIRONMENT == "development":
            return ["*"]
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    @property
    def github_credentials_summary(self) -> dict:
        """Which GitHub credentials are configured, without their values."""
        return {
            "clientIdPresent": bool(self.GITHUB_CLIENT_ID),
            "clientSecretPresent": bool(self.GITHUB_CLIENT_SECRET),
            "redirectUri": self.GITHUB_REDIRECT_URI,
        }


@lru_cache()
def get_log_settings() -> LogSettings:
    """Get cached logging settings."""
    return LogSettings()


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
