"""
API Configuration

Centralized settings for the FastAPI application.
API metadata is hardcoded, while environment-specific settings load from .env file.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


# Get the project root directory (one level up from api/)
PROJECT_ROOT = Path(__file__).parent.parent


class Settings(BaseSettings):
    """
    Application settings for the crowdfunding API

    API metadata (title, description, version) are hardcoded.
    Environment-specific settings are loaded from .env file.
    """

    # ============================================================================
    # API Metadata (hardcoded - versioned with code)
    # ============================================================================

    api_title: str = "Solana Crowdfunding API"
    api_description: str = (
        "Create, fund and withdraw from crowdfunding campaigns managed by the "
        "crowdfunding program on the Solana blockchain."
    )
    api_version: str = "1.0.0"
    API_V1_STR: str = "/api/v1"

    # ============================================================================
    # Environment Settings (loaded from .env)
    # ============================================================================

    environment: str = "development"  # development, staging, production
    api_port: int = 8000
    log_level: str = "INFO"

    admin_api_key: str = ""  # empty key rejects every request

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"), env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode"""
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode"""
        return self.environment.lower() == "production"


# ============================================================================
# Global settings instance
# ============================================================================

settings = Settings()
