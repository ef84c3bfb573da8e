"""Configuration settings for the Valorant abuse detector."""

from __future__ import annotations

import os
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from typing import List, Literal

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    postgres_db: str = Field(default="valorant_abusing_detector")
    postgres_user: str = Field(default="valorant_user")
    postgres_password: str = Field(default="dev_password")
    postgres_host: str = Field(default="postgres")
    postgres_port: int = Field(default=5432)

    @property
    def database_url(self) -> str:
        """Construct async database URL from components."""
        return f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"

    # Application Configuration
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000, ge=1, le=65535)

    # CORS Configuration
    cors_origins: str = Field(
        default="https://valorant-abusing-frontend.vercel.app,http://localhost:5173,http://localhost:3000"
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [
            origin.strip() for origin in self.cors_origins.split(",") if origin.strip()
        ]

    @property
    def environment(self) -> str:
        """Get current environment from ENVIRONMENT variable."""
        env = os.getenv("ENVIRONMENT", "").lower()
        return env if env in ["dev", "production"] else "dev"

    # HenrikDev API Configuration
    henrik_api_key: str = Field(
        default="",
        description="HenrikDev API key sent in the Authorization header (optional)",
    )
    henrik_base_url: str = Field(default="https://api.henrikdev.xyz")
    henrik_timeout_seconds: float = Field(default=15.0, gt=0)
    default_region: str = Field(default="kr")

    # Abuse detection thresholds
    abuse_enemy_threshold: int = Field(
        default=3,
        ge=1,
        description="Minimum encounters as enemy before an opponent can be flagged",
    )
    abuse_loss_ratio_threshold: float = Field(
        default=0.75,
        ge=0.0,
        le=1.0,
        description="Minimum share of encounters the subject lost",
    )
    abuse_treat_unknown_as_loss: bool = Field(
        default=True,
        description="Count team-less (unknown outcome) matches as losses",
    )
    abuse_rule: Literal["default", "legacy"] = Field(
        default="default",
        description="'legacy' uses the side-agnostic 5 encounters / 80% rule",
    )
    abuse_skip_malformed_matches: bool = Field(
        default=False,
        description="Drop matches without players/teams instead of keeping them",
    )
    abuse_max_avg_kda: float | None = Field(
        default=None,
        ge=0.0,
        description="Enable the low-KDA rule at this average KDA (off when unset)",
    )
    abuse_kda_min_encounters: int = Field(
        default=5,
        ge=1,
        description="Enemy encounters required before the low-KDA rule applies",
    )

    @field_validator("default_region")
    @classmethod
    def validate_region(cls, v: str) -> str:
        """Normalise the default region and reject unknown values.

        Raises:
            ValueError: If the region is not served by the HenrikDev API
        """
        from app.core.henrik_api.constants import Region

        value = v.strip().lower()
        valid = {region.value for region in Region}
        if value not in valid:
            raise ValueError(
                f"Unknown region '{v}'. Expected one of: {', '.join(sorted(valid))}"
            )
        return value

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix for environment variables
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


# Create a global settings instance lazily
settings: Settings | None = None


def get_global_settings() -> Settings:
    """Get or create the global settings instance."""
    global settings
    if settings is None:
        settings = get_settings()
    return settings
