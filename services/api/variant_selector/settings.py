"""Application settings via Pydantic Settings."""

from functools import lru_cache
import json

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Variant Selector API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # CORS
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        validation_alias=AliasChoices("CORS_ORIGINS", "ALLOWED_ORIGINS"),
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v: object) -> list[str]:
        """
        Accept either:
        - JSON array string: '["https://a.com","http://localhost:3000"]'
        - Comma-separated string: "https://a.com,http://localhost:3000"
        - Already-parsed list[str]
        """
        if v is None:
            return []
        if isinstance(v, list):
            return [str(x).strip() for x in v if str(x).strip()]
        if isinstance(v, str):
            s = v.strip()
            if not s:
                return []
            if s.startswith("["):
                try:
                    parsed = json.loads(s)
                except json.JSONDecodeError:
                    parsed = s.split(",")
                if isinstance(parsed, list):
                    return [str(x).strip() for x in parsed if str(x).strip()]
                return [str(parsed).strip()]
            return [part.strip() for part in s.split(",") if part.strip()]
        return [str(v).strip()] if str(v).strip() else []

    # Selector defaults (used when a request carries no config)
    selector_resolve_availability_conflict: bool = Field(
        default=True,
        validation_alias=AliasChoices("SELECTOR_RESOLVE_AVAILABILITY_CONFLICT"),
        description="Re-select the first available sibling when a selected value becomes unavailable",
    )
    selector_select_sold_out: bool = Field(
        default=False,
        validation_alias=AliasChoices("SELECTOR_SELECT_SOLD_OUT"),
        description="Keep sold-out values clickable in the view",
    )
    selector_hide_single_options_from_level: int | None = Field(
        default=None,
        validation_alias=AliasChoices("SELECTOR_HIDE_SINGLE_OPTIONS_FROM_LEVEL"),
        ge=0,
    )
    selector_strict_feed: bool = Field(
        default=False,
        validation_alias=AliasChoices("SELECTOR_STRICT_FEED"),
        description="Reject malformed variants with a load error instead of skipping them",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
