"""Renderer configuration loaded from the environment."""

from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent  # scheduler-renderer/
PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Renderer settings with validation.

    Values come from environment variables or the .env file. Only the API
    key is required; everything else has a sensible default for a local
    host installation.
    """

    # API server settings
    api_host: str = Field(default="127.0.0.1", min_length=1, description="API server host")
    api_port: int = Field(ge=1, le=65535, default=8000, description="API server port")
    render_api_key: str = Field(min_length=1, description="Bearer key the host uses to call the render API")

    # Host integration
    wwwroot: str = Field(default="http://localhost", pattern=r"^https?://", description="Host site root URL")
    component: str = Field(default="scheduler", min_length=1, description="Plugin component name")
    language: str = Field(default="en", min_length=2, description="Language of the string catalogue")
    lang_dir: Path = Field(default=PACKAGE_DIR / "lang", description="Directory holding <language>.json catalogues")

    # Date and time display
    timezone: str = Field(default="UTC", description="Default IANA timezone for slot times")
    date_format: str = Field(default="%A, %d %B %Y", description="strftime format for slot dates")
    time_format: str = Field(default="%I:%M %p", description="strftime format for slot times")

    # Security
    cors_origins: str = Field(default="http://localhost", description="Comma separated CORS origins")
    trusted_hosts: str = Field(default="localhost,127.0.0.1", description="Comma separated trusted hosts")

    model_config = SettingsConfigDict(
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @property
    def catalogue_path(self) -> Path:
        """Path of the string catalogue for the configured language."""
        return self.lang_dir / f"{self.language}.json"

    @field_validator("wwwroot", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Store wwwroot without a trailing slash so paths can be appended."""
        return v.rstrip("/")

    @field_validator("timezone", mode="after")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Ensure timezone is a known IANA zone name."""
        v = v.strip()
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"timezone must be a valid IANA timezone name: {v!r}") from e
        return v


# Singleton settings instance
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance for dependency injection.

    Returns:
        Cached Settings instance
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
