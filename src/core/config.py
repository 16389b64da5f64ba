"""
Application configuration.
All values come from environment variables (or ``.env``), one prefix per concern.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(env_prefix="APP_", env_file=".env", extra="ignore")

    name: str = "Community"
    version: str = "1.0.0"
    debug: bool = False
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    @property
    def cors_origins_list(self) -> list[str]:
        """CORS origins as a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_", env_file=".env", extra="ignore")

    level: str = "INFO"
    # "console" for colored development output, "json" for production
    format: str = "console"
    enqueue: bool = True


class I18nConfig(BaseSettings):
    """Localization of error messages.

    With an empty ``catalog_dir`` no catalog is installed and errors expose
    their rendered envelope as the localized message.
    """

    model_config = SettingsConfigDict(env_prefix="I18N_", env_file=".env", extra="ignore")

    default_locale: str = "en"
    catalog_dir: str = ""


class Settings:
    """Aggregate of all configuration sections."""

    def __init__(self) -> None:
        self.app = AppConfig()
        self.logging = LoggingConfig()
        self.i18n = I18nConfig()


@lru_cache
def get_settings() -> Settings:
    """Get the settings singleton (cached)."""
    return Settings()


settings = get_settings()
