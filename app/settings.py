from pathlib import Path
from urllib.parse import urlsplit

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Prismic
    PRISMIC_API_ENDPOINT: str = "https://spacetraveling.cdn.prismic.io/api/v2"
    PRISMIC_ACCESS_TOKEN: str = ""
    PRISMIC_TIMEOUT_SECONDS: float = 10.0
    PRISMIC_REF_TTL_SECONDS: float = 30.0

    # Blog
    SITE_NAME: str = "SpaceTraveling"
    POSTS_PAGE_SIZE: int = 2
    READING_WORDS_PER_MINUTE: int = 200
    DISPLAY_TIMEZONE: str = "UTC"

    # Static pages
    REVALIDATE_SECONDS: int = 60
    PAGE_CACHE_MAX_ENTRIES: int = 256

    # Preview
    PREVIEW_COOKIE: str = "spacetraveling.preview"

    # Comments (utterances)
    UTTERANCES_REPO: str = ""
    UTTERANCES_ISSUE_TERM: str = "pathname"
    UTTERANCES_THEME: str = "github-dark"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def prismic_search_url(self) -> str:
        return f"{self.PRISMIC_API_ENDPOINT.rstrip('/')}/documents/search"

    @property
    def prismic_repository_host(self) -> str:
        """Host of the API endpoint, e.g. ``spacetraveling.cdn.prismic.io``."""
        return urlsplit(self.PRISMIC_API_ENDPOINT).hostname or ""

    @property
    def prismic_repository_name(self) -> str:
        return self.prismic_repository_host.split(".", 1)[0]


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings
