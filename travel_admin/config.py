import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_PROJECT_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PROJECT_DIR / ".env",
    ".env",
)
_SUPPORTED_LOCALES = frozenset({"ar", "en"})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Travel Agency Admin"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///data/travel_admin.db"

    # Authentication provider (Identity Toolkit compatible REST API)
    auth_api_key: str = ""
    auth_base_url: str = "https://identitytoolkit.googleapis.com/v1"
    auth_token_url: str = "https://securetoken.googleapis.com/v1/token"
    auth_timeout: float = 30.0

    # Durable sessions are written here when the actor asks to be remembered
    session_file: str = "data/session.json"

    # Object storage for profile images
    storage_dir: str = "storage"
    storage_base_url: str = ""               # empty → file:// URLs

    # Presentation
    locale: str = "ar"
    default_page_size: int = 10

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore — outbound HTTP
    log_level_repository: str = "INFO"       # entity repositories
    log_level_auth: str = "INFO"             # session context and auth client

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Fall back to the default locale when an unsupported one is configured."""
        if self.locale not in _SUPPORTED_LOCALES:
            _config_logger.warning(
                "Unsupported locale '%s', falling back to 'ar'", self.locale
            )
            object.__setattr__(self, "locale", "ar")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
