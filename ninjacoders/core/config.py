"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here.
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

ROOT_DIR = Path.cwd()


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Site name used in page titles.
        version: Current application version string.
        debug: Enable debug mode. Must be False in production.
        environment: "development" or "production"; selects access log verbosity.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        rate_limit_default: Rate limit for the newsletter API.
        rate_limit_heavy: Rate limit for the photo upload API.
        database_url: SQLAlchemy URL of the product/cart store.
        seed_catalogue: Insert the default masterclasses into an empty store.
        cookie_secret: Key used to sign the session cookie.
        session_max_age: Session cookie lifetime in seconds.
        smtp_host: SMTP relay. Empty means mail is only logged.
        mail_from: Sender address for transactional mail.
        contest_upload_dir: Root of the year/month photo partitions.
        upload_tmp_dir: Where multipart uploads are spooled before the move.
        currency_symbol: Prefix for rendered prices.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "NinjaCoders"
    version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"
    rate_limit_default: str = "60/minute"
    rate_limit_heavy: str = "10/minute"

    database_url: str = f"sqlite:///{ROOT_DIR / 'data' / 'ninjacoders.db'}"
    seed_catalogue: bool = True

    cookie_secret: str = "change-me"
    session_max_age: int = 14 * 24 * 60 * 60

    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_use_tls: bool = True
    smtp_timeout: float = 10.0
    mail_from: str = "NinjaCoders <info@ninjacoders.dev>"

    contest_upload_dir: Path = ROOT_DIR / "public" / "contest-uploads"
    upload_tmp_dir: Optional[Path] = None

    currency_symbol: str = "€"
    host: str = "127.0.0.1"
    port: int = 3000

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


settings = Settings()
