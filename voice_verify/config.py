#config.py
import os
import logging
from typing import Optional

from dotenv import load_dotenv
from pydantic import ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEVELOPMENT = "development"
PROVIDERS = ("messagebird", "twilio")


def load_environment(app_env: Optional[str] = None, dotenv_path: str = ".env") -> bool:
    """Load the local dotfile into os.environ in development mode only.

    Existing environment variables always win. Returns True when a dotfile
    was loaded.
    """
    app_env = (app_env or os.getenv("APP_ENV", DEVELOPMENT)).lower()
    if app_env != DEVELOPMENT:
        return False
    try:
        loaded = load_dotenv(dotenv_path, override=False)
    except OSError as e:
        raise ConfigurationError(f"Could not read {dotenv_path}: {e}") from e
    if loaded:
        logger.info(f"Loaded environment from {dotenv_path}")
    return loaded


class Settings(BaseSettings):
    # Environment only; the dotfile is handled by load_environment()
    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    # Application Settings
    APP_NAME: str = "Voice Verify"
    APP_VERSION: str = "1.0.0"
    APP_ENV: str = DEVELOPMENT
    DEBUG: bool = False

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Verification provider
    VERIFY_PROVIDER: str = "messagebird"
    PROVIDER_TIMEOUT_SECONDS: float = 10.0

    # MessageBird Settings
    MESSAGEBIRD_API_KEY: str = ""
    MESSAGEBIRD_BASE_URL: str = "https://rest.messagebird.com"

    # Twilio Settings
    TWILIO_ACCOUNT_SID: str = ""
    TWILIO_AUTH_TOKEN: str = ""
    TWILIO_VERIFY_SERVICE_SID: str = ""

    @model_validator(mode="after")
    def check_provider_credentials(self) -> "Settings":
        self.VERIFY_PROVIDER = self.VERIFY_PROVIDER.lower()
        if self.VERIFY_PROVIDER not in PROVIDERS:
            raise ValueError(f"VERIFY_PROVIDER must be one of {', '.join(PROVIDERS)}")
        if self.VERIFY_PROVIDER == "messagebird" and not self.MESSAGEBIRD_API_KEY:
            raise ValueError("MESSAGEBIRD_API_KEY is required")
        if self.VERIFY_PROVIDER == "twilio":
            missing = [
                name for name in ("TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "TWILIO_VERIFY_SERVICE_SID")
                if not getattr(self, name)
            ]
            if missing:
                raise ValueError(f"{', '.join(missing)} required for the twilio provider")
        return self

    @property
    def is_development(self) -> bool:
        return self.APP_ENV.lower() == DEVELOPMENT


def load_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as e:
        messages = "; ".join(err["msg"] for err in e.errors())
        raise ConfigurationError(f"Invalid configuration: {messages}") from e

