# gemini_backend/shared.py
import logging
import os
import sys
from pathlib import Path
from typing import List

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gemini_backend.models.preferences import PREFERRED_MODELS

# --- Logging Setup ---
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
log = logging.getLogger(__name__)

# --- Determine Project Root ---
# shared.py lives in gemini_backend/, so ../ is the project root
BASE_DIR = Path(__file__).resolve().parent.parent


# --- Settings Model ---
class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    # Gemini
    GEMINI_API_KEY: SecretStr = Field(..., validation_alias='GEMINI_API_KEY')
    # v1beta returns 404 for some keys, so v1 is the default
    GEMINI_API_VERSION: str = "v1"
    GEMINI_API_BASE_URL: str = "https://generativelanguage.googleapis.com"
    PREFERRED_MODELS: List[str] = Field(default_factory=lambda: list(PREFERRED_MODELS))
    UPSTREAM_TIMEOUT_SECONDS: float = 30.0

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    STATIC_DIR: Path = BASE_DIR / "public"
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, '.env'),
        env_file_encoding='utf-8',
        extra='ignore'
    )

    @field_validator("GEMINI_API_KEY")
    @classmethod
    def key_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("GEMINI_API_KEY must not be blank")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def api_key(self) -> str:
        return self.GEMINI_API_KEY.get_secret_value()

    @property
    def models_hint(self) -> str:
        return f"Open http://localhost:{self.PORT}/_models to see what your key can use."


def mask_secret(secret: str) -> str:
    """Render a credential as its first six and last four characters."""
    if len(secret) <= 10:
        return "…"
    return f"{secret[:6]}…{secret[-4:]}"


def redact(text: str, secret: str) -> str:
    """Remove every occurrence of ``secret`` from ``text``."""
    if not secret:
        return text
    return text.replace(secret, "***")


def load_settings(**overrides) -> Settings:
    """
    Build the settings object once at startup.

    Exits the process when the configuration is missing or invalid, so a
    misconfigured server never starts accepting requests.
    """
    try:
        log.info("Loading configuration settings...")
        settings = Settings(**overrides)
    except Exception as e:
        log.critical(f"CRITICAL: Failed to load configuration settings: {e}")
        sys.exit(f"Configuration Error: missing or invalid GEMINI_API_KEY in .env (at project root) or environment. {e}")

    logging.getLogger().setLevel(settings.LOG_LEVEL)
    log.info("Configuration loaded successfully.")
    log.info(f"GEMINI_API_KEY loaded ({mask_secret(settings.api_key)})")
    log.info(f"Using Gemini Base URL: {settings.GEMINI_API_BASE_URL} ({settings.GEMINI_API_VERSION})")
    log.info(f"Preferred models: {settings.PREFERRED_MODELS}")
    return settings


__all__ = [
    "Settings",
    "load_settings",
    "mask_secret",
    "redact",
    "BASE_DIR",
]
