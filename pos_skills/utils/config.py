"""
Configuration module with environment-based settings.
Supports: development, production

PosSettings is the raw view of the process environment (and an optional
.env file). resolve_config() turns it into the immutable PosConfig the
request dispatcher runs on, failing fast on missing required values.
"""
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional
import os

from dotenv import dotenv_values, find_dotenv
from pydantic import ValidationError
from pydantic_settings import BaseSettings
import httpx

from pos_skills.errors import ConfigurationError

DEFAULT_BASE_URL = "https://pos.pages.fm/api/v1"
DEFAULT_TIMEOUT = 30.0

# Never taken from a .env file; a write must be confirmed by the caller
DOTENV_EXCLUDED = ("CONFIRM_WRITE",)


class PosSettings(BaseSettings):
    """Base configuration shared across all environments."""

    # Application
    POS_ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "WARNING"

    # Pancake POS
    POS_API_KEY: Optional[str] = None
    API_KEY: Optional[str] = None  # legacy name, used when POS_API_KEY is unset
    SHOP_ID: Optional[str] = None
    POS_BASE_URL: str = DEFAULT_BASE_URL
    POS_TIMEOUT: float = DEFAULT_TIMEOUT

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }


class DevelopmentConfig(PosSettings):
    """Development environment configuration."""
    POS_ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "DEBUG"


class ProductionConfig(PosSettings):
    """Production environment configuration."""
    POS_ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "WARNING"


@dataclass(frozen=True)
class PosConfig:
    """Resolved runtime configuration for a single invocation."""
    api_key: str
    shop_id: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT


def require_env(name: str, environ: Optional[Mapping[str, Optional[str]]] = None) -> str:
    """
    Return the value of environment variable `name`.

    Raises ConfigurationError naming the variable when it is unset or empty.
    """
    env = os.environ if environ is None else environ
    value = env.get(name) or ""
    if not value:
        raise ConfigurationError(name)
    return value


def load_environment() -> None:
    """
    Load a .env file from the working directory into os.environ.

    Variables already set in the process win, and CONFIRM_WRITE is never
    loaded from the file.
    """
    path = find_dotenv(usecwd=True)
    if not path:
        return
    for key, value in dotenv_values(path).items():
        if key in DOTENV_EXCLUDED or value is None:
            continue
        os.environ.setdefault(key, value)


@lru_cache()
def get_settings() -> PosSettings:
    """
    Factory function that returns the appropriate config based on POS_ENVIRONMENT.
    Cached, so the environment is read once per process.
    """
    env = os.getenv("POS_ENVIRONMENT", "production").lower()

    config_map = {
        "development": DevelopmentConfig,
        "dev": DevelopmentConfig,
        "production": ProductionConfig,
        "prod": ProductionConfig,
    }

    config_class = config_map.get(env, ProductionConfig)
    try:
        return config_class()
    except ValidationError as e:
        # Only typed fields can fail; report the first offending variable
        field = str(e.errors()[0]["loc"][0]) if e.errors() else "configuration"
        raise ConfigurationError(field, "has an invalid value") from e


def _check_base_url(base_url: str) -> str:
    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL as e:
        raise ConfigurationError("POS_BASE_URL", f"is not a valid URL ({e})") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError("POS_BASE_URL", "must be an absolute http(s) URL")
    return base_url


def resolve_config(settings: Optional[PosSettings] = None) -> PosConfig:
    """
    Build the immutable PosConfig, failing fast on missing required values.

    SHOP_ID is checked before the API key. POS_API_KEY wins over API_KEY.
    """
    values = (settings or get_settings()).model_dump()

    shop_id = require_env("SHOP_ID", values)

    try:
        api_key = require_env("POS_API_KEY", values)
    except ConfigurationError:
        if not values.get("API_KEY"):
            raise ConfigurationError("POS_API_KEY (or API_KEY)")
        api_key = values["API_KEY"]

    base_url = _check_base_url((values["POS_BASE_URL"] or DEFAULT_BASE_URL).rstrip("/"))

    if values["POS_TIMEOUT"] <= 0:
        raise ConfigurationError("POS_TIMEOUT", "must be a positive number of seconds")

    return PosConfig(
        api_key=api_key,
        shop_id=shop_id,
        base_url=base_url,
        timeout=values["POS_TIMEOUT"],
    )
