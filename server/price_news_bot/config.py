"""
Price News Bot Configuration

Centralized configuration. All environment variables MUST be read here.
No os.getenv() calls allowed elsewhere.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

# Assets covered by every run
TRACKED_SYMBOLS: tuple[str, ...] = ("BTC", "ETH", "SOL")

DEFAULT_TREZA_API_URL = "https://beta.treza.xyz/api"
DEFAULT_AGENT_ID = "cc425065-b039-48b0-be14-f8afa0704357"
DEFAULT_USER_ID = "template"
DEFAULT_TIMEOUT_S = 60.0


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def _optional_env(name: str, default: str = "") -> str:
    """Get an optional environment variable with a default."""
    return os.environ.get(name, default)


def _optional_env_float(name: str, default: float) -> float:
    """Get an optional float environment variable with a default."""
    value = os.environ.get(name)
    if not value:
        return default
    try:
        parsed = float(value)
    except ValueError:
        raise ConfigurationError(f"Invalid number for {name}: {value}")
    if parsed <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return parsed


def _require(value: str, name: str, description: str) -> str:
    """Return value or raise ConfigurationError naming the missing variable."""
    if not value:
        raise ConfigurationError(
            f"Missing required environment variable: {name}\n"
            f"Description: {description}\n"
            f"Please set this in your .env file or environment."
        )
    return value


@dataclass(frozen=True)
class TrezaConfig:
    """Treza chat API connection configuration."""
    api_key: str
    base_url: str = DEFAULT_TREZA_API_URL
    agent_id: str = DEFAULT_AGENT_ID
    user_id: str = DEFAULT_USER_ID
    timeout_s: float = DEFAULT_TIMEOUT_S

    @property
    def chat_url(self) -> str:
        """Get the full chat endpoint URL."""
        return f"{self.base_url.rstrip('/')}/chat"

    def validate(self) -> None:
        _require(self.api_key, "TREZA_API_KEY", "Bearer token for the Treza chat API")


@dataclass(frozen=True)
class TwitterConfig:
    """X (Twitter) OAuth 1.0a user credentials."""
    api_key: str
    api_secret: str
    access_token: str
    access_token_secret: str

    def validate(self) -> None:
        _require(self.api_key, "TWITTER_API_KEY", "X app consumer key")
        _require(self.api_secret, "TWITTER_API_SECRET", "X app consumer secret")
        _require(self.access_token, "TWITTER_ACCESS_TOKEN", "X user access token")
        _require(
            self.access_token_secret,
            "TWITTER_ACCESS_TOKEN_SECRET",
            "X user access token secret",
        )


@dataclass(frozen=True)
class Settings:
    """Root configuration container."""
    treza: TrezaConfig
    twitter: TwitterConfig
    symbols: tuple[str, ...] = TRACKED_SYMBOLS
    log_level: str = "INFO"


def _load_settings() -> Settings:
    """Load all settings from environment variables.

    Credentials are optional here so that importing the package never fails;
    the entry point validates them before the run starts.
    """
    treza = TrezaConfig(
        api_key=_optional_env("TREZA_API_KEY", ""),
        base_url=_optional_env("TREZA_API_URL", DEFAULT_TREZA_API_URL),
        agent_id=_optional_env("TREZA_AGENT_ID", DEFAULT_AGENT_ID),
        user_id=_optional_env("TREZA_USER_ID", DEFAULT_USER_ID),
        timeout_s=_optional_env_float("TREZA_TIMEOUT_S", DEFAULT_TIMEOUT_S),
    )

    twitter = TwitterConfig(
        api_key=_optional_env("TWITTER_API_KEY", ""),
        api_secret=_optional_env("TWITTER_API_SECRET", ""),
        access_token=_optional_env("TWITTER_ACCESS_TOKEN", ""),
        access_token_secret=_optional_env("TWITTER_ACCESS_TOKEN_SECRET", ""),
    )

    return Settings(
        treza=treza,
        twitter=twitter,
        log_level=_optional_env("LOG_LEVEL", "INFO").upper(),
    )


settings = _load_settings()
