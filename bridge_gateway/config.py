"""Configuration management for the Bridge gateway.

Centralizes all environment variable access for better testability and maintainability.
"""

import os
from typing import Optional

from bridge_gateway.core.retry_config import RetryConfig

DEFAULT_BRIDGE_URL = "https://api.bridge.xyz/v0"


def _int_env(name: str, default: int) -> int:
    """Read an integer env var, falling back to default when unset or malformed."""
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_env(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


class Config:
    """Application configuration loaded from environment variables."""

    # Bridge upstream
    @staticmethod
    def bridge_api_key() -> Optional[str]:
        """Get Bridge API key sent upstream as Api-Key."""
        return os.environ.get("BRIDGE_API_KEY")

    @staticmethod
    def bridge_base_url() -> str:
        """Get Bridge API base URL (without trailing slash)."""
        return os.environ.get("BRIDGE_API_URL", DEFAULT_BRIDGE_URL).rstrip("/")

    @staticmethod
    def bridge_environment() -> str:
        return os.environ.get("BRIDGE_ENVIRONMENT", "production")

    @staticmethod
    def request_timeout_seconds() -> float:
        """Per-attempt timeout for the upstream HTTP client."""
        return _float_env("BRIDGE_TIMEOUT_SECONDS", 30.0)

    @staticmethod
    def dispatch_deadline_seconds() -> Optional[float]:
        """Total time budget for one dispatch including retries (None = unbounded)."""
        return _float_env("BRIDGE_DEADLINE_SECONDS", None)

    @staticmethod
    def retry_config() -> RetryConfig:
        """Build RetryConfig from environment overrides."""
        defaults = RetryConfig()
        return RetryConfig(
            max_retries=_int_env("BRIDGE_MAX_RETRIES", defaults.max_retries),
            base_delay_ms=_int_env("BRIDGE_RETRY_BASE_DELAY_MS", defaults.base_delay_ms),
            max_delay_ms=_int_env("BRIDGE_RETRY_MAX_DELAY_MS", defaults.max_delay_ms),
        )

    # Gateway authentication
    @staticmethod
    def gateway_api_token() -> Optional[str]:
        """Get fixed gateway token expected in x-api-token header."""
        return os.environ.get("GATEWAY_API_TOKEN") or os.environ.get("MI_TOKEN_SECRETO")

    @staticmethod
    def jwt_secret() -> Optional[str]:
        """Get secret used to verify Bearer JWTs."""
        return os.environ.get("JWT_SECRET")

    @staticmethod
    def webhook_secret() -> Optional[str]:
        return os.environ.get("WEBHOOK_SECRET")

    # Rate limiting
    @staticmethod
    def rate_limit_max() -> int:
        """Maximum requests per window per client key."""
        return _int_env("RATE_LIMIT_MAX", 100)

    @staticmethod
    def rate_limit_window_ms() -> int:
        return _int_env("RATE_LIMIT_WINDOW_MS", 60000)

    # Logging
    @staticmethod
    def log_level() -> str:
        return os.environ.get("LOG_LEVEL", "INFO").upper()

    # Helper methods
    @staticmethod
    def auth_enabled() -> bool:
        """Auth is enforced when either a fixed token or a JWT secret is set."""
        return bool(Config.gateway_api_token() or Config.jwt_secret())

    @staticmethod
    def is_configured() -> bool:
        """Check if all required configuration is present."""
        return all([
            Config.bridge_api_key(),
        ])

    @staticmethod
    def get_missing_config() -> list[str]:
        """Get list of missing required configuration keys."""
        missing = []
        if not Config.bridge_api_key():
            missing.append("BRIDGE_API_KEY")
        return missing


# Singleton instance for easy access
config = Config()
