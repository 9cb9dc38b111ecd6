"""
Application settings and configuration.

This module defines the configuration class for managing environment variables.
"""

import os


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Configuration class for managing environment variables."""

    TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")
    TELEGRAM_API_URL: str = os.getenv("TELEGRAM_API_URL", "https://api.telegram.org")
    WEBHOOK_URL: str = os.getenv("WEBHOOK_URL", "")
    WEBHOOK_SECRET: str = os.getenv("WEBHOOK_SECRET", "")
    REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", "10"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    KV_ENABLED: bool = _env_bool("KV_ENABLED")

    @classmethod
    def validate(cls) -> bool:
        """
        Validate configuration.

        Checks that all required environment variables are set.

        Returns:
            True if validation succeeds

        Raises:
            ValueError: If any required environment variables are missing
        """
        required = ["TELEGRAM_BOT_TOKEN", "WEBHOOK_SECRET"]
        missing = [var for var in required if not getattr(cls, var)]
        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")
        return True

