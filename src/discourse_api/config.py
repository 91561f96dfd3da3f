"""
Configuration management for the client.
"""

import logging
from typing import Optional

from pydantic import ConfigDict
from pydantic_settings import BaseSettings

DEFAULT_USERNAME = "system"
FORCED_GET_PARAMS = {"show_emails": "true"}


class ClientSettings(BaseSettings):
    model_config = ConfigDict(env_file=".env", env_prefix="DISCOURSE_", extra="ignore")

    host: str = "localhost"
    protocol: str = "https"
    api_key: Optional[str] = None
    sso_secret: Optional[str] = None
    timeout_seconds: float = 30
    default_username: str = DEFAULT_USERNAME
    legacy_content_type: bool = False

    debug_get: bool = False
    debug_write: bool = False
    log_level: str = "INFO"


def get_settings() -> ClientSettings:
    return ClientSettings()


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the client."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("discourse_api")
    logger.setLevel(log_level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name."""
    return logging.getLogger(f"discourse_api.{name}")
