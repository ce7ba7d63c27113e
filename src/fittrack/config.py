"""Runtime configuration and logging setup."""

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass

from dotenv import load_dotenv

from .errors import ConfigError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

DEFAULT_TIMEOUT = 10.0
DEFAULT_RECENT_LIMIT = 6


@dataclass(frozen=True)
class Settings:
    """Connection and display settings for the application."""

    store_url: str
    store_key: str
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"
    recent_limit: int = DEFAULT_RECENT_LIMIT

    @property
    def rest_url(self) -> str:
        """Base URL of the store's REST interface."""
        return f"{self.store_url.rstrip('/')}/rest/v1"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Load settings from environment variables.

        When no mapping is given, a ``.env`` file is loaded first and the
        process environment is used.

        Raises:
            ConfigError: If a required variable is missing or a value
                cannot be parsed.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        store_url = environ.get("FITTRACK_STORE_URL", "").strip()
        store_key = environ.get("FITTRACK_STORE_KEY", "").strip()

        missing = [
            name
            for name, value in (
                ("FITTRACK_STORE_URL", store_url),
                ("FITTRACK_STORE_KEY", store_key),
            )
            if not value
        ]
        if missing:
            raise ConfigError(f"Missing required setting(s): {', '.join(missing)}")

        try:
            timeout = float(environ.get("FITTRACK_TIMEOUT", DEFAULT_TIMEOUT))
            recent_limit = int(environ.get("FITTRACK_RECENT_LIMIT", DEFAULT_RECENT_LIMIT))
        except ValueError as e:
            raise ConfigError(f"Invalid numeric setting: {e}") from e

        if timeout <= 0:
            raise ConfigError("FITTRACK_TIMEOUT must be positive")
        if recent_limit < 1:
            raise ConfigError("FITTRACK_RECENT_LIMIT must be at least 1")

        return cls(
            store_url=store_url,
            store_key=store_key,
            timeout=timeout,
            log_level=environ.get("FITTRACK_LOG_LEVEL", "INFO").upper(),
            recent_limit=recent_limit,
        )


def configure_logging(level: str = "INFO", force: bool = False) -> None:
    """Configure root logging for the process.

    Later calls are ignored unless ``force`` is set.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stdout,
        force=force,
    )
