"""
Dashboard settings.

Values come from the environment, after loading a local .env file if one
exists. Every setting has a default so a bare environment works against a
locally running service.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv, find_dotenv

from ci_dashboard.exceptions import ConfigurationError

_ = load_dotenv(find_dotenv())  # read local .env file

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "http://localhost:8000"
DEFAULT_LOGOUT_PATH = "/logout"
DEFAULT_REQUEST_TIMEOUT = 30.0


@dataclass(frozen=True)
class DashboardSettings:
    """Resolved dashboard configuration."""

    api_base: str = DEFAULT_API_BASE
    logout_path: str = DEFAULT_LOGOUT_PATH
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    docs_url: str = ""
    log_dir: Path = Path("logs")
    log_level: int = logging.INFO

    @classmethod
    def from_env(cls) -> "DashboardSettings":
        """
        Build settings from DASHBOARD_* environment variables.

        Raises:
            ConfigurationError: a numeric or level value cannot be parsed
        """
        raw_timeout = os.getenv("DASHBOARD_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError("DASHBOARD_REQUEST_TIMEOUT", "must be a number")
        if timeout <= 0:
            raise ConfigurationError("DASHBOARD_REQUEST_TIMEOUT", "must be positive")

        level_name = os.getenv("DASHBOARD_LOG_LEVEL", "INFO").upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise ConfigurationError("DASHBOARD_LOG_LEVEL", f"has unknown level {level_name!r}")

        logout_path = os.getenv("DASHBOARD_LOGOUT_PATH", DEFAULT_LOGOUT_PATH)
        if not logout_path.startswith("/"):
            logout_path = "/" + logout_path

        return cls(
            api_base=os.getenv("DASHBOARD_API_BASE", DEFAULT_API_BASE).rstrip("/"),
            logout_path=logout_path,
            request_timeout=timeout,
            docs_url=os.getenv("DASHBOARD_DOCS_URL", ""),
            log_dir=Path(os.getenv("DASHBOARD_LOG_DIR", "logs")),
            log_level=level,
        )


def get_settings() -> DashboardSettings:
    """Load settings from the current environment."""
    settings = DashboardSettings.from_env()
    logger.debug(f"Dashboard settings loaded: api_base={settings.api_base}")
    return settings
